import logging
from typing import Any, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from storefront.core.exceptions import PersistenceError

# Layer 4: Data Access
from storefront.data_access.database import PRODUCTS, MongoConnectionPool
from storefront.data_access.documents import map_document, to_entities, to_entity, to_object_id

# Layer 3: Domain Entities
from storefront.domain.product import Product, ProductInput


logger = logging.getLogger(__name__)

class ProductService:
    """
    Persistence service for products.

    Products are stored with their category ids as plain strings, so a
    product can be listed under a category without joining collections.
    """

    def __init__(self, pool: MongoConnectionPool) -> None:
        self.pool = pool

    def _map_to_domain(self, doc: dict[str, Any]) -> Product:
        return Product.model_validate(map_document(doc))

    # --- 1. READS (failure tolerant) ---

    def list_products(self, limit: Optional[int] = None) -> list[Product]:
        """
        Retrieves products ordered by name.

        Args:
            limit (Optional[int]): Maximum number of products to return. Defaults to all.

        Returns:
            list[Product]: The products, or an empty list if the store is unavailable.
        """
        try:
            cursor = self.pool.get_collection(PRODUCTS).find({}).sort("name", ASCENDING)
            if limit:
                cursor = cursor.limit(limit)
            return to_entities(cursor, Product)
        except PyMongoError as e:
            logger.error(f"Error fetching products: {e}")
            return []

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        object_id = to_object_id(product_id)
        if object_id is None:
            return None
        try:
            doc = self.pool.get_collection(PRODUCTS).find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Error fetching product by id {product_id}: {e}")
            return None
        return to_entity(doc, Product)

    def get_products_by_category_id(self, category_id: str) -> list[Product]:
        """
        Retrieves the products listed under a category, ordered by name.

        Args:
            category_id (str): The category id to look for in each product's categoryIds.

        Returns:
            list[Product]: Matching products, or an empty list if the store is unavailable.
        """
        try:
            cursor = self.pool.get_collection(PRODUCTS).find({"categoryIds": category_id}).sort("name", ASCENDING)
            return to_entities(cursor, Product)
        except PyMongoError as e:
            logger.error(f"Error fetching products by categoryId {category_id}: {e}")
            return []

    def count_products(self) -> int:
        try:
            return self.pool.get_collection(PRODUCTS).count_documents({})
        except PyMongoError as e:
            logger.error(f"Error counting products: {e}")
            return 0

    # --- 2. WRITES (failure loud) ---

    def create_product(self, product_in: ProductInput) -> Product:
        """
        Persists a new product.

        Args:
            product_in (ProductInput): The validated form data.

        Returns:
            Product: The stored product including its generated id.

        Raises:
            PyMongoError: If the store rejects the write.
            PersistenceError: If the inserted document cannot be read back.
        """
        collection = self.pool.get_collection(PRODUCTS)
        result = collection.insert_one(product_in.to_document())
        created = collection.find_one({"_id": result.inserted_id})
        if not created:
            raise PersistenceError("Product creation failed or document could not be retrieved after insert.")
        return self._map_to_domain(created)

    def update_product(self, product_id: str, updates: dict[str, Any]) -> Optional[Product]:
        """
        Applies a partial update to a product.

        Args:
            product_id (str): The id of the product to update.
            updates (dict[str, Any]): Stored field names mapped to their new values.

        Returns:
            Optional[Product]: The updated product, or None if it does not exist.

        Raises:
            PyMongoError: If the store rejects the write.
        """
        object_id = to_object_id(product_id)
        if object_id is None:
            return None

        payload = {k: v for k, v in updates.items() if k not in ("id", "_id")}
        doc = self.pool.get_collection(PRODUCTS).find_one_and_update(
            {"_id": object_id},
            {"$set": payload},
            return_document=ReturnDocument.AFTER,
        )
        return self._map_to_domain(doc) if doc else None

    def delete_product(self, product_id: str) -> bool:
        object_id = to_object_id(product_id)
        if object_id is None:
            return False
        result = self.pool.get_collection(PRODUCTS).delete_one({"_id": object_id})
        return result.deleted_count > 0
