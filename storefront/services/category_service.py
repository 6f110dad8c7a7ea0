import logging
from typing import Any, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from storefront.core.exceptions import PersistenceError

# Layer 4: Data Access
from storefront.data_access.database import CATEGORIES, PRODUCTS, MongoConnectionPool
from storefront.data_access.documents import map_document, to_entities, to_entity, to_object_id

# Layer 3: Domain Entities
from storefront.domain.category import Category, CategoryInput
from storefront.domain.fields import slugify


logger = logging.getLogger(__name__)

class CategoryService:
    """
    Persistence service for product categories.

    Reads never raise: a store failure is logged and reported as an empty
    list or a missing category, so storefront pages can still render.
    Writes raise, so the calling action can tell the admin the change was
    not saved. The slug is owned by this service and always follows the name.
    """

    def __init__(self, pool: MongoConnectionPool) -> None:
        """
        Initializes the CategoryService with the shared connection pool.

        Args:
            pool (MongoConnectionPool): The process-wide document store handle.
        """
        self.pool = pool

    def _map_to_domain(self, doc: dict[str, Any]) -> Category:
        return Category.model_validate(map_document(doc))

    # --- 1. READS (failure tolerant) ---

    def list_categories(self) -> list[Category]:
        """
        Retrieves every category ordered by name.

        Returns:
            list[Category]: All categories, or an empty list if the store is unavailable.
        """
        try:
            docs = self.pool.get_collection(CATEGORIES).find({}).sort("name", ASCENDING)
            return to_entities(docs, Category)
        except PyMongoError as e:
            logger.error(f"Error fetching categories: {e}")
            return []

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        object_id = to_object_id(category_id)
        if object_id is None:
            return None
        try:
            doc = self.pool.get_collection(CATEGORIES).find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Error fetching category by id {category_id}: {e}")
            return None
        return to_entity(doc, Category)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        """
        Retrieves the category served at /category/<slug>.

        Args:
            slug (str): The URL slug.

        Returns:
            Optional[Category]: The category, or None if unknown or the store is unavailable.
        """
        try:
            doc = self.pool.get_collection(CATEGORIES).find_one({"slug": slug})
        except PyMongoError as e:
            logger.error(f"Error fetching category by slug {slug}: {e}")
            return None
        return to_entity(doc, Category)

    def count_categories(self) -> int:
        try:
            return self.pool.get_collection(CATEGORIES).count_documents({})
        except PyMongoError as e:
            logger.error(f"Error counting categories: {e}")
            return 0

    # --- 2. WRITES (failure loud) ---

    def create_category(self, category_in: CategoryInput) -> Category:
        """
        Persists a new category with its derived slug.

        Args:
            category_in (CategoryInput): The validated form data.

        Returns:
            Category: The stored category including its generated id and slug.

        Raises:
            PyMongoError: If the store rejects the write.
            PersistenceError: If the inserted document cannot be read back.
        """
        collection = self.pool.get_collection(CATEGORIES)
        document = {
            "name": category_in.name,
            "description": category_in.description,
            "slug": category_in.get_slug(),
        }

        result = collection.insert_one(document)
        created = collection.find_one({"_id": result.inserted_id})
        if not created:
            raise PersistenceError("Category creation failed or document could not be retrieved after insert.")

        logger.info(f"Category '{category_in.name}' created with slug '{document['slug']}'.")
        return self._map_to_domain(created)

    def update_category(self, category_id: str, updates: dict[str, Any]) -> Optional[Category]:
        """
        Applies a partial update; a new name also moves the slug.

        Args:
            category_id (str): The id of the category to update.
            updates (dict[str, Any]): Fields to set ('name' and/or 'description').

        Returns:
            Optional[Category]: The updated category, or None if it does not exist.

        Raises:
            PyMongoError: If the store rejects the write.
        """
        object_id = to_object_id(category_id)
        if object_id is None:
            return None

        payload = {k: v for k, v in updates.items() if k not in ("id", "_id", "slug")}
        if payload.get("name"):
            payload["slug"] = slugify(payload["name"])

        doc = self.pool.get_collection(CATEGORIES).find_one_and_update(
            {"_id": object_id},
            {"$set": payload},
            return_document=ReturnDocument.AFTER,
        )
        return self._map_to_domain(doc) if doc else None

    def delete_category(self, category_id: str) -> bool:
        """
        Deletes a category and prunes its id from every product.

        The two steps are separate single-collection writes. If the process
        dies between them, products keep a dangling id until the next cleanup.

        Args:
            category_id (str): The id of the category to delete.

        Returns:
            bool: True if a category was removed.

        Raises:
            PyMongoError: If either write fails.
        """
        object_id = to_object_id(category_id)
        if object_id is None:
            return False

        result = self.pool.get_collection(CATEGORIES).delete_one({"_id": object_id})
        if not result.deleted_count:
            return False

        pruned = self.pool.get_collection(PRODUCTS).update_many(
            {"categoryIds": category_id},
            {"$pull": {"categoryIds": category_id}},
        )
        logger.info(f"Category {category_id} deleted; pruned from {pruned.modified_count} product(s).")
        return True
