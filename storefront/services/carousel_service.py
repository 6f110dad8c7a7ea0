import logging
from typing import Any, Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from storefront.core.exceptions import PersistenceError

# Layer 4: Data Access
from storefront.data_access.database import CAROUSEL_ITEMS, MongoConnectionPool
from storefront.data_access.documents import map_document, to_entities, to_entity, to_object_id

# Layer 3: Domain Entities
from storefront.domain.carousel_item import CarouselItem, CarouselItemInput


logger = logging.getLogger(__name__)

CAROUSEL_ID_PREFIX = "carousel-"

DEMO_CAROUSEL_ITEMS: list[dict[str, Any]] = [
    {
        "title": "Street Style",
        "category": "New Collection",
        "content": "Discover the latest trends from the street and make them your own. Effortless, chic, and uniquely you.",
        "imageSrc": "https://images.unsplash.com/photo-1492707892479-7bc8d5a44d70?w=800&auto=format&fit=crop&q=60",
        "videoSrc": None,
        "data-ai-hint": "fashion street",
    },
    {
        "title": "The Statement Bag",
        "category": "Accessories",
        "content": "Every detail matters. Find the perfect bag to complement your look and carry your world in style.",
        "imageSrc": "https://images.unsplash.com/photo-1548036328-c9fa89d123b5?w=800&auto=format&fit=crop&q=60",
        "videoSrc": None,
        "data-ai-hint": "handbag product",
    },
    {
        "title": "Timeless Elegance",
        "category": "Fine Jewelry",
        "content": "Adorn yourself with pieces that last a lifetime. Exquisite craftsmanship meets modern design.",
        "imageSrc": "https://images.unsplash.com/photo-1611652022417-a51415e91344?w=800&auto=format&fit=crop&q=60",
        "videoSrc": None,
        "data-ai-hint": "jewelry detail",
    },
    {
        "title": "Cinematic Moments",
        "category": "Brand Story",
        "content": "A showcase of our brand essence in motion. Experience the story behind our craft.",
        "imageSrc": "https://images.unsplash.com/photo-1601672439911-572af5dcf128?w=800&q=80",
        "videoSrc": "/hero.mp4",
        "data-ai-hint": "dark fashion",
    },
]

class CarouselService:
    """
    Persistence service for homepage carousel slides.

    Carousel ids carry the 'carousel-' prefix so they cannot be mistaken
    for product or category ids. When seeding is enabled and the collection
    is empty, listing the slides first inserts the demo slides so a fresh
    site has a homepage to show.
    """

    def __init__(self, pool: MongoConnectionPool, seed_on_empty: bool = True) -> None:
        """
        Args:
            pool (MongoConnectionPool): The process-wide document store handle.
            seed_on_empty (bool): Insert the demo slides when the collection is empty.
        """
        self.pool = pool
        self.seed_on_empty = seed_on_empty

    def _map_to_domain(self, doc: dict[str, Any]) -> CarouselItem:
        return CarouselItem.model_validate(map_document(doc, prefix=CAROUSEL_ID_PREFIX))

    # --- 1. READS (failure tolerant) ---

    def list_items(self) -> list[CarouselItem]:
        """
        Retrieves every slide ordered by title, seeding demo slides into an empty collection.

        Returns:
            list[CarouselItem]: The slides, or an empty list if the store is unavailable.
        """
        try:
            collection = self.pool.get_collection(CAROUSEL_ITEMS)
            docs = list(collection.find({}).sort("title", ASCENDING))

            if not docs and self.seed_on_empty:
                self.seed_demo_items()
                docs = list(collection.find({}).sort("title", ASCENDING))

            return to_entities(docs, CarouselItem, prefix=CAROUSEL_ID_PREFIX)
        except PyMongoError as e:
            logger.error(f"Error fetching carousel items: {e}")
            return []

    def seed_demo_items(self) -> None:
        """
        Inserts the demo slides that are not stored yet, keyed by title.

        Each slide is an upsert, so a second seeding pass (two first requests
        racing) does not duplicate the slides the first one already wrote.

        Raises:
            PyMongoError: If the store rejects the writes.
        """
        logger.info("Carousel collection is empty, seeding with demo data...")
        collection = self.pool.get_collection(CAROUSEL_ITEMS)
        for item in DEMO_CAROUSEL_ITEMS:
            fields = {k: v for k, v in item.items() if k != "title"}
            collection.update_one({"title": item["title"]}, {"$setOnInsert": fields}, upsert=True)

    def get_item_by_id(self, item_id: str) -> Optional[CarouselItem]:
        object_id = to_object_id(item_id, prefix=CAROUSEL_ID_PREFIX)
        if object_id is None:
            return None
        try:
            doc = self.pool.get_collection(CAROUSEL_ITEMS).find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Error fetching carousel item by id {item_id}: {e}")
            return None
        return to_entity(doc, CarouselItem, prefix=CAROUSEL_ID_PREFIX)

    def count_items(self) -> int:
        try:
            return self.pool.get_collection(CAROUSEL_ITEMS).count_documents({})
        except PyMongoError as e:
            logger.error(f"Error counting carousel items: {e}")
            return 0

    # --- 2. WRITES (failure loud) ---

    def create_item(self, item_in: CarouselItemInput) -> CarouselItem:
        """
        Persists a new slide.

        Raises:
            PyMongoError: If the store rejects the write.
            PersistenceError: If the inserted document cannot be read back.
        """
        collection = self.pool.get_collection(CAROUSEL_ITEMS)
        result = collection.insert_one(item_in.to_document())
        created = collection.find_one({"_id": result.inserted_id})
        if not created:
            raise PersistenceError("CarouselItem creation failed or document could not be retrieved after insert.")
        return self._map_to_domain(created)

    def update_item(self, item_id: str, updates: dict[str, Any]) -> Optional[CarouselItem]:
        object_id = to_object_id(item_id, prefix=CAROUSEL_ID_PREFIX)
        if object_id is None:
            return None

        payload = {k: v for k, v in updates.items() if k not in ("id", "_id")}
        doc = self.pool.get_collection(CAROUSEL_ITEMS).find_one_and_update(
            {"_id": object_id},
            {"$set": payload},
            return_document=ReturnDocument.AFTER,
        )
        return self._map_to_domain(doc) if doc else None

    def delete_item(self, item_id: str) -> bool:
        object_id = to_object_id(item_id, prefix=CAROUSEL_ID_PREFIX)
        if object_id is None:
            return False
        result = self.pool.get_collection(CAROUSEL_ITEMS).delete_one({"_id": object_id})
        return result.deleted_count > 0
