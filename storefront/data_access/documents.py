import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, TypeVar

from bson import ObjectId
from pydantic import BaseModel, ValidationError


logger = logging.getLogger(__name__)

E = TypeVar("E", bound=BaseModel)


def to_object_id(entity_id: str, prefix: str = "") -> Optional[ObjectId]:
    """
    Translates an external entity id back to the document's ObjectId.

    Args:
        entity_id (str): The id as exposed to callers, e.g. 'carousel-665f...'.
        prefix (str): The type prefix the id must carry, empty for none.

    Returns:
        Optional[ObjectId]: The ObjectId, or None when the id cannot belong
        to a stored document (wrong prefix or malformed hex).
    """
    if not entity_id or not entity_id.startswith(prefix):
        return None
    raw = entity_id[len(prefix):]
    return ObjectId(raw) if ObjectId.is_valid(raw) else None


def map_document(doc: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Replaces MongoDB's _id with the external string id."""
    mapped = dict(doc)
    object_id = mapped.pop("_id")
    mapped["id"] = f"{prefix}{object_id}"
    return mapped


def to_entity(doc: Optional[Mapping[str, Any]], model: type[E], prefix: str = "") -> Optional[E]:
    """
    Maps a document read from the store to its entity.

    Documents written outside this service (legacy imports, manual edits)
    may not fit the entity any more; those are logged and read as absent.

    Args:
        doc (Optional[Mapping[str, Any]]): The stored document, or None.
        model (type[E]): The entity model.
        prefix (str): The type prefix of the external id.

    Returns:
        Optional[E]: The entity, or None when there is no usable document.
    """
    if doc is None:
        return None
    try:
        return model.model_validate(map_document(doc, prefix))
    except ValidationError as e:
        logger.warning(f"Skipping malformed {model.__name__} document {doc.get('_id')}: {e}")
        return None


def to_entities(docs: Iterable[Mapping[str, Any]], model: type[E], prefix: str = "") -> list[E]:
    """Maps every usable document to its entity, skipping malformed ones."""
    entities = (to_entity(doc, model, prefix) for doc in docs)
    return [e for e in entities if e is not None]
