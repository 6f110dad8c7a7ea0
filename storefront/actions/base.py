import logging
from collections.abc import Iterable
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from storefront.core.revalidation import PageCache
from storefront.domain.forms import FormInput, field_errors, normalize_form
from storefront.domain.results import ActionResult


logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

class BaseActions:
    """Shared plumbing for the admin mutations.

    A mutation moves through: validate the submitted form, persist inside a
    failure boundary, then revalidate the site paths that show the entity.
    Subclasses supply the entity label and the persistence calls.
    """

    entity_label = "item"
    list_fields: tuple[str, ...] = ()

    def __init__(self, page_cache: PageCache) -> None:
        self.page_cache = page_cache

    def validate(self, model: type[M], form: FormInput, action: str) -> tuple[Optional[M], Optional[ActionResult]]:
        """
        Validates a submitted form against an input model.

        Args:
            model (type[M]): The pydantic input model.
            form (FormInput): The raw submitted form.
            action (str): Name of the calling action, for the log.

        Returns:
            tuple: (validated input, None) on success, (None, rejected result) otherwise.
        """
        data = normalize_form(form, self.list_fields)
        try:
            return model.model_validate(data), None
        except ValidationError as e:
            errors = field_errors(e)
            logger.warning(f"Validation errors ({action}): {errors}")
            return None, ActionResult.rejected(f"Invalid {self.entity_label} data.", errors)

    def failed(self, verb: str, exc: Exception) -> ActionResult:
        logger.error(f"Failed to {verb} {self.entity_label}: {exc}", exc_info=exc)
        return ActionResult.failed(f"Failed to {verb} {self.entity_label}.")

    def not_found(self, entity_id: str) -> ActionResult:
        logger.warning(f"{self.entity_label.capitalize()} {entity_id} not found.")
        return ActionResult.not_found(f"{self.entity_label.capitalize()} not found.")

    def revalidate(self, paths: Iterable[str], layouts: Iterable[str] = ()) -> None:
        """Evicts the given site paths, and everything below each layout path."""
        for path in paths:
            self.page_cache.revalidate_path(path)
        for path in layouts:
            self.page_cache.revalidate_path(path, layout=True)
