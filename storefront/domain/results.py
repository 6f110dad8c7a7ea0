from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class ActionStatus(str, Enum):
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"
    NOT_FOUND = "not_found"
    FAILED = "failed"


HTTP_STATUS = {
    ActionStatus.SUCCEEDED: 200,
    ActionStatus.REJECTED: 400,
    ActionStatus.NOT_FOUND: 404,
    ActionStatus.FAILED: 500,
}


class ActionResult(BaseModel):
    """
    The uniform outcome of an admin or storefront mutation.

    Success carries a confirmation message. Failure carries a human-readable
    error and, for rejected input, the per-field messages keyed by form field
    name. The terminal status is kept on the object for the HTTP layer but is
    not part of the serialised payload.
    """

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    errors: Optional[dict[str, list[str]]] = None
    status: ActionStatus = Field(ActionStatus.SUCCEEDED, exclude=True)

    @classmethod
    def ok(cls, message: str) -> "ActionResult":
        return cls(success=True, message=message)

    @classmethod
    def rejected(cls, error: str, errors: dict[str, list[str]]) -> "ActionResult":
        return cls(success=False, error=error, errors=errors, status=ActionStatus.REJECTED)

    @classmethod
    def not_found(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error, status=ActionStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error, status=ActionStatus.FAILED)

    @property
    def http_status(self) -> int:
        return HTTP_STATUS[self.status]

    def to_payload(self) -> dict[str, Any]:
        """Serialises the result as sent to the admin forms."""
        return self.model_dump(exclude_none=True)
