import logging
from typing import Any

from pydantic import ValidationError

from storefront.domain.forms import field_errors
from storefront.domain.inquiry import HostnameRequest, InquiryInput
from storefront.domain.results import ActionResult


logger = logging.getLogger(__name__)

def submit_inquiry(values: dict[str, Any]) -> ActionResult:
    """Validates a contact-form inquiry and records it in the log.

    Inquiries are not persisted; the log is the hand-off to whoever answers them.
    """
    try:
        inquiry = InquiryInput.model_validate(values)
    except ValidationError as e:
        return ActionResult.rejected("Invalid data.", field_errors(e))

    logger.info(f"New Inquiry: {inquiry.model_dump(by_alias=True, exclude_none=True)}")
    return ActionResult.ok("Thank you for your message. We will get back to you soon.")


def request_new_hostname(hostname: str) -> ActionResult:
    """
    Logs an admin request to allow images from another remote host.

    Allowed image hosts are part of the deployed configuration, so the
    request only notifies the operators.

    Args:
        hostname (str): The host to allow, e.g. 'images.example.com'.

    Returns:
        ActionResult: Success with instructions, or the field errors.
    """
    try:
        request = HostnameRequest(hostname=hostname)
    except ValidationError as e:
        return ActionResult.rejected("Invalid hostname format.", field_errors(e))

    logger.info(f"ADMIN ACTION: New hostname requested for approval: {request.hostname}")
    logger.info("IMPORTANT: This hostname must be manually added to the image host allow-list and the server restarted.")

    return ActionResult.ok(
        f"Request for hostname '{request.hostname}' has been logged. "
        "A developer needs to manually update the configuration and restart the server."
    )
