from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError


class InquiryInput(BaseModel):
    """
    A message sent through the storefront contact form.

    When the visitor arrives from a product page the form carries the product
    id, so the inquiry can be traced back to that product.

    Attributes:
        name (str): The sender's name.
        email (EmailStr): The sender's reply address.
        subject (str): Subject line, e.g. 'Inquiry about: Linen Wrap Dress'.
        message (str): The message body.
        product_id (Optional[str]): The product the inquiry is about.
    """

    name: str = Field(..., description="Sender name")
    email: EmailStr = Field(..., description="Reply address")
    subject: str = Field(..., description="Subject line")
    message: str = Field(..., description="Message body")
    product_id: Optional[str] = Field(None, alias="productId")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "subject": "Inquiry about: Linen Wrap Dress",
                "message": "Is this dress available in a size 10?",
                "productId": "665f1c2ab1e4d2a9c0f3e812"
            }
        }
    }

    @field_validator('name')
    @classmethod
    def name_min_length(cls, v: str) -> str:
        if len(v) < 2:
            raise PydanticCustomError("string_too_short", "Name must be at least 2 characters.")
        return v

    @field_validator('subject')
    @classmethod
    def subject_min_length(cls, v: str) -> str:
        if len(v) < 5:
            raise PydanticCustomError("string_too_short", "Subject must be at least 5 characters.")
        return v

    @field_validator('message')
    @classmethod
    def message_min_length(cls, v: str) -> str:
        if len(v) < 10:
            raise PydanticCustomError("string_too_short", "Message must be at least 10 characters.")
        return v


class HostnameRequest(BaseModel):
    """An admin request to allow images from a new remote host."""

    hostname: str = Field(..., description="Host to allow, e.g. images.example.com")

    @field_validator('hostname')
    @classmethod
    def hostname_min_length(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise PydanticCustomError("string_too_short", "Hostname must be valid (e.g., example.com).")
        return v
