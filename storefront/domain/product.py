import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from .fields import PLACEHOLDER_IMAGE_PREFIX, is_absolute_url, split_tags


class Product(BaseModel):
    """
    The stored representation of a Product.

    Products reference categories by id only. Those references are not
    checked against existing categories, and deleting a category prunes
    its id from every product instead of deleting the product.

    Attributes:
        id (str): The opaque identifier assigned at creation.
        name (str): The product name.
        description (str): Full product description.
        price (float): Unit price, always positive.
        image_url (str): Absolute URL of the product image.
        category_ids (list[str]): Ids of the categories the product is listed under.
        tags (list[str]): Free-text search tags.
        data_ai_hint (Optional[str]): Keywords used to search a fallback image.
    """

    id: str = Field(..., description="Opaque identifier assigned at creation")
    name: str = Field(..., description="Name of the product")
    description: str = Field(..., description="Full product description")
    price: float = Field(..., description="Unit price", gt=0)
    image_url: str = Field(..., alias="imageUrl", description="Absolute image URL")
    category_ids: list[str] = Field(default_factory=list, alias="categoryIds")
    tags: list[str] = Field(default_factory=list)
    data_ai_hint: Optional[str] = Field(None, alias="data-ai-hint")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "665f1c2ab1e4d2a9c0f3e812",
                "name": "Linen Wrap Dress",
                "description": "A breathable linen dress with a tie waist.",
                "price": 89.5,
                "imageUrl": "https://placehold.co/600x600.png",
                "categoryIds": ["665f1c2ab1e4d2a9c0f3e811"],
                "tags": ["linen", "summer"],
                "data-ai-hint": "linen dress"
            }
        }
    }


class ProductInput(BaseModel):
    """
    Validated form input for creating or updating a Product.

    Form submissions carry every value as a string, so price is coerced to a
    number and tags arrive as one comma-separated string that is split into a
    cleaned list while validating.
    """

    name: str
    description: str
    price: float
    image_url: str = Field(..., alias="imageUrl")
    category_ids: list[str] = Field(..., alias="categoryIds")
    tags: list[str] = Field(default_factory=list)
    data_ai_hint: Optional[str] = Field(None, alias="data-ai-hint")

    model_config = {"populate_by_name": True}

    @field_validator('name')
    @classmethod
    def name_min_length(cls, v: str) -> str:
        if len(v) < 3:
            raise PydanticCustomError("string_too_short", "Product name must be at least 3 characters")
        return v

    @field_validator('description')
    @classmethod
    def description_min_length(cls, v: str) -> str:
        if len(v) < 10:
            raise PydanticCustomError("string_too_short", "Description must be at least 10 characters")
        return v

    @field_validator('price', mode='before')
    @classmethod
    def coerce_positive_price(cls, v: Any) -> float:
        """
        Coerces the submitted price to a positive number.

        Args:
            v (Any): The raw price, usually a string such as '19.99'.

        Returns:
            float: The numeric price.

        Raises:
            PydanticCustomError: If the value is not a number or is not above zero.
        """
        try:
            price = float(v)
        except (TypeError, ValueError):
            raise PydanticCustomError("float_parsing", "Price must be a valid number")
        if not math.isfinite(price):
            raise PydanticCustomError("finite_number", "Price must be a valid number")
        if not price > 0:
            raise PydanticCustomError("greater_than", "Price must be a positive number")
        return price

    @field_validator('image_url', mode='before')
    @classmethod
    def strip_image_url(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator('image_url')
    @classmethod
    def image_url_well_formed(cls, v: str) -> str:
        if not (is_absolute_url(v) or v.startswith(PLACEHOLDER_IMAGE_PREFIX)):
            raise PydanticCustomError(
                "url_parsing", "Must be a valid URL. Example: https://example.com/image.png"
            )
        return v

    @field_validator('category_ids')
    @classmethod
    def at_least_one_category(cls, v: list[str]) -> list[str]:
        if not v:
            raise PydanticCustomError("too_short", "At least one category is required")
        return list(dict.fromkeys(v))

    @field_validator('tags', mode='before')
    @classmethod
    def split_tag_string(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return split_tags(v)
        if isinstance(v, list):
            return [t.strip() for t in v if isinstance(t, str) and t.strip()]
        return v

    @field_validator('data_ai_hint')
    @classmethod
    def blank_hint_is_absent(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    def to_document(self) -> dict[str, Any]:
        """Returns the fields as stored in the products collection."""
        return self.model_dump(by_alias=True)
