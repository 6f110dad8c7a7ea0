from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from .fields import slugify


class Category(BaseModel):
    """
    The stored representation of a product Category.

    Categories group products on the storefront and are reachable by their
    slug (e.g. /category/summer-dresses). The slug is always derived from
    the current name and is never edited directly.

    Attributes:
        id (str): The opaque identifier assigned at creation.
        name (str): The display name of the category.
        slug (str): URL-safe identifier derived from the name.
        description (Optional[str]): A short description shown on the category page.
    """

    id: str = Field(..., description="Opaque identifier assigned at creation")
    name: str = Field(..., description="Display name of the category")
    slug: str = Field(..., description="URL-friendly identifier derived from the name")
    description: Optional[str] = Field(None, description="Short description")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "665f1c2ab1e4d2a9c0f3e811",
                "name": "Summer Dresses",
                "slug": "summer-dresses",
                "description": "Light fabrics for warm days."
            }
        }
    }


class CategoryInput(BaseModel):
    """
    Validated form input for creating or updating a Category.

    Attributes:
        name (str): The display name, at least 2 characters.
        description (Optional[str]): Optional free text; blank input is stored as absent.
    """

    name: str = Field(..., description="Display name of the category")
    description: Optional[str] = Field(None, description="Short description")

    @field_validator('name')
    @classmethod
    def name_min_length(cls, v: str) -> str:
        if len(v) < 2:
            raise PydanticCustomError("string_too_short", "Category name must be at least 2 characters")
        return v

    @field_validator('description')
    @classmethod
    def blank_description_is_absent(cls, v: Optional[str]) -> Optional[str]:
        return v if v else None

    def get_slug(self) -> str:
        """
        Generates the slug the category will be stored under.

        Returns:
            str: The slug derived from the name.
        """
        return slugify(self.name)
