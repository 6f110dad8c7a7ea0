from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator
from pydantic_core import PydanticCustomError

from .fields import is_absolute_url, is_site_path


class CarouselItem(BaseModel):
    """
    A slide of the homepage carousel.

    Carousel items are standalone content: the category is a display label,
    not a reference to a Category. A slide shows its video when one is set
    and falls back to the image otherwise.

    Attributes:
        id (str): Identifier carrying the 'carousel-' prefix.
        title (str): Headline of the slide.
        category (str): Display label shown above the headline.
        content (str): Body text.
        image_src (Optional[str]): Image URL or site path.
        video_src (Optional[str]): Video URL or site path.
        data_ai_hint (Optional[str]): Keywords used to search a fallback image.
    """

    id: str
    title: str
    category: str
    content: str
    image_src: Optional[str] = Field(None, alias="imageSrc")
    video_src: Optional[str] = Field(None, alias="videoSrc")
    data_ai_hint: Optional[str] = Field(None, alias="data-ai-hint")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": "carousel-665f1c2ab1e4d2a9c0f3e813",
                "title": "Street Style",
                "category": "New Collection",
                "content": "Discover the latest trends from the street.",
                "imageSrc": "https://images.unsplash.com/photo-1492707892479-7bc8d5a44d70",
                "videoSrc": None,
                "data-ai-hint": "fashion street"
            }
        }
    }

    def primary_media(self) -> Optional[str]:
        """Returns the source the slide renders: the video when present, else the image."""
        return self.video_src or self.image_src


class CarouselItemInput(BaseModel):
    """
    Validated form input for creating or updating a CarouselItem.

    Empty media fields are treated as absent, but at least one of image and
    video must remain. When no hint is given, the lower-cased category label
    is used.
    """

    title: str
    category: str
    content: str
    image_src: Optional[str] = Field(None, alias="imageSrc", validate_default=True)
    video_src: Optional[str] = Field(None, alias="videoSrc", validate_default=True)
    data_ai_hint: Optional[str] = Field(None, alias="data-ai-hint")

    model_config = {"populate_by_name": True}

    @field_validator('title')
    @classmethod
    def title_min_length(cls, v: str) -> str:
        if len(v) < 3:
            raise PydanticCustomError("string_too_short", "Title must be at least 3 characters.")
        return v

    @field_validator('category')
    @classmethod
    def category_min_length(cls, v: str) -> str:
        if len(v) < 3:
            raise PydanticCustomError("string_too_short", "Category must be at least 3 characters.")
        return v

    @field_validator('content')
    @classmethod
    def content_min_length(cls, v: str) -> str:
        if len(v) < 10:
            raise PydanticCustomError("string_too_short", "Content must be at least 10 characters.")
        return v

    @field_validator('image_src', 'video_src', 'data_ai_hint', mode='before')
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v

    @field_validator('image_src', 'video_src')
    @classmethod
    def media_source_well_formed(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        """
        Accepts absolute URLs (including object-storage URLs) and site paths.

        Raises:
            PydanticCustomError: If the value is neither an absolute URL nor a site path.
        """
        if v is None or is_absolute_url(v) or is_site_path(v):
            return v
        label = "Image URL" if info.field_name == "image_src" else "Video Source"
        raise PydanticCustomError("url_parsing", f"{label} must be a valid URL or a path starting with '/'.")

    @field_validator('video_src')
    @classmethod
    def image_or_video_required(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        # image_src is missing from info.data when it already failed validation
        if v is None and "image_src" in info.data and info.data["image_src"] is None:
            raise PydanticCustomError("media_missing", "Provide an image URL or a video source.")
        return v

    @model_validator(mode='after')
    def default_hint_from_category(self) -> "CarouselItemInput":
        if not self.data_ai_hint:
            self.data_ai_hint = self.category.lower()
        return self

    def to_document(self) -> dict[str, Any]:
        """Returns the fields as stored in the carouselItems collection."""
        return self.model_dump(by_alias=True)
