from pydantic import BaseModel, Field

from .carousel_item import CarouselItem
from .category import Category
from .product import Product


class HomePage(BaseModel):
    """Everything the storefront homepage renders."""

    carousel_items: list[CarouselItem] = Field(default_factory=list, alias="carouselItems")
    categories: list[Category] = Field(default_factory=list)
    featured_products: list[Product] = Field(default_factory=list, alias="featuredProducts")

    model_config = {"populate_by_name": True}


class CategoryPage(BaseModel):
    """A category with the products listed under it."""

    category: Category
    products: list[Product] = Field(default_factory=list)


class ProductPage(BaseModel):
    """A product with its categories resolved; ids of deleted categories are skipped."""

    product: Product
    categories: list[Category] = Field(default_factory=list)


class DashboardSummary(BaseModel):
    total_products: int = Field(0, alias="totalProducts")
    total_categories: int = Field(0, alias="totalCategories")
    total_carousel_items: int = Field(0, alias="totalCarouselItems")

    model_config = {"populate_by_name": True}
