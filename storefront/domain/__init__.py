# storefront/domain/__init__.py

# 1. Stored Entities
from .carousel_item import CarouselItem
from .category import Category
from .product import Product

# 2. Form Inputs
from .carousel_item import CarouselItemInput
from .category import CategoryInput
from .inquiry import HostnameRequest, InquiryInput
from .product import ProductInput

# 3. Results & AI Output
from .results import ActionResult, ActionStatus
from .suggestion import ProductTagSuggestions


__all__ = [
    "ActionResult",
    "ActionStatus",
    "CarouselItem",
    "CarouselItemInput",
    "Category",
    "CategoryInput",
    "HostnameRequest",
    "InquiryInput",
    "Product",
    "ProductInput",
    "ProductTagSuggestions"
]
