from typing import Optional

from storefront.core.revalidation import PageCache

# Layer 3: Domain Entities
from storefront.domain import CarouselItem, Category, Product
from storefront.domain.pages import CategoryPage, DashboardSummary, HomePage, ProductPage

# Layer 2: Persistence Services
from storefront.services.carousel_service import CarouselService
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService


class CatalogQueries:
    """Read layer used by the storefront and admin routes.

    Routes never talk to the persistence services directly. The plain
    lookups are pass-throughs and keep their failure-tolerant contract; the
    storefront page payloads are composed here and cached by site path until
    a mutation revalidates them.
    """

    def __init__(
        self,
        categories: CategoryService,
        products: ProductService,
        carousel: CarouselService,
        page_cache: PageCache,
        home_product_limit: int = 8,
    ) -> None:
        self.categories = categories
        self.products = products
        self.carousel = carousel
        self.page_cache = page_cache
        self.home_product_limit = home_product_limit

    # --- 1. PASS-THROUGH LOOKUPS ---

    def get_categories(self) -> list[Category]:
        return self.categories.list_categories()

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        return self.categories.get_category_by_id(category_id)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return self.categories.get_category_by_slug(slug)

    def get_products(self, limit: Optional[int] = None) -> list[Product]:
        return self.products.list_products(limit)

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return self.products.get_product_by_id(product_id)

    def get_products_by_category_id(self, category_id: str) -> list[Product]:
        return self.products.get_products_by_category_id(category_id)

    def get_carousel_items(self) -> list[CarouselItem]:
        return self.carousel.list_items()

    def get_carousel_item_by_id(self, item_id: str) -> Optional[CarouselItem]:
        return self.carousel.get_item_by_id(item_id)

    def get_dashboard_summary(self) -> DashboardSummary:
        return DashboardSummary(
            total_products=self.products.count_products(),
            total_categories=self.categories.count_categories(),
            total_carousel_items=self.carousel.count_items(),
        )

    # --- 2. STOREFRONT PAGES (cached by site path) ---

    def home_page(self) -> HomePage:
        def render() -> HomePage:
            return HomePage(
                carousel_items=self.get_carousel_items(),
                categories=self.get_categories(),
                featured_products=self.get_products(self.home_product_limit),
            )

        return self.page_cache.get_or_render("/", render)

    def category_page(self, slug: str) -> Optional[CategoryPage]:
        """
        Builds the /category/<slug> page.

        Args:
            slug (str): The category slug from the URL.

        Returns:
            Optional[CategoryPage]: The page, or None if no category has that slug.
        """
        def render() -> Optional[CategoryPage]:
            category = self.get_category_by_slug(slug)
            if category is None:
                return None
            return CategoryPage(category=category, products=self.get_products_by_category_id(category.id))

        return self.page_cache.get_or_render(f"/category/{slug}", render)

    def product_page(self, product_id: str) -> Optional[ProductPage]:
        def render() -> Optional[ProductPage]:
            product = self.get_product_by_id(product_id)
            if product is None:
                return None
            categories = [c for c in self.get_categories() if c.id in product.category_ids]
            return ProductPage(product=product, categories=categories)

        return self.page_cache.get_or_render(f"/products/{product_id}", render)
