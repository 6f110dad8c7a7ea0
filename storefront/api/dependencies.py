from fastapi import Request

from storefront.actions.carousel_actions import CarouselActions
from storefront.actions.category_actions import CategoryActions
from storefront.actions.product_actions import ProductActions
from storefront.core.revalidation import PageCache
from storefront.data_access.database import MongoConnectionPool
from storefront.services.ai_service import AIService
from storefront.services.carousel_service import CarouselService
from storefront.services.catalog_queries import CatalogQueries
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService
from storefront.services.storage_service import StorageService


# Shared handles are created once in the lifespan and kept on app.state.

def get_pool(request: Request) -> MongoConnectionPool:
    return request.app.state.pool


def get_page_cache(request: Request) -> PageCache:
    return request.app.state.page_cache


def get_storage_service(request: Request) -> StorageService:
    return request.app.state.storage


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai


def get_category_service(request: Request) -> CategoryService:
    return CategoryService(get_pool(request))


def get_product_service(request: Request) -> ProductService:
    return ProductService(get_pool(request))


def get_carousel_service(request: Request) -> CarouselService:
    return CarouselService(get_pool(request), seed_on_empty=request.app.state.settings.SEED_CAROUSEL_ON_EMPTY)


def get_catalog(request: Request) -> CatalogQueries:
    """FastAPI dependency providing the read layer."""
    return CatalogQueries(
        categories=get_category_service(request),
        products=get_product_service(request),
        carousel=get_carousel_service(request),
        page_cache=get_page_cache(request),
        home_product_limit=request.app.state.settings.HOME_PRODUCT_LIMIT,
    )


def get_product_actions(request: Request) -> ProductActions:
    return ProductActions(get_product_service(request), get_page_cache(request))


def get_category_actions(request: Request) -> CategoryActions:
    return CategoryActions(get_category_service(request), get_page_cache(request))


def get_carousel_actions(request: Request) -> CarouselActions:
    return CarouselActions(get_carousel_service(request), get_page_cache(request))
