from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

# Layer 2: Actions & Services
from storefront.actions import site_actions
from storefront.actions.carousel_actions import CarouselActions
from storefront.actions.category_actions import CategoryActions
from storefront.actions.product_actions import ProductActions
from storefront.api.dependencies import (
    get_ai_service,
    get_carousel_actions,
    get_catalog,
    get_category_actions,
    get_product_actions,
    get_storage_service,
)
from storefront.core.exceptions import AISuggestionError, StorageConfigError, StorageUploadError

# Layer 3: Domain Entities
from storefront.domain import ActionResult, CarouselItem, Category, Product
from storefront.domain.pages import CategoryPage, DashboardSummary, HomePage, ProductPage
from storefront.domain.suggestion import SuggestTagsRequest, match_suggested_categories
from storefront.services.ai_service import AIService
from storefront.services.catalog_queries import CatalogQueries
from storefront.services.storage_service import StorageService


router = APIRouter(prefix="/v1")

Catalog = Annotated[CatalogQueries, Depends(get_catalog)]


def to_response(result: ActionResult) -> JSONResponse:
    """Sends an action result with the HTTP status matching its outcome."""
    return JSONResponse(result.to_payload(), status_code=result.http_status)


# --- 1. STOREFRONT (public pages) ---

@router.get("/storefront/home", tags=["Storefront"])
def read_home_page(catalog: Catalog) -> HomePage:
    """Carousel slides, categories and the first products, as shown on the homepage."""
    return catalog.home_page()

@router.get("/storefront/categories", tags=["Storefront"])
def read_categories(catalog: Catalog) -> list[Category]:
    return catalog.get_categories()

@router.get("/storefront/category/{slug}", tags=["Storefront"])
def read_category_page(slug: str, catalog: Catalog) -> CategoryPage:
    """The category page: the category and every product listed under it."""
    page = catalog.category_page(slug)
    if page is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return page

@router.get("/storefront/products/{product_id}", tags=["Storefront"])
def read_product_page(product_id: str, catalog: Catalog) -> ProductPage:
    page = catalog.product_page(product_id)
    if page is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return page

@router.post("/storefront/contact", tags=["Storefront"])
def submit_inquiry(values: Annotated[dict[str, Any], Body()]) -> JSONResponse:
    """Contact form submission, optionally about a specific product."""
    return to_response(site_actions.submit_inquiry(values))


# --- 2. ADMIN - DASHBOARD ---

@router.get("/admin/dashboard", tags=["Admin"])
def read_dashboard(catalog: Catalog) -> DashboardSummary:
    return catalog.get_dashboard_summary()


# --- 3. ADMIN - PRODUCTS ---

@router.get("/admin/products", tags=["Admin - Products"])
def list_products(catalog: Catalog, limit: Optional[int] = None) -> list[Product]:
    return catalog.get_products(limit)

@router.get("/admin/products/{product_id}", tags=["Admin - Products"])
def get_product(product_id: str, catalog: Catalog) -> Product:
    product = catalog.get_product_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.post("/admin/products", tags=["Admin - Products"])
async def create_product(
    request: Request,
    actions: Annotated[ProductActions, Depends(get_product_actions)]
) -> JSONResponse:
    """Creates a product from the submitted product form."""
    form = await request.form()
    return to_response(await run_in_threadpool(actions.create_product, form))

@router.put("/admin/products/{product_id}", tags=["Admin - Products"])
async def update_product(
    product_id: str,
    request: Request,
    actions: Annotated[ProductActions, Depends(get_product_actions)]
) -> JSONResponse:
    form = await request.form()
    return to_response(await run_in_threadpool(actions.update_product, product_id, form))

@router.delete("/admin/products/{product_id}", tags=["Admin - Products"])
def delete_product(
    product_id: str,
    actions: Annotated[ProductActions, Depends(get_product_actions)]
) -> JSONResponse:
    return to_response(actions.delete_product(product_id))

@router.post("/admin/products/suggest-tags", tags=["Admin - Products"])
def suggest_product_tags(
    payload: SuggestTagsRequest,
    catalog: Catalog,
    ai: Annotated[AIService, Depends(get_ai_service)]
) -> dict[str, Any]:
    """Asks the AI model for tags and categories for a product being edited.

    Suggested category names are matched case-insensitively against the
    stored categories; only matches are offered for selection.
    """
    try:
        suggestions = ai.suggest_product_tags(payload.product_name, payload.product_description)
    except AISuggestionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    matched = match_suggested_categories(suggestions.suggested_categories, catalog.get_categories())
    return {**suggestions.model_dump(by_alias=True), "matchedCategoryIds": matched}


# --- 4. ADMIN - CATEGORIES ---

@router.get("/admin/categories", tags=["Admin - Categories"])
def list_categories(catalog: Catalog) -> list[Category]:
    return catalog.get_categories()

@router.get("/admin/categories/{category_id}", tags=["Admin - Categories"])
def get_category(category_id: str, catalog: Catalog) -> Category:
    category = catalog.get_category_by_id(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return category

@router.post("/admin/categories", tags=["Admin - Categories"])
async def create_category(
    request: Request,
    actions: Annotated[CategoryActions, Depends(get_category_actions)]
) -> JSONResponse:
    form = await request.form()
    return to_response(await run_in_threadpool(actions.create_category, form))

@router.put("/admin/categories/{category_id}", tags=["Admin - Categories"])
async def update_category(
    category_id: str,
    request: Request,
    actions: Annotated[CategoryActions, Depends(get_category_actions)]
) -> JSONResponse:
    form = await request.form()
    return to_response(await run_in_threadpool(actions.update_category, category_id, form))

@router.delete("/admin/categories/{category_id}", tags=["Admin - Categories"])
def delete_category(
    category_id: str,
    actions: Annotated[CategoryActions, Depends(get_category_actions)]
) -> JSONResponse:
    """Deletes a category and removes it from every product that referenced it."""
    return to_response(actions.delete_category(category_id))


# --- 5. ADMIN - CAROUSEL ---

@router.get("/admin/carousel", tags=["Admin - Carousel"])
def list_carousel_items(catalog: Catalog) -> list[CarouselItem]:
    return catalog.get_carousel_items()

@router.get("/admin/carousel/{item_id}", tags=["Admin - Carousel"])
def get_carousel_item(item_id: str, catalog: Catalog) -> CarouselItem:
    item = catalog.get_carousel_item_by_id(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Carousel item not found")
    return item

@router.post("/admin/carousel", tags=["Admin - Carousel"])
async def create_carousel_item(
    request: Request,
    actions: Annotated[CarouselActions, Depends(get_carousel_actions)]
) -> JSONResponse:
    form = await request.form()
    return to_response(await run_in_threadpool(actions.create_carousel_item, form))

@router.put("/admin/carousel/{item_id}", tags=["Admin - Carousel"])
async def update_carousel_item(
    item_id: str,
    request: Request,
    actions: Annotated[CarouselActions, Depends(get_carousel_actions)]
) -> JSONResponse:
    form = await request.form()
    return to_response(await run_in_threadpool(actions.update_carousel_item, item_id, form))

@router.delete("/admin/carousel/{item_id}", tags=["Admin - Carousel"])
def delete_carousel_item(
    item_id: str,
    actions: Annotated[CarouselActions, Depends(get_carousel_actions)]
) -> JSONResponse:
    return to_response(actions.delete_carousel_item(item_id))


# --- 6. ADMIN - MEDIA & SETTINGS ---

@router.post("/admin/upload", tags=["Admin - Media"])
def upload_file(
    storage: Annotated[StorageService, Depends(get_storage_service)],
    file: Annotated[Optional[UploadFile], File()] = None
) -> JSONResponse:
    """Stores one uploaded file in the media bucket and returns its public URL.

    Bucket settings are checked before the submission is looked at, so a
    misconfigured deployment always answers 500.
    """
    try:
        storage.resolve_target()
    except StorageConfigError as e:
        return JSONResponse({"error": str(e)}, status_code=500)

    if file is None:
        return JSONResponse({"error": "No file found in the upload."}, status_code=400)

    try:
        file_url = storage.upload(file.file, file.filename, file.content_type)
    except StorageUploadError as e:
        details = type(e.__cause__).__name__ if e.__cause__ else None
        return JSONResponse({"error": str(e), "details": details}, status_code=500)

    return JSONResponse({"message": "Uploaded!", "fileUrl": file_url}, status_code=200)

@router.post("/admin/settings/hostnames", tags=["Admin - Settings"])
def request_new_hostname(hostname: Annotated[str, Body(embed=True)]) -> JSONResponse:
    """Logs a request to allow product images from another host."""
    return to_response(site_actions.request_new_hostname(hostname))
