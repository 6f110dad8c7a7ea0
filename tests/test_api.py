from typing import Any

from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.services.storage_service import StorageService


PRODUCT_FORM = {
    "name": "Linen Wrap Dress",
    "description": "A breathable linen dress with a tie waist.",
    "price": "89.50",
    "imageUrl": "https://placehold.co/600x600.png",
    "tags": "linen, summer",
}


def create_category(client: TestClient, name: str) -> dict[str, Any]:
    response = client.post("/v1/admin/categories", data={"name": name, "description": ""})
    assert response.status_code == 200
    return next(c for c in client.get("/v1/admin/categories").json() if c["name"] == name)


def create_product(client: TestClient, category_ids: list[str], **overrides: str) -> dict[str, Any]:
    form = {**PRODUCT_FORM, **overrides, "categoryIds[]": category_ids}
    response = client.post("/v1/admin/products", data=form)
    assert response.status_code == 200
    return next(p for p in client.get("/v1/admin/products").json() if p["name"] == form["name"])


def test_read_main(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the Storefront CMS API"}


# --- 1. Storefront ---

def test_home_page_reflects_new_product(client: TestClient) -> None:
    """The cached homepage is revalidated once a product is created."""
    assert client.get("/v1/storefront/home").json()["featuredProducts"] == []

    category = create_category(client, "Dresses")
    create_product(client, [category["id"]])

    page = client.get("/v1/storefront/home").json()
    assert [p["name"] for p in page["featuredProducts"]] == ["Linen Wrap Dress"]
    assert [c["slug"] for c in page["categories"]] == ["dresses"]
    assert page["carouselItems"] == []

def test_category_page(client: TestClient) -> None:
    category = create_category(client, "Summer Dresses")
    create_product(client, [category["id"]])

    response = client.get("/v1/storefront/category/summer-dresses")

    assert response.status_code == 200
    assert response.json()["category"]["name"] == "Summer Dresses"
    assert [p["name"] for p in response.json()["products"]] == ["Linen Wrap Dress"]

def test_unknown_category_page(client: TestClient) -> None:
    response = client.get("/v1/storefront/category/unknown")
    assert response.status_code == 404
    assert response.json() == {"detail": "Category not found"}

def test_product_page_resolves_categories(client: TestClient) -> None:
    dresses = create_category(client, "Dresses")
    product = create_product(client, [dresses["id"], "deleted-category"])

    page = client.get(f"/v1/storefront/products/{product['id']}").json()

    assert page["product"]["imageUrl"] == "https://placehold.co/600x600.png"
    assert [c["name"] for c in page["categories"]] == ["Dresses"]

def test_unknown_product_page(client: TestClient) -> None:
    assert client.get("/v1/storefront/products/not-an-id").status_code == 404

def test_contact_form(client: TestClient) -> None:
    response = client.post("/v1/storefront/contact", json={
        "name": "Jane Doe",
        "email": "jane.doe@example.com",
        "subject": "Sizing question",
        "message": "Is this dress available in a size 10?",
    })
    assert response.status_code == 200
    assert response.json()["success"] is True

def test_contact_form_rejected(client: TestClient) -> None:
    response = client.post("/v1/storefront/contact", json={"name": "J", "email": "jane.doe@example.com"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid data."
    assert body["errors"]["subject"] == ["Required"]
    assert "name" in body["errors"]


# --- 2. Admin Products ---

def test_create_product_with_invalid_form(client: TestClient) -> None:
    response = client.post("/v1/admin/products", data={**PRODUCT_FORM, "price": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"] == {
        "price": ["Price must be a valid number"],
        "categoryIds": ["At least one category is required"],
    }

def test_update_and_delete_product(client: TestClient) -> None:
    product = create_product(client, ["cat-1"])

    response = client.put(
        f"/v1/admin/products/{product['id']}",
        data={**PRODUCT_FORM, "price": "59", "categoryIds": "cat-2"},
    )
    assert response.json() == {"success": True, "message": "Product updated successfully."}

    updated = client.get(f"/v1/admin/products/{product['id']}").json()
    assert updated["price"] == 59.0
    assert updated["categoryIds"] == ["cat-2"]

    assert client.delete(f"/v1/admin/products/{product['id']}").status_code == 200
    assert client.delete(f"/v1/admin/products/{product['id']}").status_code == 404
    assert client.get(f"/v1/admin/products/{product['id']}").status_code == 404

def test_dashboard_counts(client: TestClient) -> None:
    category = create_category(client, "Dresses")
    create_product(client, [category["id"]])

    assert client.get("/v1/admin/dashboard").json() == {
        "totalProducts": 1,
        "totalCategories": 1,
        "totalCarouselItems": 0,
    }

def test_suggest_tags_matches_existing_categories(client: TestClient, gemini_client: Any) -> None:
    dresses = create_category(client, "Dresses")

    response = client.post("/v1/admin/products/suggest-tags", json={
        "productName": "Linen Wrap Dress",
        "productDescription": "A breathable linen dress with a tie waist.",
    })

    assert response.status_code == 200
    assert response.json() == {
        "suggestedTags": ["linen", "summer dress"],
        "suggestedCategories": ["dresses", "Beachwear"],
        "matchedCategoryIds": [dresses["id"]],
    }
    assert "Linen Wrap Dress" in gemini_client.calls[0]["contents"]

def test_suggest_tags_ai_unavailable(client: TestClient, gemini_client: Any) -> None:
    gemini_client.error = RuntimeError("quota exceeded")

    response = client.post("/v1/admin/products/suggest-tags", json={
        "productName": "Linen Wrap Dress",
        "productDescription": "A breathable linen dress with a tie waist.",
    })

    assert response.status_code == 502
    assert response.json() == {"detail": "The AI service is currently unavailable."}


# --- 3. Admin Categories & Carousel ---

def test_category_crud(client: TestClient) -> None:
    category = create_category(client, "Summer Dresses")

    response = client.put(f"/v1/admin/categories/{category['id']}", data={"name": "Beach Wear"})
    assert response.status_code == 200
    assert client.get(f"/v1/admin/categories/{category['id']}").json()["slug"] == "beach-wear"

    assert client.delete(f"/v1/admin/categories/{category['id']}").status_code == 200
    assert client.get(f"/v1/admin/categories/{category['id']}").status_code == 404

def test_carousel_crud(client: TestClient) -> None:
    response = client.post("/v1/admin/carousel", data={
        "title": "Cinematic Moments",
        "category": "Brand Story",
        "content": "A showcase of our brand essence in motion.",
        "videoSrc": "/hero.mp4",
    })
    assert response.status_code == 200

    [item] = client.get("/v1/admin/carousel").json()
    assert item["id"].startswith("carousel-")
    assert item["data-ai-hint"] == "brand story"
    assert client.get(f"/v1/admin/carousel/{item['id']}").json() == item

    assert client.delete(f"/v1/admin/carousel/{item['id']}").status_code == 200
    assert client.get("/v1/admin/carousel").json() == []


# --- 4. Media Upload & Settings ---

def test_upload_stores_public_object(client: TestClient, s3_client: Any) -> None:
    response = client.post("/v1/admin/upload", files={"file": ("my photo.png", b"\x89PNG", "image/png")})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Uploaded!"

    [upload] = s3_client.uploads
    assert upload["bucket"] == "media"
    assert upload["key"].endswith("-my_photo.png")
    assert upload["body"] == b"\x89PNG"
    assert upload["extra"] == {"ACL": "public-read", "ContentType": "image/png"}
    assert body["fileUrl"] == f"https://cdn.example.com/media/{upload['key']}"

def test_upload_without_file(client: TestClient, s3_client: Any) -> None:
    response = client.post("/v1/admin/upload", data={"note": "no file"})

    assert response.status_code == 400
    assert response.json() == {"error": "No file found in the upload."}
    assert s3_client.uploads == []

def test_upload_without_bucket_config(client: TestClient, settings: Settings, s3_client: Any) -> None:
    unconfigured = settings.model_copy(update={"SUFY_BUCKET_NAME": None})
    client.app.state.storage = StorageService(unconfigured, client=s3_client)

    response = client.post("/v1/admin/upload", files={"file": ("a.png", b"data", "image/png")})

    assert response.status_code == 500
    assert response.json() == {"error": "Sufy bucket name is not configured."}
    assert s3_client.uploads == []

def test_upload_store_failure(client: TestClient, s3_client: Any) -> None:
    s3_client.fail = True

    response = client.post("/v1/admin/upload", files={"file": ("a.png", b"data", "image/png")})

    assert response.status_code == 500
    assert response.json() == {"error": "Upload to Sufy failed.", "details": "ClientError"}

def test_request_new_hostname(client: TestClient) -> None:
    response = client.post("/v1/admin/settings/hostnames", json={"hostname": "images.example.com"})
    assert response.status_code == 200
    assert "images.example.com" in response.json()["message"]

    assert client.post("/v1/admin/settings/hostnames", json={"hostname": "x"}).status_code == 400
