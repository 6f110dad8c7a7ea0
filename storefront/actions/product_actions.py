from storefront.actions.base import BaseActions
from storefront.core.revalidation import PageCache
from storefront.domain.forms import FormInput
from storefront.domain.product import ProductInput
from storefront.domain.results import ActionResult
from storefront.services.product_service import ProductService


class ProductActions(BaseActions):
    """Admin mutations for products.

    Every product change can alter the homepage grid, the category pages
    listing the product, and the product's own detail page.
    """

    entity_label = "product"
    list_fields = ("categoryIds",)

    def __init__(self, service: ProductService, page_cache: PageCache) -> None:
        super().__init__(page_cache)
        self.service = service

    def create_product(self, form: FormInput) -> ActionResult:
        product_in, rejected = self.validate(ProductInput, form, "create_product")
        if rejected:
            return rejected

        try:
            product = self.service.create_product(product_in)
        except Exception as e:
            return self.failed("create", e)

        self.revalidate(["/admin/products", "/", f"/products/{product.id}"], layouts=["/category"])
        return ActionResult.ok("Product created successfully.")

    def update_product(self, product_id: str, form: FormInput) -> ActionResult:
        """
        Validates the full product form and overwrites the stored fields.

        Args:
            product_id (str): The id of the product being edited.
            form (FormInput): The submitted product form.

        Returns:
            ActionResult: Success, field errors, not-found, or a generic failure.
        """
        product_in, rejected = self.validate(ProductInput, form, "update_product")
        if rejected:
            return rejected

        try:
            product = self.service.update_product(product_id, product_in.to_document())
        except Exception as e:
            return self.failed("update", e)
        if product is None:
            return self.not_found(product_id)

        self.revalidate(
            ["/admin/products", f"/admin/products/edit/{product_id}", f"/products/{product_id}", "/"],
            layouts=["/category"],
        )
        return ActionResult.ok("Product updated successfully.")

    def delete_product(self, product_id: str) -> ActionResult:
        try:
            deleted = self.service.delete_product(product_id)
        except Exception as e:
            return self.failed("delete", e)
        if not deleted:
            return self.not_found(product_id)

        self.revalidate(["/admin/products", f"/products/{product_id}", "/"], layouts=["/category"])
        return ActionResult.ok("Product deleted successfully.")
