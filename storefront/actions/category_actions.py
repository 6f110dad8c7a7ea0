from storefront.actions.base import BaseActions
from storefront.core.revalidation import PageCache
from storefront.domain.category import CategoryInput
from storefront.domain.forms import FormInput
from storefront.domain.results import ActionResult
from storefront.services.category_service import CategoryService


class CategoryActions(BaseActions):
    """Admin mutations for categories.

    Categories appear in the homepage list and own their /category/<slug>
    page; renaming moves the slug, so every category page is revalidated.
    Deleting a category also changes the categories shown on product pages.
    """

    entity_label = "category"

    def __init__(self, service: CategoryService, page_cache: PageCache) -> None:
        super().__init__(page_cache)
        self.service = service

    def create_category(self, form: FormInput) -> ActionResult:
        category_in, rejected = self.validate(CategoryInput, form, "create_category")
        if rejected:
            return rejected

        try:
            self.service.create_category(category_in)
        except Exception as e:
            return self.failed("create", e)

        self.revalidate(["/admin/categories", "/"], layouts=["/category"])
        return ActionResult.ok("Category created successfully.")

    def update_category(self, category_id: str, form: FormInput) -> ActionResult:
        category_in, rejected = self.validate(CategoryInput, form, "update_category")
        if rejected:
            return rejected

        try:
            category = self.service.update_category(category_id, category_in.model_dump())
        except Exception as e:
            return self.failed("update", e)
        if category is None:
            return self.not_found(category_id)

        self.revalidate(
            ["/admin/categories", f"/admin/categories/edit/{category_id}", "/"],
            layouts=["/category", "/products"],
        )
        return ActionResult.ok("Category updated successfully.")

    def delete_category(self, category_id: str) -> ActionResult:
        """
        Deletes a category; products keep existing but lose the reference.

        Args:
            category_id (str): The id of the category to delete.

        Returns:
            ActionResult: Success, not-found, or a generic failure.
        """
        try:
            deleted = self.service.delete_category(category_id)
        except Exception as e:
            return self.failed("delete", e)
        if not deleted:
            return self.not_found(category_id)

        self.revalidate(["/admin/categories", "/admin/products", "/"], layouts=["/category", "/products"])
        return ActionResult.ok("Category deleted successfully.")
