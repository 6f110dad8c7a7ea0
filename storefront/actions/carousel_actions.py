from storefront.actions.base import BaseActions
from storefront.core.revalidation import PageCache
from storefront.domain.carousel_item import CarouselItemInput
from storefront.domain.forms import FormInput
from storefront.domain.results import ActionResult
from storefront.services.carousel_service import CarouselService


class CarouselActions(BaseActions):
    """Admin mutations for the homepage carousel slides."""

    entity_label = "carousel item"

    def __init__(self, service: CarouselService, page_cache: PageCache) -> None:
        super().__init__(page_cache)
        self.service = service

    def create_carousel_item(self, form: FormInput) -> ActionResult:
        item_in, rejected = self.validate(CarouselItemInput, form, "create_carousel_item")
        if rejected:
            return rejected

        try:
            self.service.create_item(item_in)
        except Exception as e:
            return self.failed("create", e)

        self.revalidate(["/admin/carousel", "/"])
        return ActionResult.ok("Carousel item created successfully.")

    def update_carousel_item(self, item_id: str, form: FormInput) -> ActionResult:
        item_in, rejected = self.validate(CarouselItemInput, form, "update_carousel_item")
        if rejected:
            return rejected

        try:
            item = self.service.update_item(item_id, item_in.to_document())
        except Exception as e:
            return self.failed("update", e)
        if item is None:
            return self.not_found(item_id)

        self.revalidate(["/admin/carousel", f"/admin/carousel/edit/{item_id}", "/"])
        return ActionResult.ok("Carousel item updated successfully.")

    def delete_carousel_item(self, item_id: str) -> ActionResult:
        try:
            deleted = self.service.delete_item(item_id)
        except Exception as e:
            return self.failed("delete", e)
        if not deleted:
            return self.not_found(item_id)

        self.revalidate(["/admin/carousel", "/"])
        return ActionResult.ok("Carousel item deleted successfully.")
