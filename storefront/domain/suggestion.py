from pydantic import BaseModel, Field

from .category import Category


class ProductTagSuggestions(BaseModel):
    """
    Tags and category names proposed by the generative model for a product.

    Attributes:
        suggested_tags (list[str]): Search tags to help customers find the product.
        suggested_categories (list[str]): Category names, not matched against stored categories.
    """

    suggested_tags: list[str] = Field(
        default_factory=list,
        alias="suggestedTags",
        description="An array of suggested tags for the product."
    )
    suggested_categories: list[str] = Field(
        default_factory=list,
        alias="suggestedCategories",
        description="An array of suggested categories for the product."
    )

    model_config = {"populate_by_name": True}


def match_suggested_categories(suggested: list[str], categories: list[Category]) -> list[str]:
    """
    Resolves suggested category names to the ids of existing categories.

    Names are compared case-insensitively and must otherwise match exactly;
    suggestions without a matching category are dropped.

    Args:
        suggested (list[str]): Category names returned by the model.
        categories (list[Category]): The categories currently stored.

    Returns:
        list[str]: Matching category ids, in suggestion order, without duplicates.
    """
    by_name = {c.name.lower(): c.id for c in categories}
    matched: list[str] = []
    for name in suggested:
        category_id = by_name.get(name.lower())
        if category_id and category_id not in matched:
            matched.append(category_id)
    return matched


class SuggestTagsRequest(BaseModel):
    """The product fields sent from the admin form to ask for suggestions."""

    product_name: str = Field(..., alias="productName", description="The name of the product.")
    product_description: str = Field(
        ..., alias="productDescription", description="A detailed description of the product."
    )

    model_config = {"populate_by_name": True}
