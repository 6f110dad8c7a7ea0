import logging
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from storefront.core.exceptions import AISuggestionError
from storefront.domain.suggestion import ProductTagSuggestions


logger = logging.getLogger(__name__)

SUGGESTION_PROMPT = """You are an expert in product categorization and tagging.

Based on the product name and description provided, suggest relevant tags and categories to help users easily find the product.

Product Name: {product_name}
Product Description: {product_description}

Your suggestions should be tailored to improve product discoverability and should reflect common search terms that customers might use.

Return the suggested tags and categories in array format.
"""

SUGGESTION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "suggestedTags": {"type": "ARRAY", "items": {"type": "STRING"}},
        "suggestedCategories": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["suggestedTags", "suggestedCategories"],
}

class AIService:
    def __init__(self, api_key: Optional[str], model: str = "gemini-2.0-flash", client: Any = None) -> None:
        self.api_key = api_key
        self.client = client or (genai.Client(api_key=self.api_key) if self.api_key else None)
        self.text_model = model

    def suggest_product_tags(self, product_name: str, product_description: str) -> ProductTagSuggestions:
        """Asks Gemini for search tags and category names for a product.

        No retry or fallback: any failure is reported to the caller.

        Raises:
            AISuggestionError: If no API key is configured, the API call fails,
                or the model's answer does not match the expected JSON shape.
        """
        if not self.client:
            raise AISuggestionError("AI suggestions are not configured (GEMINI_API_KEY is not set).")

        # Descriptions don't need more than a few thousand tokens
        clean_desc = " ".join(product_description.split())[:10000]
        prompt = SUGGESTION_PROMPT.format(product_name=product_name, product_description=clean_desc)

        try:
            response = self.client.models.generate_content(
                model=self.text_model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=SUGGESTION_SCHEMA,
                ),
            )
        except Exception as e:
            logger.warning(f"AI API Error: {e}")
            raise AISuggestionError("The AI service is currently unavailable.") from e

        # response.text can be None if the response is empty or blocked
        if not response.text:
            logger.warning("AI API returned an empty response.")
            raise AISuggestionError("The AI service returned no suggestions.")

        try:
            return ProductTagSuggestions.model_validate_json(response.text)
        except ValidationError as e:
            logger.warning(f"AI API returned malformed suggestions: {e}")
            raise AISuggestionError("The AI service returned malformed suggestions.") from e
