# Python-side client for the inventory page
from app.client.api_client import ProductApiClient, ApiError, ApiValidationError, ApiNotFoundError
from app.client.formatting import format_price
from app.client.state import ProductViewState, ProductForm, filter_products, derive_categories
from app.client.view import ProductInventoryView

__all__ = [
    "ProductApiClient",
    "ApiError",
    "ApiValidationError",
    "ApiNotFoundError",
    "format_price",
    "ProductViewState",
    "ProductForm",
    "filter_products",
    "derive_categories",
    "ProductInventoryView",
]
