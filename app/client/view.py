import httpx
from typing import Callable, Optional
from app.client.api_client import ApiError, ApiValidationError, ProductApiClient
from app.client.state import ProductViewState
from app.logging_config import get_logger
from app.schemas import ProductResponse

logger = get_logger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this product?"

Confirm = Callable[[str], bool]


class ProductInventoryView:
    """Drives a ProductViewState against the products API."""

    def __init__(self, api: ProductApiClient, state: Optional[ProductViewState] = None):
        self.api = api
        self.state = state or ProductViewState()

    async def load(self) -> None:
        """Fetch the full list; keeps the previous list if the fetch fails."""
        try:
            products = await self.api.list_products()
        except (ApiError, httpx.HTTPError) as exc:
            logger.error("Error fetching products: %s", exc)
            return
        self.state.set_products(products)

    async def submit(self) -> Optional[ProductResponse]:
        """
        Create, or update the product being edited, then reset the form and
        reload. Validation errors are kept on the state and the form is left
        as is; returns None in that case.
        """
        payload = self.state.form.to_payload()
        try:
            if self.state.is_editing:
                saved = await self.api.update_product(self.state.editing_id, payload)
            else:
                saved = await self.api.create_product(payload)
        except ApiValidationError as exc:
            self.state.set_errors(exc.errors)
            return None
        except (ApiError, httpx.HTTPError) as exc:
            logger.error("Error saving product: %s", exc)
            return None

        self.state.reset_form()
        await self.load()
        return saved

    def edit(self, product: ProductResponse) -> None:
        self.state.start_edit(product)

    def cancel(self) -> None:
        self.state.reset_form()

    async def delete(self, product_id: int, confirm: Confirm) -> bool:
        if not confirm(DELETE_CONFIRMATION):
            return False
        try:
            await self.api.delete_product(product_id)
        except (ApiError, httpx.HTTPError) as exc:
            logger.error("Error deleting product: %s", exc)
            return False
        await self.load()
        return True
