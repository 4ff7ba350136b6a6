import httpx
from typing import Any, Dict, List, Optional
from app.schemas import ProductResponse


class ApiError(Exception):
    """Unexpected response from the products API."""


class ApiValidationError(ApiError):
    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__(f"Validation failed for: {', '.join(errors)}")


class ApiNotFoundError(ApiError):
    def __init__(self, message: str = "Product not found"):
        self.message = message
        super().__init__(message)


class ProductApiClient:
    """
    Async client for the /api/products endpoints.

    Pass ``client`` to reuse an existing httpx.AsyncClient (tests use one
    backed by httpx.ASGITransport); otherwise one is created per client
    and closed by ``aclose()`` / ``async with``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "ProductApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Unexpected non-JSON response ({response.status_code})") from exc

    @classmethod
    def _check(cls, response: httpx.Response) -> Any:
        if response.status_code in (404, 422):
            body = cls._json(response)
            if not isinstance(body, dict):
                body = {}
            if response.status_code == 422:
                raise ApiValidationError(body.get("errors", {}))
            raise ApiNotFoundError(body.get("message", "Product not found"))
        response.raise_for_status()
        return cls._json(response)

    async def list_products(self) -> List[ProductResponse]:
        data = self._check(await self._client.get("/api/products"))
        return [ProductResponse.model_validate(item) for item in data]

    async def get_product(self, product_id: int) -> ProductResponse:
        data = self._check(await self._client.get(f"/api/products/{product_id}"))
        return ProductResponse.model_validate(data)

    async def create_product(self, payload: Dict[str, Any]) -> ProductResponse:
        data = self._check(await self._client.post("/api/products", json=payload))
        return ProductResponse.model_validate(data)

    async def update_product(self, product_id: int, payload: Dict[str, Any]) -> ProductResponse:
        data = self._check(await self._client.put(f"/api/products/{product_id}", json=payload))
        return ProductResponse.model_validate(data)

    async def delete_product(self, product_id: int) -> str:
        data = self._check(await self._client.delete(f"/api/products/{product_id}"))
        return data["message"]
