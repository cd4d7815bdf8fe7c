"""
Async client for the Pricebook store API.

Every call raises StoreError on transport, HTTP or malformed-body failures so callers only
have one exception type to handle.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from pricebook_web.config import settings
from pricebook_web.models import Category, Product, ProductPage, ProductSearchResult

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Remote store failure with a message suitable for display."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CatalogClient:
    """Reads and writes the categories and products tables."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.API_KEY
        self.timeout = httpx.Timeout(timeout or settings.API_TIMEOUT, connect=10.0)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"X-API-Key": self.api_key} if self.api_key else {}
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Performs a request and returns the decoded JSON body (None for 204)."""
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = await self._get_client().request(
                method, endpoint, params=params, json=json
            )
            response.raise_for_status()
        except httpx.TimeoutException:
            raise StoreError(f"Request to the catalog store timed out ({self.base_url})")
        except httpx.ConnectError:
            raise StoreError(
                f"Cannot connect to the catalog store ({self.base_url}). Is the server running?"
            )
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            logger.warning(f"{method} {endpoint} -> HTTP {e.response.status_code}: {detail}")
            raise StoreError(detail, status_code=e.response.status_code)
        except httpx.RequestError as e:
            raise StoreError(f"Request to the catalog store failed: {e}")

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning(f"{method} {endpoint} returned a non-JSON body")
            raise StoreError(
                f"Unexpected response from the catalog store ({self.base_url})",
                status_code=response.status_code,
            )

    # --- Categories ---

    async def list_categories(self, order: str = "name") -> List[Category]:
        data = await self._request("GET", "/api/categories", params={"order": order})
        return _parse(List[Category], data)

    async def get_category(self, category_id: str) -> Optional[Category]:
        """Returns None when the category does not exist."""
        try:
            data = await self._request("GET", f"/api/categories/{category_id}")
        except StoreError as e:
            if e.status_code == 404:
                return None
            raise
        return _parse(Category, data)

    async def create_category(self, fields: Dict[str, Any]) -> Category:
        data = await self._request("POST", "/api/categories", json=fields)
        return _parse(Category, data)

    async def update_category(self, category_id: str, fields: Dict[str, Any]) -> Category:
        data = await self._request("PATCH", f"/api/categories/{category_id}", json=fields)
        return _parse(Category, data)

    async def delete_category(self, category_id: str) -> None:
        await self._request("DELETE", f"/api/categories/{category_id}")

    # --- Products ---

    async def list_products(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        order: str = "name",
        skip: int = 0,
        limit: int = 50,
    ) -> ProductPage:
        data = await self._request(
            "GET",
            "/api/products",
            params={
                "category_id": category_id,
                "search": search,
                "order": order,
                "skip": skip,
                "limit": limit,
            },
        )
        return _parse(ProductPage, data)

    async def count_products(self, category_id: Optional[str] = None) -> int:
        data = await self._request(
            "GET", "/api/products/count", params={"category_id": category_id}
        )
        counts = _parse(Dict[str, int], data)
        if "count" not in counts:
            raise StoreError("Unexpected response from the catalog store")
        return counts["count"]

    async def product_category_refs(self) -> List[str]:
        """category_id of every product in the store."""
        data = await self._request("GET", "/api/products/category-refs")
        return _parse(List[str], data)

    async def find_by_sku(self, sku: str) -> Optional[ProductSearchResult]:
        data = await self._request("GET", "/api/products/lookup", params={"sku": sku})
        if data is None:
            return None
        return _parse(ProductSearchResult, data)

    async def create_product(self, fields: Dict[str, Any]) -> Product:
        data = await self._request("POST", "/api/products", json=fields)
        return _parse(Product, data)

    async def update_product(self, product_id: str, fields: Dict[str, Any]) -> Product:
        data = await self._request("PATCH", f"/api/products/{product_id}", json=fields)
        return _parse(Product, data)

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"/api/products/{product_id}")


def _parse(annotation, data):
    """Validates a decoded body; a mismatch is reported as StoreError."""
    try:
        return TypeAdapter(annotation).validate_python(data)
    except ValidationError as e:
        logger.warning(f"Malformed store response: {e.error_count()} validation error(s)")
        raise StoreError("Unexpected response from the catalog store") from e


def _error_detail(response: httpx.Response) -> str:
    detail = f"Store error (HTTP {response.status_code})"
    try:
        body = response.json()
    except ValueError:
        return response.text or detail
    if isinstance(body, dict) and body.get("detail"):
        value = body["detail"]
        if isinstance(value, list):
            # FastAPI validation errors
            return "; ".join(str(item.get("msg", item)) for item in value)
        return str(value)
    return detail
