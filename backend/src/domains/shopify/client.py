"""Shopify Admin API client."""

import json
import httpx
from typing import List, Optional, Dict, Any

from shared import (
    UpstreamAPIError,
    UpstreamParseError,
    LoggerMixin
)
from .types import ShopifyProduct, ShopifyVariant


class ShopifyClient(LoggerMixin):
    """Client for interacting with a single store's Admin API.

    Every call is fire-once: there is no retry or rate-limit backoff.
    """

    def __init__(
        self,
        store_url: str,
        access_token: str,
        api_version: str = "2024-07",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.store_url = store_url.rstrip("/")
        if self.store_url.startswith("https://"):
            self.store_url = self.store_url[len("https://"):]
        self.api_version = api_version
        self.base_url = f"https://{self.store_url}/admin/api/{api_version}"

        headers = {
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json"
        }
        if http_client is None:
            http_client = httpx.AsyncClient(headers=headers, timeout=timeout)
        else:
            http_client.headers.update(headers)
        self.client = http_client

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Make an Admin REST call and return the parsed JSON body."""
        url = f"{self.base_url}/{endpoint.lstrip('/')}"

        try:
            response = await self.client.request(
                method=method,
                url=url,
                params=params,
                json=json_data
            )
        except httpx.RequestError as e:
            raise UpstreamAPIError(
                message=f"Request failed: {str(e)}",
                status_code=None
            ) from e

        text = response.text

        if response.status_code >= 400:
            self.log_event(
                "shopify_request_failed",
                level="warning",
                method=method,
                endpoint=endpoint,
                status_code=response.status_code
            )
            raise UpstreamAPIError(
                message=f"{method} {endpoint} returned {response.status_code}: {text}",
                status_code=response.status_code,
                body=text
            )

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except ValueError as e:
            raise UpstreamParseError(text) from e

        if not isinstance(data, dict):
            raise UpstreamParseError(text)
        return data

    async def graphql(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Run an Admin GraphQL query and return its ``data`` object."""
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        response = await self.request("graphql.json", "POST", json_data=payload)

        errors = response.get("errors")
        if errors:
            raise UpstreamAPIError(
                message=f"Admin GraphQL errors: {errors}",
                status_code=200,
                body=json.dumps(response)
            )

        data = response.get("data")
        if not isinstance(data, dict):
            raise UpstreamParseError(json.dumps(response))
        return data

    async def upload_file(self, attachment: str, filename: str) -> Dict[str, Any]:
        """Upload base64 file contents; returns the raw response."""
        self.log_event("uploading_file", filename=filename)
        return await self.request(
            "files.json",
            "POST",
            json_data={"file": {"attachment": attachment, "filename": filename}}
        )

    async def create_product(self, product: Dict[str, Any]) -> Dict[str, Any]:
        """Create a product; returns the raw response."""
        return await self.request("products.json", "POST", json_data={"product": product})

    async def get_variant(self, variant_id: int) -> Optional[ShopifyVariant]:
        """Get a single variant by ID."""
        response = await self.request(f"variants/{variant_id}.json")
        data = response.get("variant")
        if not data:
            return None
        try:
            return ShopifyVariant(**data)
        except ValueError as e:
            raise UpstreamParseError(json.dumps(response)) from e

    async def delete_product(self, product_id: int) -> None:
        """Delete a product."""
        await self.request(f"products/{product_id}.json", "DELETE")

    async def list_unpublished_products(self, limit: int = 250) -> List[ShopifyProduct]:
        """List one page of unpublished products."""
        params = {
            "limit": min(limit, 250),
            "published_status": "unpublished"
        }

        self.log_event("fetching_unpublished_products", params=params)

        response = await self.request("products.json", params=params)
        products = []
        for data in response.get("products") or []:
            try:
                products.append(ShopifyProduct(**data))
            except (TypeError, ValueError) as e:
                self.log_error(e, "product_parse_error", product_id=data.get("id"))
        return products
