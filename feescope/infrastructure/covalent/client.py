"""Paginated transaction history from the Covalent ``transactions_v2`` endpoint."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from feescope.domain.fees.exceptions import ConfigurationError, UpstreamFetchError
from feescope.domain.fees.models import RawTransaction

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.covalenthq.com/v1"
DEFAULT_PAGE_SIZE = 1000


def _error_message(response: httpx.Response) -> str:
    message = response.reason_phrase or f"Error Code: {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        logger.debug("Could not parse Covalent error response as JSON")
        return message
    if isinstance(payload, dict) and payload.get("error_message"):
        return str(payload["error_message"])
    return message


class CovalentClient:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size

    async def fetch_chain_transactions(self, address: str, chain_slug: str) -> list[RawTransaction]:
        if not self._api_key:
            raise ConfigurationError("COVALENT_API_KEY is not set on the server.")

        url = f"{self._base_url}/{chain_slug}/address/{address}/transactions_v2/"
        items: list[RawTransaction] = []
        page = 0
        while True:
            data = await self._fetch_page(url, chain_slug, page)
            page_items = data.get("items")
            if not page_items:
                break
            items.extend(RawTransaction.from_api(item) for item in page_items)
            pagination = data.get("pagination") or {}
            if not pagination.get("has_more"):
                break
            page += 1

        logger.debug("Fetched %d transactions for %s on %s (%d pages)", len(items), address, chain_slug, page + 1)
        return items

    async def _fetch_page(self, url: str, chain_slug: str, page: int) -> dict[str, Any]:
        params = {"page-number": page, "page-size": self._page_size, "key": self._api_key}
        try:
            response = await self._http.get(url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(chain_slug, None, str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            raise UpstreamFetchError(chain_slug, response.status_code, _error_message(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamFetchError(chain_slug, response.status_code, "Malformed JSON response") from exc
        if not isinstance(payload, dict):
            raise UpstreamFetchError(chain_slug, response.status_code, "Unexpected response shape")
        return payload.get("data") or {}
