"""
Async client for the compound data provider ("vault" API).

Wraps httpx.AsyncClient. Transport errors are retried with tenacity;
HTTP error statuses are not retried and surface as VaultAPIError.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from supp_ix.config import settings
from supp_ix.errors import (
    ConfigError,
    NotFoundError,
    SchemaError,
    VaultAPIError,
    VaultTransportError,
)
from supp_ix.schemas import (
    CompoundDetail,
    CompoundSearchResponse,
    DrugProfile,
    InteractionsResponse,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _segment(value: str) -> str:
    """Encode a single path segment (slashes included)."""
    return quote(value, safe="")


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """
    Await independent coroutines concurrently.

    If one fails, the others are cancelled before the first error is
    re-raised unwrapped (not as an ExceptionGroup).
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(aw) for aw in aws]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from None
    return [task.result() for task in tasks]


class VaultClient:
    """
    Compound data provider client.

    Usage:
        async with VaultClient() as client:
            hits = await client.search_compounds("ashwagandha", limit=1)
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            base_url: API root, defaults to settings.api_url
            api_key: Sent as X-API-Key, defaults to settings.api_key
            timeout: Per-request timeout in seconds
            max_retries: Attempts per request on transport errors
            backoff: Exponential back-off multiplier in seconds (0 disables waiting)
            transport: Optional httpx transport (used by tests)
        """
        api_key = api_key or settings.api_key
        if not api_key:
            raise ConfigError("VAULT_API_KEY required")

        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.max_retries = max_retries or settings.max_retries
        self.backoff = backoff
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"X-API-Key": api_key, "Content-Type": "application/json"},
            timeout=timeout or settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "VaultClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return decoded JSON, raising VaultError subclasses."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.backoff, max=30),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._http.request(method, path, **kwargs)
        except httpx.TransportError as e:
            raise VaultTransportError(f"{method} {path}: {e}") from e

        logger.debug("%s %s -> %s", method, path, response.status_code)
        if response.status_code == 404:
            raise NotFoundError(response.status_code, response.text)
        if not response.is_success:
            raise VaultAPIError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise SchemaError(f"{method} {path}: response is not JSON") from e

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise SchemaError(f"Invalid {model.__name__} payload: {e}") from e

    # -------------------------------------------------------------------------
    # Operations consumed by synthesis
    # -------------------------------------------------------------------------

    async def search_compounds(self, query: str, limit: int = 10) -> CompoundSearchResponse:
        """Fuzzy compound search (aliases, brands, misspellings)."""
        data = await self._request(
            "GET", "/api/compounds/search", params={"q": query, "limit": limit}
        )
        return self._parse(CompoundSearchResponse, data)

    async def get_compound_interactions(self, compound_id: str) -> InteractionsResponse:
        """All known interactions for a compound."""
        data = await self._request(
            "GET", f"/api/compounds/{_segment(compound_id)}/interactions"
        )
        return self._parse(InteractionsResponse, data)

    async def get_compound_detail(self, compound_id: str) -> CompoundDetail:
        """Compound record parsed for its CYP450 pathway data."""
        return self._parse(CompoundDetail, await self.get_compound(compound_id))

    async def get_drug_profile(self, drug_key: str) -> DrugProfile:
        """Drug metabolic profile. Raises NotFoundError for unknown drugs."""
        data = await self._request("GET", f"/api/drugs/{_segment(drug_key)}")
        return self._parse(DrugProfile, data)

    # -------------------------------------------------------------------------
    # Pass-through lookups (provider-owned shapes)
    # -------------------------------------------------------------------------

    async def get_compound(self, compound_id: str) -> dict:
        """Raw compound profile with research findings and aliases."""
        return await self._request("GET", f"/api/compounds/{_segment(compound_id)}")

    async def get_compound_info(self, compound_id: str) -> dict:
        """Compound profile merged with its interaction list."""
        compound, interactions = await gather_or_cancel(
            self.get_compound(compound_id),
            self._request("GET", f"/api/compounds/{_segment(compound_id)}/interactions"),
        )
        if not isinstance(compound, dict):
            raise SchemaError(f"Compound {compound_id}: expected a JSON object")
        if interactions is None:
            interactions = {}
        if not isinstance(interactions, dict):
            raise SchemaError(f"Interactions for {compound_id}: expected a JSON object")
        return {**compound, "interactions": interactions.get("interactions") or []}

    async def check_interactions(self, supplements: list[str], medications: list[str]) -> dict:
        """Batch risk check of supplements against medications."""
        return await self._request(
            "POST",
            "/api/interactions/check",
            json={"supplements": supplements, "medications": medications},
        )

    async def get_safety_profile(self, compound: str) -> dict:
        """CAERS adverse event safety signals (PRR, category alerts) for a supplement."""
        return await self._request("GET", f"/api/safety/profile/{_segment(compound)}")
