"""Promotion catalog collaborators: in-memory and HTTP backed."""

import asyncio
from typing import Any, Iterable, Mapping, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError
from structlog import get_logger

from src.config import settings
from src.models.catalog.promotion import PromoCode
from src.rules.promo_code_engine import PromoCodeEngine

logger = get_logger(__name__)


class PromotionCatalogError(Exception):
    """Base exception for promotion catalog errors."""

    pass


class PromotionCatalogAuthenticationError(PromotionCatalogError):
    """Raised when the promotion catalog rejects our credentials."""

    pass


class PromotionCatalogServerError(PromotionCatalogError):
    """Raised when the promotion catalog keeps returning server errors."""

    pass


class InMemoryPromotionCatalog(Mapping[str, PromoCode]):
    """Read-only catalog built from promotion records supplied by the host site."""

    def __init__(self, promotions: Iterable[PromoCode] = ()):
        self._promotions = {promo.code: promo for promo in promotions}

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "InMemoryPromotionCatalog":
        """Build a catalog from raw catalog records (camelCase keys)."""
        return cls(PromoCode.model_validate(record) for record in records)

    def __getitem__(self, code: str) -> PromoCode:
        return self._promotions[PromoCodeEngine.normalize(code)]

    def __iter__(self):
        return iter(self._promotions)

    def __len__(self) -> int:
        return len(self._promotions)

    def get(self, code: str, default: Optional[PromoCode] = None) -> Optional[PromoCode]:
        return self._promotions.get(PromoCodeEngine.normalize(code), default)

    async def lookup(self, code: str) -> Optional[PromoCode]:
        return self.get(code)


class PromotionCatalogClient:
    """Async client for a remote promotion catalog."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client, falling back to PROMO_* settings.

        Args:
            base_url: Catalog base URL
            api_key: Bearer token sent with every request
            timeout: Request timeout in seconds
            max_retries: Attempts for server errors and timeouts
            transport: Optional httpx transport (used to stub the backend)
        """
        self.base_url = (base_url or settings.promotion.catalog_url).rstrip("/")
        self.api_key = api_key or settings.promotion.api_key
        self.timeout = timeout or settings.promotion.request_timeout
        self.max_retries = max(1, max_retries or settings.promotion.max_retries)
        self.retry_backoff_base = 2  # Exponential backoff base
        self.transport = transport

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": "ReservationEngine/1.0",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def lookup(self, code: str) -> Optional[PromoCode]:
        """Fetch a promotion by code.

        Args:
            code: Promotion code, normalized before the request

        Returns:
            The promotion record, or None when the catalog does not know the code

        Raises:
            PromotionCatalogAuthenticationError: On 401/403
            PromotionCatalogServerError: When 5xx responses persist after retries
            PromotionCatalogError: For timeouts, transport errors and bad payloads
        """
        normalized = PromoCodeEngine.normalize(code)
        if not normalized:
            return None

        endpoint = f"/promotions/{quote(normalized, safe='')}"
        url = f"{self.base_url}{endpoint}"

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(
                    timeout=self.timeout, transport=self.transport
                ) as client:
                    response = await client.get(url, headers=self._get_headers())

                if response.status_code in (401, 403):
                    logger.error(
                        "Promotion catalog authentication failed",
                        endpoint=endpoint,
                        status_code=response.status_code,
                    )
                    raise PromotionCatalogAuthenticationError(
                        f"Access denied for {endpoint}: check PROMO_API_KEY"
                    )

                if response.status_code == 404:
                    logger.info("Promotion code not in catalog", code=normalized)
                    return None

                if response.status_code >= 500:
                    if attempt < self.max_retries - 1:
                        wait_time = self.retry_backoff_base ** attempt
                        logger.warning(
                            "Promotion catalog server error, retrying",
                            endpoint=endpoint,
                            status_code=response.status_code,
                            attempt=attempt + 1,
                            max_retries=self.max_retries,
                            wait_seconds=wait_time,
                        )
                        await asyncio.sleep(wait_time)
                        continue
                    logger.error(
                        "Promotion catalog server error, max retries exceeded",
                        endpoint=endpoint,
                        status_code=response.status_code,
                    )
                    raise PromotionCatalogServerError(
                        f"Server error at {endpoint}: {response.status_code}"
                    )

                if response.status_code != 200:
                    logger.error(
                        "Unexpected promotion catalog response",
                        endpoint=endpoint,
                        status_code=response.status_code,
                        response_text=response.text[:200],
                    )
                    raise PromotionCatalogError(
                        f"Unexpected response from {endpoint}: {response.status_code}"
                    )

                try:
                    promo = PromoCode.model_validate(response.json())
                except (ValueError, ValidationError) as e:
                    raise PromotionCatalogError(
                        f"Malformed promotion record from {endpoint}"
                    ) from e

                logger.debug("Promotion fetched", code=promo.code, type=promo.type.value)
                return promo

            except httpx.TimeoutException as e:
                if attempt < self.max_retries - 1:
                    wait_time = self.retry_backoff_base ** attempt
                    logger.warning(
                        "Promotion catalog timeout, retrying",
                        endpoint=endpoint,
                        attempt=attempt + 1,
                        max_retries=self.max_retries,
                        wait_seconds=wait_time,
                    )
                    await asyncio.sleep(wait_time)
                    continue
                logger.error("Promotion catalog timeout, max retries exceeded", endpoint=endpoint)
                raise PromotionCatalogError(f"Request timeout for {endpoint}") from e

            except httpx.RequestError as e:
                logger.error("Promotion catalog request failed", endpoint=endpoint, error=str(e))
                raise PromotionCatalogError(f"Request failed for {endpoint}: {e}") from e

        raise PromotionCatalogError(f"Failed to complete request to {endpoint}")
