"""Wiring of the booking engine for a host application."""

from datetime import datetime
from typing import Callable, Iterable, Optional

import httpx

from src.clients import InMemoryPromotionCatalog, PromotionCatalogClient
from src.config import Settings, configure_logging, get_logger, settings
from src.models.catalog import PromoCode
from src.services.wizard import BookingWizard, WizardContext

logger = get_logger(__name__)


class BookingConfigurationError(Exception):
    """Raised when the configured booking rules cannot accept any booking."""

    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


def create_booking_wizard(
    app_settings: Optional[Settings] = None,
    promotions: Iterable[PromoCode] = (),
    clock: Callable[[], datetime] = datetime.now,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> BookingWizard:
    """Configure logging, check the booking rules and build a wizard.

    Promotion lookups go to the remote catalog when PROMO_CATALOG_URL is
    set, otherwise to the given promotions.

    Args:
        app_settings: Settings to use, the global instance by default
        promotions: Promotions for synchronous application and local lookups
        clock: Returns the current local time
        transport: Optional httpx transport for the remote catalog

    Returns:
        A wizard ready to be started

    Raises:
        BookingConfigurationError: If the settings make every booking impossible
    """
    app_settings = app_settings or settings
    configure_logging(app_settings.logging)

    problems = app_settings.validate_booking_rules()
    if problems:
        logger.error("Booking rules configuration invalid", problems=problems)
        raise BookingConfigurationError(problems)

    catalog = InMemoryPromotionCatalog(promotions)
    context = WizardContext(catalog=catalog, clock=clock, app_settings=app_settings)

    promotion_lookup = None
    promotion_settings = app_settings.promotion
    if promotion_settings.catalog_url:
        promotion_lookup = PromotionCatalogClient(
            base_url=promotion_settings.catalog_url,
            api_key=promotion_settings.api_key,
            timeout=promotion_settings.request_timeout,
            max_retries=promotion_settings.max_retries,
            transport=transport,
        )

    logger.info(
        "Booking engine ready",
        environment=app_settings.environment,
        remote_promotions=promotion_lookup is not None,
        promotions=len(catalog),
    )
    return BookingWizard(context, promotion_lookup=promotion_lookup)
