import json
from datetime import date, datetime
from pathlib import Path

import pytest

from src.clients import InMemoryPromotionCatalog
from src.models.booking import GuestContact
from src.models.catalog import Room
from src.services.wizard import BookingWizard, WizardContext


FIXTURES_DIR = Path(__file__).parent / "fixtures"

NOW = datetime(2026, 6, 1, 10, 30)
TODAY = NOW.date()


@pytest.fixture
def rooms_data():
    """Load room catalog records from fixture."""
    with open(FIXTURES_DIR / "catalog" / "rooms.json") as f:
        return json.load(f)


@pytest.fixture
def promotions_data():
    """Load promotion catalog records from fixture."""
    with open(FIXTURES_DIR / "catalog" / "promotions.json") as f:
        return json.load(f)


@pytest.fixture
def rooms(rooms_data):
    """Rooms keyed by id."""
    return {record["id"]: Room.model_validate(record) for record in rooms_data}


@pytest.fixture
def deluxe_room(rooms):
    """USD 100 per night, 2 guests."""
    return rooms["deluxe-king"]


@pytest.fixture
def promo_catalog(promotions_data):
    """In-memory promotion catalog built from the fixture records."""
    return InMemoryPromotionCatalog.from_records(promotions_data)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def wizard_context(promo_catalog):
    """Wizard context with a frozen clock and default business rules."""
    return WizardContext(catalog=promo_catalog, clock=lambda: NOW)


@pytest.fixture
def wizard(wizard_context):
    """Wizard not yet started."""
    return BookingWizard(wizard_context)


@pytest.fixture
def contact():
    """Valid lead guest contact."""
    return GuestContact(
        first_name="Linh",
        last_name="Nguyen",
        email="linh.nguyen@example.com",
        phone="+84 912 345 678",
    )
