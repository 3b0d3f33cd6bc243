"""
Shared fixtures for profile tests.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from marketplace.domain.events.base import DomainEvent, EventDispatcher, EventHandler
from marketplace.domain.models.agency_profile import AgencyProfile
from marketplace.domain.models.maid_profile import MaidProfile
from marketplace.domain.models.sponsor_profile import SponsorProfile


def days_from_now(days: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def years_ago(years: int) -> date:
    """January 1st, ``years`` years back; the age on that birthday is exactly ``years``."""
    return date(utc_today().year - years, 1, 1)


def make_agency(**overrides) -> AgencyProfile:
    values = dict(
        id="a1",
        user_id="u1",
        full_name="Acme Placements",
        phone="+971500000000",
        email="ops@acme.example",
        country="AE",
        city="Dubai",
        address="123 Sheikh Zayed Rd",
        license_number="LIC-1",
        license_expiry=days_from_now(365),
        registration_number="REG-1",
        business_license="https://files.example/business.pdf",
        tax_certificate="https://files.example/tax.pdf",
    )
    values.update(overrides)
    return AgencyProfile(**values)


def make_maid(**overrides) -> MaidProfile:
    values = dict(
        id="m1",
        user_id="u2",
        full_name="Almaz Tesfaye",
        date_of_birth=years_ago(30),
        nationality="ET",
        phone="+251911000000",
        languages=["Amharic", "English"],
        skills=["cooking", "childcare"],
        experience_years=4,
        primary_profession="housekeeper",
        availability_status="available",
        salary_expectation=450,
        passport_number="EP1234567",
        passport_expiry=utc_today() + timedelta(days=730),
        passport_copy="https://files.example/passport.pdf",
        profile_photo="https://files.example/photo.jpg",
    )
    values.update(overrides)
    return MaidProfile(**values)


def make_sponsor(**overrides) -> SponsorProfile:
    values = dict(
        id="s1",
        user_id="u3",
        full_name="Fatima Al Mansoori",
        phone="+971501111111",
        email="fatima@example.com",
        country="AE",
        city="Abu Dhabi",
        family_size=5,
        children_count=2,
        children_ages=[4, 9],
        accommodation_type="villa",
        required_skills=["cooking", "cleaning"],
        salary_budget_min=400,
        salary_budget_max=600,
        id_number="784-1990-1234567-1",
        id_document_front="https://files.example/id-front.jpg",
        id_document_back="https://files.example/id-back.jpg",
    )
    values.update(overrides)
    return SponsorProfile(**values)


class RecordingHandler(EventHandler):
    """Collects every event it receives."""

    def __init__(self):
        self.events = []

    def can_handle(self, event: DomainEvent) -> bool:
        return True

    async def handle(self, event: DomainEvent) -> None:
        self.events.append(event)


@pytest.fixture
def agency_factory():
    return make_agency


@pytest.fixture
def maid_factory():
    return make_maid


@pytest.fixture
def sponsor_factory():
    return make_sponsor


@pytest.fixture
def event_dispatcher():
    return EventDispatcher()


@pytest.fixture
def recording_handler(event_dispatcher):
    handler = RecordingHandler()
    event_dispatcher.register_global_handler(handler)
    return handler
