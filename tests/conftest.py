from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from registration_portal.auth.service import AdminCredentials
from registration_portal.container import build_container_from_repository
from registration_portal.core.enums import SortField, SortOrder
from registration_portal.core.exceptions import ConflictError
from registration_portal.main import create_app
from registration_portal.registrations.model import Registration, RegistrationInput, RegistrationTotals
from registration_portal.registrations.service import RegistrationService
from registration_portal.registrations.validation import check_in_bounds_error
from registration_portal.stats.service import StatsService

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "test-password"

_SORT_KEYS = {
    SortField.CREATED_AT: lambda r: r.created_at,
    SortField.UPDATED_AT: lambda r: r.updated_at,
    SortField.NAME: lambda r: r.name,
    SortField.HOUSE_NAME: lambda r: r.house_name,
    SortField.AGE_GROUP: lambda r: r.age_group.value,
    SortField.RESIDING_EMIRATE: lambda r: r.residing_emirate.value,
    SortField.PLACE_OF_RESIDENCE: lambda r: r.place_of_residence.value,
    SortField.ADULTS_COUNT: lambda r: r.adults_count,
    SortField.CHILDREN_COUNT: lambda r: r.children_count,
    SortField.IS_CHECKED_IN: lambda r: r.is_checked_in,
}


class InMemoryRegistrationRepository:
    """Dict-backed store that enforces the same unique keys as the MySQL table."""

    def __init__(self):
        self._rows: dict[str, Registration] = {}
        self._next_id = 1
        self._clock = datetime(2025, 10, 1, 9, 0, 0)
        self.fail_with: Optional[Exception] = None

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def get_by_id(self, registration_id):
        self._check()
        return self._rows.get(registration_id)

    def find_by_mobile(self, country_code, number):
        self._check()
        for r in self._rows.values():
            if r.mobile_country_code == country_code and r.mobile_number == number:
                return r
        return None

    def find_by_email(self, email):
        self._check()
        for r in self._rows.values():
            if r.email and r.email == email:
                return r
        return None

    def create(self, data: RegistrationInput):
        self._check()
        if any(
            r.mobile_country_code == data.mobile_country_code and r.mobile_number == data.mobile_number
            for r in self._rows.values()
        ):
            raise ConflictError("A registration with this mobile number already exists.", field="mobileNumber")
        if data.email and any(r.email == data.email for r in self._rows.values()):
            raise ConflictError("This email address is already registered.", field="email")

        rid = f"reg{self._next_id:04d}"
        self._next_id += 1
        now = self._tick()
        self._rows[rid] = Registration(
            registration_id=rid,
            name=data.name,
            age_group=data.age_group,
            father_husband_name=data.father_husband_name,
            house_name=data.house_name,
            mobile_country_code=data.mobile_country_code,
            mobile_number=data.mobile_number,
            residing_emirate=data.residing_emirate,
            place_of_residence=data.place_of_residence,
            adults_count=data.adults_count,
            children_count=data.children_count,
            created_at=now,
            updated_at=now,
            email=data.email,
            whatsapp_country_code=data.whatsapp_country_code,
            whatsapp_number=data.whatsapp_number,
            location_if_other=data.location_if_other,
        )
        return self._rows[rid]

    def _matching(self, search, is_checked_in=None):
        rows = list(self._rows.values())
        if is_checked_in is not None:
            rows = [r for r in rows if r.is_checked_in is is_checked_in]
        term = (search or "").strip().lower()
        if not term:
            return rows
        return [
            r
            for r in rows
            if any(
                term in value.lower()
                for value in (
                    r.name,
                    r.house_name,
                    r.mobile_number,
                    r.mobile_country_code,
                    r.residing_emirate.value,
                    r.place_of_residence.value,
                )
            )
        ]

    def _sorted(self, rows, sort_field, sort_order):
        key = _SORT_KEYS[sort_field]
        reverse = sort_order == SortOrder.DESC
        return sorted(rows, key=lambda r: (key(r), r.registration_id), reverse=reverse)

    def list_page(self, *, search, sort_field, sort_order, offset, limit, is_checked_in=None):
        self._check()
        rows = self._sorted(self._matching(search, is_checked_in), sort_field, sort_order)
        return rows[offset : offset + limit], len(rows)

    def list_all(self, *, search, sort_field, sort_order, is_checked_in=None):
        self._check()
        return self._sorted(self._matching(search, is_checked_in), sort_field, sort_order)

    def search_not_checked_in(self, *, name_term, limit):
        self._check()
        term = name_term.strip().lower()
        rows = [r for r in self._rows.values() if not r.is_checked_in and term in r.name.lower()]
        return sorted(rows, key=lambda r: r.name)[:limit]

    def update_check_in(self, registration_id, *, is_checked_in, checked_in_adults, checked_in_children):
        self._check()
        current = self._rows.get(registration_id)
        if current is None:
            return False
        error = check_in_bounds_error(
            adults=checked_in_adults,
            children=checked_in_children,
            registered_adults=current.adults_count,
            registered_children=current.children_count,
        )
        if error:
            raise error
        self._rows[registration_id] = replace(
            current,
            is_checked_in=is_checked_in,
            checked_in_adults=checked_in_adults,
            checked_in_children=checked_in_children,
            updated_at=self._tick(),
        )
        return True

    def delete_by_id(self, registration_id):
        self._check()
        return self._rows.pop(registration_id, None) is not None

    def totals(self):
        self._check()
        rows = list(self._rows.values())
        checked = [r for r in rows if r.is_checked_in]
        return RegistrationTotals(
            total_registrations=len(rows),
            total_adults=sum(r.adults_count for r in rows),
            total_children=sum(r.children_count for r in rows),
            checked_in_registrations=len(checked),
            checked_in_adults=sum(r.checked_in_adults for r in checked),
            checked_in_children=sum(r.checked_in_children for r in checked),
        )


def make_payload(**overrides) -> dict:
    payload = {
        "name": "Abdul Rahman",
        "ageGroup": "30-40 Years",
        "fatherHusbandName": "Mohammed Kutty",
        "houseName": "Thekkeveedu",
        "email": "rahman@gmail.com",
        "mobileCountryCode": "+971",
        "mobileNumber": "501234567",
        "residingEmirate": "Dubai",
        "placeOfResidence": "Puthiyakavu East",
        "adultsCount": 2,
        "childrenCount": 1,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def repo():
    return InMemoryRegistrationRepository()


@pytest.fixture
def service(repo):
    return RegistrationService(repo)


@pytest.fixture
def stats_service(repo):
    return StatsService(repo)


@pytest.fixture
def credentials():
    return AdminCredentials(email=ADMIN_EMAIL, password=ADMIN_PASSWORD)


@pytest.fixture
def app(repo, credentials):
    container = build_container_from_repository(repo, credentials)
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    res = client.post("/api/admin/auth", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    return client
