from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import clean_text, parse_int
from ..core.constants import (
    DEFAULT_CHECKIN_SEARCH_LIMIT,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_CHECKIN_SEARCH_LENGTH,
)
from ..core.enums import CheckInFilter, SortField, SortOrder
from ..core.exceptions import ConflictError, DomainError, InternalError, NotFoundError, ValidationError
from .model import Registration, RegistrationPage
from .repository import RegistrationRepository
from .validation import check_in_bounds_error, normalize_email, validate_registration

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(action: str):
    """Surface unexpected store failures as a generic InternalError.

    Domain errors pass through untouched; everything else is logged with its
    traceback and replaced so no driver internals reach the client.
    """

    try:
        yield
    except DomainError:
        raise
    except Exception as e:
        logger.exception("Storage failure while trying to %s", action)
        raise InternalError(f"Failed to {action}. Please try again later.") from e


def parse_sort(sort_by: Optional[str], sort_order: Optional[str]) -> tuple[SortField, SortOrder]:
    field = SortField.CREATED_AT
    if clean_text(sort_by):
        try:
            field = SortField(clean_text(sort_by))
        except ValueError:
            raise ValidationError("Unsupported sort field", {"sortBy": [f"Cannot sort by '{sort_by}'"]})
    order = SortOrder.ASC if clean_text(sort_order).lower() == SortOrder.ASC.value else SortOrder.DESC
    return field, order


def parse_check_in_filter(value: Any) -> Optional[bool]:
    """Map `all | checked-in | not-checked-in` (or a true/false flag) to a check-in state filter."""

    if isinstance(value, bool):
        return value
    text = clean_text(value).lower()
    if not text:
        return None
    if text in {"true", "1"}:
        return True
    if text in {"false", "0"}:
        return False
    try:
        return CheckInFilter(text).is_checked_in
    except ValueError:
        raise ValidationError(
            "Unsupported check-in filter",
            {"checkInStatus": ["Use one of: all, checked-in, not-checked-in"]},
        )


def _positive_int(value: Any, *, field: str, default: int) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    number = parse_int(value)
    if number is None or number < 1:
        raise ValidationError(f"{field} must be a positive integer", {field: [f"{field} must be a positive integer"]})
    return number


class RegistrationService:
    """Use cases over the registration store (public submission and admin dashboard)."""

    def __init__(self, registrations: RegistrationRepository):
        self._registrations = registrations

    def create(self, payload: Mapping[str, Any]) -> Registration:
        data = validate_registration(payload)

        with storage_guard("save registration"):
            if self._registrations.find_by_mobile(data.mobile_country_code, data.mobile_number):
                raise ConflictError(
                    "This mobile number is already registered. Please use a different mobile number "
                    "or contact support if this is your number.",
                    field="mobileNumber",
                )
            if data.email and self._registrations.find_by_email(data.email):
                raise ConflictError(
                    "This email address is already registered. Please use a different email "
                    "or contact support if this is your email.",
                    field="email",
                )
            # The unique index decides races between concurrent submissions.
            registration = self._registrations.create(data)

        logger.info(
            "Registration %s created (%s adults, %s children)",
            registration.registration_id,
            registration.adults_count,
            registration.children_count,
        )
        return registration

    def get(self, registration_id: str) -> Registration:
        registration_id = clean_text(registration_id)
        if not registration_id:
            raise ValidationError("Registration ID is required", {"id": ["Registration ID is required"]})
        with storage_guard("load registration"):
            registration = self._registrations.get_by_id(registration_id)
        if not registration:
            raise NotFoundError("Registration with the specified ID was not found.")
        return registration

    def is_email_available(self, email: Any) -> bool:
        normalized = normalize_email(email)
        if not normalized:
            raise ValidationError("Email is required", {"email": ["Email is required"]})
        with storage_guard("check email availability"):
            return self._registrations.find_by_email(normalized) is None

    def list(
        self,
        *,
        search: Optional[str] = None,
        page: Any = 1,
        limit: Any = DEFAULT_PAGE_SIZE,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        check_in_status: Any = None,
    ) -> RegistrationPage:
        page_n = _positive_int(page, field="page", default=1)
        limit_n = min(_positive_int(limit, field="limit", default=DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
        field, order = parse_sort(sort_by, sort_order)
        is_checked_in = parse_check_in_filter(check_in_status)

        with storage_guard("fetch registrations"):
            rows, total = self._registrations.list_page(
                search=clean_text(search) or None,
                is_checked_in=is_checked_in,
                sort_field=field,
                sort_order=order,
                offset=(page_n - 1) * limit_n,
                limit=limit_n,
            )
        return RegistrationPage(registrations=list(rows), page=page_n, limit=limit_n, total_count=int(total))

    def list_for_export(
        self,
        *,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        check_in_status: Any = None,
    ) -> Sequence[Registration]:
        field, order = parse_sort(sort_by, sort_order)
        is_checked_in = parse_check_in_filter(check_in_status)
        with storage_guard("export registrations"):
            return list(
                self._registrations.list_all(
                    search=clean_text(search) or None,
                    sort_field=field,
                    sort_order=order,
                    is_checked_in=is_checked_in,
                )
            )

    def search_for_checkin(self, term: Optional[str], *, limit: Any = DEFAULT_CHECKIN_SEARCH_LIMIT) -> list[Registration]:
        term = clean_text(term)
        if len(term) < MIN_CHECKIN_SEARCH_LENGTH:
            return []
        limit_n = min(_positive_int(limit, field="limit", default=DEFAULT_CHECKIN_SEARCH_LIMIT), MAX_PAGE_SIZE)
        with storage_guard("search registrations"):
            return list(self._registrations.search_not_checked_in(name_term=term, limit=limit_n))

    def set_check_in(
        self,
        registration_id: str,
        *,
        is_checked_in: Any,
        checked_in_adults: Any = None,
        checked_in_children: Any = None,
    ) -> Registration:
        """Check a party in (with counts) or out (counts reset to zero).

        Omitted counts on check-in default to the full registered party.
        """

        if not isinstance(is_checked_in, bool):
            raise ValidationError(
                "Registration ID and check-in status are required.",
                {"isCheckedIn": ["Check-in status must be true or false"]},
            )

        registration = self.get(registration_id)

        if not is_checked_in:
            return self._apply_check_in(registration, is_checked_in=False, adults=0, children=0)

        adults = registration.adults_count if checked_in_adults is None else checked_in_adults
        children = registration.children_count if checked_in_children is None else checked_in_children
        adults_n, children_n = self._validate_counts(registration, adults, children)
        return self._apply_check_in(registration, is_checked_in=True, adults=adults_n, children=children_n)

    def check_in(self, registration_id: str, *, checked_in_adults: Any, checked_in_children: Any) -> Registration:
        if clean_text(registration_id) == "":
            raise ValidationError("Registration ID is required", {"id": ["Registration ID is required"]})
        errors: dict[str, list[str]] = {}
        for field, value in (("checkedInAdults", checked_in_adults), ("checkedInChildren", checked_in_children)):
            if parse_int(value) is None or isinstance(value, str):
                errors[field] = ["Adult and children counts must be numbers"]
        if errors:
            raise ValidationError("Adult and children counts must be numbers", errors)

        registration = self.get(registration_id)
        adults_n, children_n = self._validate_counts(registration, checked_in_adults, checked_in_children)
        return self._apply_check_in(registration, is_checked_in=True, adults=adults_n, children=children_n)

    def delete(self, registration_id: str) -> Registration:
        registration = self.get(registration_id)
        with storage_guard("delete registration"):
            deleted = self._registrations.delete_by_id(registration.registration_id)
        if not deleted:
            raise NotFoundError("Registration with the specified ID was not found.")
        logger.info("Registration %s deleted", registration.registration_id)
        return registration

    @staticmethod
    def _validate_counts(registration: Registration, adults: Any, children: Any) -> tuple[int, int]:
        adults_n = parse_int(adults)
        children_n = parse_int(children)
        errors: dict[str, list[str]] = {}
        if adults_n is None or adults_n < 0:
            errors["checkedInAdults"] = ["Checked-in adults must be a whole number of at least 0"]
        if children_n is None or children_n < 0:
            errors["checkedInChildren"] = ["Checked-in children must be a whole number of at least 0"]
        if errors:
            raise ValidationError("Invalid counts", errors)

        error = check_in_bounds_error(
            adults=adults_n,
            children=children_n,
            registered_adults=registration.adults_count,
            registered_children=registration.children_count,
        )
        if error:
            raise error
        return adults_n, children_n

    def _apply_check_in(self, registration: Registration, *, is_checked_in: bool, adults: int, children: int) -> Registration:
        with storage_guard("update check-in status"):
            updated = self._registrations.update_check_in(
                registration.registration_id,
                is_checked_in=is_checked_in,
                checked_in_adults=adults,
                checked_in_children=children,
            )
            if not updated:
                raise NotFoundError("Registration with the specified ID was not found.")
            fresh = self._registrations.get_by_id(registration.registration_id)
        if fresh is None:
            raise NotFoundError("Registration with the specified ID was not found.")

        logger.info(
            "Registration %s %s (%s adults, %s children)",
            registration.registration_id,
            "checked in" if is_checked_in else "checked out",
            adults,
            children,
        )
        return fresh
