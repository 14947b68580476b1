from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SortField, SortOrder
from .model import Registration, RegistrationInput, RegistrationTotals


class RegistrationRepository(Protocol):
    """Store contract for registrations.

    The store owns identity and timestamps, and must enforce the
    (mobile_country_code, mobile_number) and email uniqueness itself:
    ``create`` raises ConflictError when a unique key is violated.
    """

    def get_by_id(self, registration_id: str) -> Optional[Registration]:
        raise NotImplementedError

    def find_by_mobile(self, country_code: str, number: str) -> Optional[Registration]:
        raise NotImplementedError

    def find_by_email(self, email: str) -> Optional[Registration]:
        raise NotImplementedError

    def create(self, data: RegistrationInput) -> Registration:
        raise NotImplementedError

    def list_page(
        self,
        *,
        search: Optional[str],
        sort_field: SortField,
        sort_order: SortOrder,
        offset: int,
        limit: int,
        is_checked_in: Optional[bool] = None,
    ) -> tuple[Sequence[Registration], int]:
        """Return one page of matches plus the total number of matches.

        ``is_checked_in`` narrows the result to one check-in state; None keeps both.
        """

        raise NotImplementedError

    def list_all(
        self,
        *,
        search: Optional[str],
        sort_field: SortField,
        sort_order: SortOrder,
        is_checked_in: Optional[bool] = None,
    ) -> Sequence[Registration]:
        raise NotImplementedError

    def search_not_checked_in(self, *, name_term: str, limit: int) -> Sequence[Registration]:
        raise NotImplementedError

    def update_check_in(
        self,
        registration_id: str,
        *,
        is_checked_in: bool,
        checked_in_adults: int,
        checked_in_children: int,
    ) -> bool:
        """False when the id is unknown.

        Raises ValidationError when the counts exceed the stored party size.
        """

        raise NotImplementedError

    def delete_by_id(self, registration_id: str) -> bool:
        raise NotImplementedError

    def totals(self) -> RegistrationTotals:
        raise NotImplementedError
