from __future__ import annotations

from dataclasses import dataclass

from ..registrations.repository import RegistrationRepository
from ..registrations.service import storage_guard


@dataclass(frozen=True)
class AdminStats:
    total_registrations: int
    total_adults: int
    total_children: int
    checked_in_registrations: int
    checked_in_adults: int
    checked_in_children: int

    @property
    def total_attendees(self) -> int:
        return self.total_adults + self.total_children

    @property
    def checked_in_attendees(self) -> int:
        return self.checked_in_adults + self.checked_in_children

    def to_dict(self) -> dict:
        return {
            "totalRegistrations": self.total_registrations,
            "totalAdults": self.total_adults,
            "totalChildren": self.total_children,
            "totalAttendees": self.total_attendees,
            "checkedInRegistrations": self.checked_in_registrations,
            "checkedInAdults": self.checked_in_adults,
            "checkedInChildren": self.checked_in_children,
            "checkedInAttendees": self.checked_in_attendees,
        }


class StatsService:
    """Dashboard counters, recomputed from the store on every call."""

    def __init__(self, registrations: RegistrationRepository):
        self._registrations = registrations

    def compute(self) -> AdminStats:
        with storage_guard("compute statistics"):
            t = self._registrations.totals()
        return AdminStats(
            total_registrations=t.total_registrations,
            total_adults=t.total_adults,
            total_children=t.total_children,
            checked_in_registrations=t.checked_in_registrations,
            checked_in_adults=t.checked_in_adults,
            checked_in_children=t.checked_in_children,
        )
