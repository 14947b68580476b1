from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import AgeGroup, Emirate, ResidencePlace


@dataclass(frozen=True)
class RegistrationInput:
    """Normalized, validated submission ready to be persisted."""

    name: str
    age_group: AgeGroup
    father_husband_name: str
    house_name: str
    mobile_country_code: str
    mobile_number: str
    residing_emirate: Emirate
    place_of_residence: ResidencePlace
    adults_count: int
    children_count: int = 0
    email: Optional[str] = None
    whatsapp_country_code: Optional[str] = None
    whatsapp_number: Optional[str] = None
    location_if_other: Optional[str] = None


@dataclass(frozen=True)
class Registration:
    """Domain entity: one attendee party's signup record."""

    registration_id: str
    name: str
    age_group: AgeGroup
    father_husband_name: str
    house_name: str
    mobile_country_code: str
    mobile_number: str
    residing_emirate: Emirate
    place_of_residence: ResidencePlace
    adults_count: int
    children_count: int
    created_at: datetime
    updated_at: datetime
    email: Optional[str] = None
    whatsapp_country_code: Optional[str] = None
    whatsapp_number: Optional[str] = None
    location_if_other: Optional[str] = None
    is_checked_in: bool = False
    checked_in_adults: int = 0
    checked_in_children: int = 0

    @property
    def total_attendees(self) -> int:
        return self.adults_count + self.children_count

    @property
    def total_checked_in(self) -> int:
        return self.checked_in_adults + self.checked_in_children

    def to_dict(self) -> dict:
        """API representation (camelCase keys, derived totals included)."""

        return {
            "id": self.registration_id,
            "name": self.name,
            "ageGroup": self.age_group.value,
            "fatherHusbandName": self.father_husband_name,
            "houseName": self.house_name,
            "email": self.email,
            "mobileCountryCode": self.mobile_country_code,
            "mobileNumber": self.mobile_number,
            "whatsappCountryCode": self.whatsapp_country_code,
            "whatsappNumber": self.whatsapp_number,
            "residingEmirate": self.residing_emirate.value,
            "locationIfOther": self.location_if_other,
            "placeOfResidence": self.place_of_residence.value,
            "adultsCount": self.adults_count,
            "childrenCount": self.children_count,
            "totalAttendees": self.total_attendees,
            "isCheckedIn": self.is_checked_in,
            "checkedInAdults": self.checked_in_adults,
            "checkedInChildren": self.checked_in_children,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }


@dataclass(frozen=True)
class RegistrationPage:
    registrations: list[Registration] = field(default_factory=list)
    page: int = 1
    limit: int = 50
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        if self.total_count <= 0:
            return 0
        return -(-self.total_count // self.limit)

    def to_dict(self) -> dict:
        return {
            "registrations": [r.to_dict() for r in self.registrations],
            "pagination": {
                "page": self.page,
                "limit": self.limit,
                "totalCount": self.total_count,
                "totalPages": self.total_pages,
            },
        }


@dataclass(frozen=True)
class RegistrationTotals:
    """Raw sums read from the store; derived values live in the stats service."""

    total_registrations: int = 0
    total_adults: int = 0
    total_children: int = 0
    checked_in_registrations: int = 0
    checked_in_adults: int = 0
    checked_in_children: int = 0
