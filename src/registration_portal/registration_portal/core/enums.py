from __future__ import annotations

from enum import Enum
from typing import Optional


class AgeGroup(str, Enum):
    """Age band of the person filling in the form."""

    AGE_15_20 = "15-20 Years"
    AGE_20_30 = "20-30 Years"
    AGE_30_40 = "30-40 Years"
    AGE_40_50 = "40-50 Years"
    ABOVE_50 = "Above 50 Years"


class Emirate(str, Enum):
    """Emirate the family currently resides in."""

    ABU_DHABI = "Abu Dhabi"
    DUBAI = "Dubai"
    SHARJAH = "Sharjah"
    AJMAN = "Ajman"
    UMM_AL_QUWAIN = "Umm Al Quwain"
    RAS_AL_KHAIMAH = "Ras Al Khaimah"
    FUJAIRAH = "Fujairah"
    OTHER = "Other"


class ResidencePlace(str, Enum):
    """Place of residence inside the home locality (mahallu limit)."""

    EAST = "Puthiyakavu East"
    WEST = "Puthiyakavu West"
    NORTH = "Puthiyakavu North"
    SOUTH = "Puthiyakavu South"
    CENTRAL = "Puthiyakavu Central"
    OUTSIDE = "Outside Mahallu Limit"


class SortField(str, Enum):
    """Sortable columns exposed by the admin list API (value = API name)."""

    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    NAME = "name"
    HOUSE_NAME = "houseName"
    AGE_GROUP = "ageGroup"
    RESIDING_EMIRATE = "residingEmirate"
    PLACE_OF_RESIDENCE = "placeOfResidence"
    ADULTS_COUNT = "adultsCount"
    CHILDREN_COUNT = "childrenCount"
    IS_CHECKED_IN = "isCheckedIn"

    @property
    def column(self) -> str:
        return _SORT_COLUMNS[self]


_SORT_COLUMNS = {
    SortField.CREATED_AT: "created_at",
    SortField.UPDATED_AT: "updated_at",
    SortField.NAME: "name",
    SortField.HOUSE_NAME: "house_name",
    SortField.AGE_GROUP: "age_group",
    SortField.RESIDING_EMIRATE: "residing_emirate",
    SortField.PLACE_OF_RESIDENCE: "place_of_residence",
    SortField.ADULTS_COUNT: "adults_count",
    SortField.CHILDREN_COUNT: "children_count",
    SortField.IS_CHECKED_IN: "is_checked_in",
}


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CheckInFilter(str, Enum):
    """Dashboard filter on check-in state."""

    ALL = "all"
    CHECKED_IN = "checked-in"
    NOT_CHECKED_IN = "not-checked-in"

    @property
    def is_checked_in(self) -> Optional[bool]:
        if self is CheckInFilter.ALL:
            return None
        return self is CheckInFilter.CHECKED_IN
