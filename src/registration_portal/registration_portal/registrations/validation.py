"""Validation and normalization of public registration submissions.

``validate_registration`` never stops at the first problem: every violated
rule is collected per field (API spelling) and raised together as one
ValidationError, so the form can show all messages in a single round trip.
"""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from email_validator import EmailNotValidError, validate_email

from ..common.validators import (
    FieldErrors,
    clean_text,
    extract_digits,
    optional_text,
    require_int_in_range,
    require_text,
)
from ..core.constants import (
    LOCATION_MAX_LENGTH,
    MAX_ADULTS,
    MAX_CHILDREN,
    MIN_ADULTS,
    MIN_CHILDREN,
    NAME_MAX_LENGTH,
    PHONE_DIGIT_RULES,
    PHONE_MAX_DIGITS,
    PHONE_MIN_DIGITS,
)
from ..core.enums import AgeGroup, Emirate, ResidencePlace
from ..core.exceptions import ValidationError
from .model import RegistrationInput

E = TypeVar("E", bound=Enum)

_COUNTRY_CODE = re.compile(r"^\+\d{1,4}$")


def parse_enum(enum_cls: Type[E], value: Any) -> Optional[E]:
    text = clean_text(value)
    if not text:
        return None
    for member in enum_cls:
        if member.value.lower() == text.lower():
            return member
    return None


def normalize_email(value: Any) -> str:
    return clean_text(value).lower()


def is_valid_country_code(code: str) -> bool:
    return bool(_COUNTRY_CODE.match(code))


def phone_length_error(country_code: str, digits: str, *, label: str) -> Optional[str]:
    """Return the message for a digits-only national number that breaks the length rules."""

    if len(digits) < PHONE_MIN_DIGITS:
        return f"{label} must be at least {PHONE_MIN_DIGITS} digits"
    if len(digits) > PHONE_MAX_DIGITS:
        return f"{label} cannot exceed {PHONE_MAX_DIGITS} digits"

    rule = PHONE_DIGIT_RULES.get(country_code)
    if rule:
        low, high = rule
        if not low <= len(digits) <= high:
            expected = f"{low} digits" if low == high else f"{low}-{high} digits"
            return f"Invalid format for {country_code}. Expected {expected}"
    return None


def _validate_phone(
    errors: FieldErrors,
    *,
    code_field: str,
    number_field: str,
    raw_code: Any,
    raw_number: Any,
    label: str,
    required: bool,
) -> tuple[Optional[str], Optional[str]]:
    code = clean_text(raw_code)
    raw = clean_text(raw_number)

    if not raw and not required:
        return None, None

    if not code:
        errors.add(code_field, "Country code is required")
    elif not is_valid_country_code(code):
        errors.add(code_field, "Please select a valid country code")

    if not raw:
        errors.add(number_field, f"{label} is required")
        return None, None

    digits = extract_digits(raw)
    if not digits:
        errors.add(number_field, f"{label} must contain only digits")
        return None, None

    message = phone_length_error(code if not errors.has(code_field) else "", digits, label=label)
    if message:
        errors.add(number_field, message)
        return None, None

    if errors.has(code_field):
        return None, None
    return code, digits


def validate_registration(payload: Mapping[str, Any]) -> RegistrationInput:
    errors = FieldErrors()

    name = require_text(
        errors, "name", payload.get("name"),
        required_message="Name is required",
        max_length=NAME_MAX_LENGTH,
        too_long_message=f"Name cannot exceed {NAME_MAX_LENGTH} characters",
    )

    age_group = parse_enum(AgeGroup, payload.get("ageGroup"))
    if age_group is None:
        errors.add("ageGroup", "Please select a valid age group")

    father_husband_name = require_text(
        errors, "fatherHusbandName", payload.get("fatherHusbandName"),
        required_message="Father's/Husband's name is required",
        max_length=NAME_MAX_LENGTH,
        too_long_message=f"Father's/Husband's name cannot exceed {NAME_MAX_LENGTH} characters",
    )

    house_name = require_text(
        errors, "houseName", payload.get("houseName"),
        required_message="House name is required",
        max_length=NAME_MAX_LENGTH,
        too_long_message=f"House name cannot exceed {NAME_MAX_LENGTH} characters",
    )

    email: Optional[str] = None
    raw_email = clean_text(payload.get("email"))
    if raw_email:
        try:
            email = validate_email(raw_email, check_deliverability=False).normalized.lower()
        except EmailNotValidError:
            errors.add("email", "Please enter a valid email address")

    mobile_code, mobile_number = _validate_phone(
        errors,
        code_field="mobileCountryCode",
        number_field="mobileNumber",
        raw_code=payload.get("mobileCountryCode"),
        raw_number=payload.get("mobileNumber"),
        label="Mobile number",
        required=True,
    )

    raw_wa_code = payload.get("whatsappCountryCode") or payload.get("mobileCountryCode")
    whatsapp_code, whatsapp_number = _validate_phone(
        errors,
        code_field="whatsappCountryCode",
        number_field="whatsappNumber",
        raw_code=raw_wa_code,
        raw_number=payload.get("whatsappNumber"),
        label="WhatsApp number",
        required=False,
    )

    emirate = parse_enum(Emirate, payload.get("residingEmirate"))
    if emirate is None:
        if clean_text(payload.get("residingEmirate")):
            errors.add("residingEmirate", "Please select a valid emirate")
        else:
            errors.add("residingEmirate", "Residing emirate is required")

    location_if_other = optional_text(
        errors, "locationIfOther", payload.get("locationIfOther"),
        max_length=LOCATION_MAX_LENGTH,
        too_long_message=f"Location cannot exceed {LOCATION_MAX_LENGTH} characters",
    )
    if emirate is Emirate.OTHER and not location_if_other and not errors.has("locationIfOther"):
        errors.add("locationIfOther", "Please specify your location")

    place = parse_enum(ResidencePlace, payload.get("placeOfResidence"))
    if place is None:
        errors.add("placeOfResidence", "Please select a valid place of residence")

    adults = require_int_in_range(
        errors, "adultsCount", payload.get("adultsCount"),
        label="Adults count", minimum=MIN_ADULTS, maximum=MAX_ADULTS,
    )

    raw_children = payload.get("childrenCount")
    if raw_children is None or (isinstance(raw_children, str) and not raw_children.strip()):
        children: Optional[int] = 0
    else:
        children = require_int_in_range(
            errors, "childrenCount", raw_children,
            label="Children count", minimum=MIN_CHILDREN, maximum=MAX_CHILDREN,
        )

    if errors:
        raise ValidationError.from_errors(errors.as_dict())

    return RegistrationInput(
        name=name,
        age_group=age_group,
        father_husband_name=father_husband_name,
        house_name=house_name,
        mobile_country_code=mobile_code,
        mobile_number=mobile_number,
        residing_emirate=emirate,
        place_of_residence=place,
        adults_count=adults,
        children_count=children,
        email=email,
        whatsapp_country_code=whatsapp_code,
        whatsapp_number=whatsapp_number,
        location_if_other=location_if_other,
    )


def check_in_bounds_error(
    *, adults: int, children: int, registered_adults: int, registered_children: int
) -> Optional[ValidationError]:
    """Error for checked-in counts above the registered party, None when they fit."""

    over = {
        field: [f"Cannot exceed {limit}"]
        for field, value, limit in (
            ("checkedInAdults", adults, registered_adults),
            ("checkedInChildren", children, registered_children),
        )
        if value > limit
    }
    if not over:
        return None
    return ValidationError(
        f"Cannot check in more than registered: {registered_adults} adults, {registered_children} children",
        over,
    )
