"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_DAYS = 7
SESSION_COOKIE_NAME = "admin_session"

NAME_MAX_LENGTH = 100
LOCATION_MAX_LENGTH = 100

MIN_ADULTS = 1
MAX_ADULTS = 50
MIN_CHILDREN = 0
MAX_CHILDREN = 50

PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500
DEFAULT_CHECKIN_SEARCH_LIMIT = 10
MIN_CHECKIN_SEARCH_LENGTH = 2

# Allowed national-number lengths (digits after the country code), inclusive.
# Codes not listed fall back to PHONE_MIN_DIGITS..PHONE_MAX_DIGITS.
PHONE_DIGIT_RULES: dict[str, tuple[int, int]] = {
    # Middle East & Gulf
    "+971": (9, 9),
    "+966": (9, 9),
    "+965": (8, 8),
    "+974": (8, 8),
    "+973": (8, 8),
    "+968": (8, 8),
    "+962": (9, 9),
    "+961": (8, 8),
    "+964": (10, 10),
    "+972": (9, 9),
    "+98": (10, 10),
    "+90": (10, 10),
    # South Asia
    "+91": (10, 10),
    "+92": (10, 10),
    "+94": (9, 9),
    "+880": (10, 10),
    # Southeast Asia
    "+65": (8, 8),
    "+60": (9, 10),
    "+66": (9, 9),
    "+62": (9, 12),
    "+63": (10, 10),
    "+84": (9, 9),
    # East Asia
    "+86": (11, 11),
    "+81": (10, 11),
    "+82": (10, 11),
    # North America
    "+1": (10, 10),
    "+52": (10, 10),
    # Europe
    "+44": (10, 11),
    "+49": (10, 12),
    "+33": (9, 9),
    "+39": (10, 10),
    "+34": (9, 9),
    "+31": (9, 9),
    "+32": (9, 9),
    "+41": (9, 9),
    "+43": (10, 11),
    "+46": (9, 9),
    "+47": (8, 8),
    "+45": (8, 8),
    "+351": (9, 9),
    "+30": (10, 10),
    "+48": (9, 9),
    "+36": (9, 9),
    "+420": (9, 9),
    "+421": (9, 9),
    "+385": (8, 9),
    "+386": (8, 8),
    "+370": (8, 8),
    "+371": (8, 8),
    "+372": (7, 8),
    # Oceania
    "+61": (9, 9),
    # Africa
    "+27": (9, 9),
    "+20": (10, 10),
    "+234": (10, 10),
    "+254": (9, 9),
    # South America
    "+55": (10, 11),
    "+54": (10, 10),
    # Other
    "+7": (10, 10),
}
