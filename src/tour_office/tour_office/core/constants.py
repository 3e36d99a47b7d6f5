"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Currency

REFERENCE_CURRENCY = Currency.TRY

# Used whenever a live rate is unknown (0).
DEFAULT_USDTRY = 34.0
DEFAULT_SARTRY = 9.0

DAY_COUNTS = (7, 10, 14, 20)
FEE_ROOM_TYPES = (2, 3, 4)
ROOM_SIZES = (2, 3, 4, 5)

# Payments, expenses and company entries are entered in these currencies only.
ENTRY_CURRENCIES = (Currency.TRY, Currency.USD)

DEFAULT_RATE_REFRESH_SECONDS = 600
DEFAULT_RATE_HTTP_TIMEOUT = 10.0
DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6
