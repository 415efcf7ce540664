"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SHIFT_START = "09:00"
DEFAULT_LATE_THRESHOLD_MINUTES = 30
DEFAULT_TREND_DAYS = 7
DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60
DEFAULT_MIN_PASSWORD_LENGTH = 6
RECENT_CAMPAIGN_DAYS = 7

# Collection names in the document store.
COLLECTION_ATTENDANCE = "attendance"
COLLECTION_CAMPAIGNS = "campaigns"
COLLECTION_USERS = "users"
