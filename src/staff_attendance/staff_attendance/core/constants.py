"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MERGE_WINDOW_MINUTES = 5
MIN_LINK_PHONE_DIGITS = 10
DEFAULT_POLL_TIMEOUT_SECONDS = 30
UPLOADS_URL_PREFIX = "/uploads"
MAPS_URL_TEMPLATE = "https://www.google.com/maps?q={location}"
