# smart_sac/core/constants.py
"""
Core application constants.

These values centralize common constants such as:
- Pagination defaults.
- Common HTTP header names.
- Dashboard section sizes.
"""

# Pagination defaults
DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100


# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"

# Dashboard section sizes
DASHBOARD_ANNOUNCEMENT_LIMIT: int = 2
DASHBOARD_TICKET_LIMIT: int = 5
DASHBOARD_HISTORY_LIMIT: int = 5

# Recent history listings
RECENT_HISTORY_LIMIT: int = 10

# Width of the occupant roll_no and duration columns
OCCUPANT_FIELD_MAX_LENGTH: int = 50
