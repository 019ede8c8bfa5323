"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DEFAULT_TENANT = "demo"
TENANT_DB_TEMPLATE = "sphere_{tenant}"
TENANT_HEADER = "X-Tenant-ID"
TENANT_QUERY_PARAM = "tenant"

DEFAULT_LATE_CUTOFF = time(9, 15)
DEFAULT_EARLY_LEAVE_CUTOFF = time(16, 45)
DEFAULT_REGULAR_HOURS_PER_DAY = 8.0

EDIT_WINDOW_FUTURE_MINUTES = 5
EDIT_WINDOW_PAST_DAYS = 30

DEFAULT_REPORT_DAYS = 30
TOP_EMPLOYEES_LIMIT = 5

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
