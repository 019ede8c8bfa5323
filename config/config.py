import os


def env_bool(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


# Shared server credentials; each tenant gets its own database on this server.
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
}

TENANT_DB_TEMPLATE = os.getenv("TENANT_DB_TEMPLATE", "sphere_{tenant}")
DEFAULT_TENANT = os.getenv("DEFAULT_TENANT", "demo")

# Tolerance windows (HH:MM)
LATE_CUTOFF = os.getenv("LATE_CUTOFF", "09:15")
EARLY_LEAVE_CUTOFF = os.getenv("EARLY_LEAVE_CUTOFF", "16:45")
REGULAR_HOURS_PER_DAY = float(os.getenv("REGULAR_HOURS_PER_DAY", "8"))

# 1 = net worked time excludes breaks, 0 = gross
SUBTRACT_BREAKS = env_bool("SUBTRACT_BREAKS", "1")

EDIT_WINDOW_FUTURE_MINUTES = int(os.getenv("EDIT_WINDOW_FUTURE_MINUTES", "5"))
EDIT_WINDOW_PAST_DAYS = int(os.getenv("EDIT_WINDOW_PAST_DAYS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = env_bool("DEBUG", "0")
