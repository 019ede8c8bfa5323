import os

from config.config import *  # noqa: F401,F403

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", "12345"),
}

TENANT_DB_TEMPLATE = "sphere_test_{tenant}"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
