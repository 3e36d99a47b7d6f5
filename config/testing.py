import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tour_office_test"),
    "pool_size": 2,
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Tests never touch the network; unknown rates fall back to the defaults.
RATE_SOURCES_ENABLED = False
RATE_REFRESH_SECONDS = 600
RATE_HTTP_TIMEOUT = 1.0
DEFAULT_USDTRY = 34.0
DEFAULT_SARTRY = 9.0
