import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tour_office"),
    "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Exchange rates
RATE_SOURCES_ENABLED = bool(int(os.getenv("RATE_SOURCES_ENABLED", "1")))
RATE_REFRESH_SECONDS = int(os.getenv("RATE_REFRESH_SECONDS", "600"))
RATE_HTTP_TIMEOUT = float(os.getenv("RATE_HTTP_TIMEOUT", "10"))
DEFAULT_USDTRY = float(os.getenv("DEFAULT_USDTRY", "34"))
DEFAULT_SARTRY = float(os.getenv("DEFAULT_SARTRY", "9"))
