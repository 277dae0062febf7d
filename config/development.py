import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_TYPE = os.getenv("DB_TYPE", "mysql")
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workforce_payroll"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

# Currency precision of payment reports; empty disables rounding
_rounding = os.getenv("ROUNDING_PLACES", "2")
ROUNDING_PLACES = int(_rounding) if _rounding else None
BATCH_MAX_WORKERS = int(os.getenv("BATCH_MAX_WORKERS", "8"))

COMPANY_NAME = os.getenv("COMPANY_NAME", "DNS MANPOWER SUPPLIERS")
