import os

SECRET_KEY = "test-secret"

DB_TYPE = "mysql"
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "workforce_payroll_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False

ROUNDING_PLACES = 2
BATCH_MAX_WORKERS = 4

COMPANY_NAME = "TEST COMPANY"
