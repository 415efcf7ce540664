SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": "localhost",
    "port": 3306,
    "user": "root",
    "password": "",
    "database": "activation_test",
}

STORE_BACKEND = "memory"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
AUTO_SEED_DB = False

SHIFT_START = "09:00"
LATE_THRESHOLD_MINUTES = 30
CACHE_TTL_SECONDS = 60
REPORT_TIMEZONE = ""
