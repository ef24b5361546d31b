import os

SECRET_KEY = "test-secret"

STORE_BACKEND = "memory"
STORE_PATH = None

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_db_test"),
}

CREDENTIAL_POLICY = "plaintext"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_SEED_DB = True
