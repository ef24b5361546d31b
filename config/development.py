import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# memory | json | mysql
STORE_BACKEND = os.getenv("STORE_BACKEND", "json")
STORE_PATH = os.getenv("STORE_PATH", "instance/leave_store.json")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "leave_db"),
}

# plaintext | hashed
CREDENTIAL_POLICY = os.getenv("CREDENTIAL_POLICY", "plaintext")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Seed starter users/requests/credentials on first access to the store
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
