import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "checkin_penalty_test"),
}

FCM_PROJECT_ID = ""
FCM_CREDENTIALS_FILE = ""
FCM_TIMEOUT_SECONDS = 1.0

LEDGER_MAX_ATTEMPTS = 5
LEDGER_RETRY_BACKOFF_SECONDS = 0.0

LOG_LEVEL = "DEBUG"
DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
