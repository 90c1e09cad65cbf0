import os

SECRET_KEY = "test-secret"

DB_PATH = os.getenv("DB_PATH", "smartHR-test.db")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = True
DEFAULT_ADMIN_PASSWORD = "admin123"
