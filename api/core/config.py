# core/config.py
import os

from dotenv import load_dotenv

# Load .env
load_dotenv()

# BASE_DIR is the /api folder
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# ---- STORE ----
DEFAULT_DATABASE_URL = "sqlite:///" + os.path.join(BASE_DIR, "bible.db")
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "5"))
DB_POOL_TIMEOUT = float(os.getenv("DB_POOL_TIMEOUT", "5"))
DB_QUERY_TIMEOUT = float(os.getenv("DB_QUERY_TIMEOUT", "10"))

# Corpus schema
VERSES_TABLE = "rst_bible"
BOOKS_TABLE = "rst_bible_books"
DAILY_TABLE = "rst_bible_daily"

# ---- DAILY READING ----
DAILY_TIMEZONE = os.getenv("DAILY_TIMEZONE", "UTC")

# ---- SERVER ----
HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
