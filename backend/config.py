"""
Runtime settings, read from the environment (and backend/.env when present).
"""
import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///tym.db")

SQL_ECHO = (os.getenv("SQL_ECHO") or "").strip().lower() in ("1", "true", "yes")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").upper()
