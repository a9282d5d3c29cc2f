#Purpose: Environment configuration for the dispatch service.
#Reads settings from the process environment (optionally a .env file).
#Example in .env:
#HOSPITAL_DATA_PATH=data/chennai_hospitals.json
#DEFAULT_RESULT_LIMIT=5
#LOG_LEVEL=INFO
#No logic beyond parsing.

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

HOSPITAL_DATA_PATH = os.getenv(
    "HOSPITAL_DATA_PATH",
    str(PROJECT_ROOT / "data" / "chennai_hospitals.json"),
)
DEFAULT_RESULT_LIMIT = int(os.getenv("DEFAULT_RESULT_LIMIT", "5"))
INTAKE_RESULT_LIMIT = int(os.getenv("INTAKE_RESULT_LIMIT", "3"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DJANGO_SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DJANGO_DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")
DJANGO_ALLOWED_HOSTS = [host.strip() for host in os.getenv("DJANGO_ALLOWED_HOSTS", "*").split(",") if host.strip()]
