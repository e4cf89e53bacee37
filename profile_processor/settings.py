# profile_processor/settings.py
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PACKAGE_ROOT = Path(__file__).resolve().parent

# "production" turns on multi-worker serving and hides error details
APP_ENV = os.getenv("APP_ENV", "development").lower()
IS_PRODUCTION = APP_ENV == "production"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Never more than 4 workers, whatever the core count
MAX_WORKERS = 4
WORKERS = int(os.getenv("WORKERS") or (min(MAX_WORKERS, os.cpu_count() or 1) if IS_PRODUCTION else 1))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Batches of full profiles get big; reject anything above this
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", str(100 * 1024 * 1024)))

TEST_DATA_PATH = Path(os.getenv("TEST_DATA_PATH", str(PACKAGE_ROOT / "data" / "test-data.json")))
