import os
from dotenv import load_dotenv

load_dotenv()

# Telegram
BOT_TOKEN = os.getenv("BOT_TOKEN", "")
BASE_URL = os.getenv("BASE_URL", "")
# Секрет в пути вебхука, по умолчанию id бота из токена
WEBHOOK_SECRET = os.getenv("WEBHOOK_SECRET") or BOT_TOKEN.split(":")[0]

# REST API
API_PREFIX = "/api"
API_TOKEN = os.getenv("API_TOKEN", "")

# Time zone and campaign
TZ = os.getenv("TZ", "Europe/Moscow")
RAMADAN_START = os.getenv("RAMADAN_START", "2026-02-18")  # YYYY-MM-DD, empty disables

# Tracked checks: "extended" (11) or "base" (8)
DIMENSION_SET = os.getenv("DIMENSION_SET", "extended")

# Storage: "mongo" or "json"
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "mongo")
MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "ibadah_tracker")
JSON_STORE_PATH = os.getenv("JSON_STORE_PATH", "data/tracker.json")

# Reminders
REMINDERS_ENABLED = os.getenv("REMINDERS_ENABLED", "true").lower() in ("1", "true", "yes")
REMINDER_CRON_HOURS = os.getenv("REMINDER_CRON_HOURS", "*/3")
TAHAJJUD_REMINDER_HOUR = int(os.getenv("TAHAJJUD_REMINDER_HOUR", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "10000"))
