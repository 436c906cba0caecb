import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__, config
from .routers import days_router, goals_router, stats_router, webhook_router
from .routers.deps import get_clock, get_dimensions, get_storage

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def start_bot(app: FastAPI):
    """Запуск бота: вебхук и напоминания"""
    from .bot import TrackerBot, build_application
    from .scheduler import create_scheduler

    storage, clock, dimensions = get_storage(), get_clock(), get_dimensions()
    application = build_application(config.BOT_TOKEN, TrackerBot(storage, clock, dimensions))
    await application.initialize()
    await application.start()
    app.state.telegram = application

    if config.BASE_URL:
        url = f"{config.BASE_URL.rstrip('/')}/telegram/{config.WEBHOOK_SECRET}"
        await application.bot.set_webhook(url)
        logger.info("Webhook set: %s/telegram/***", config.BASE_URL.rstrip("/"))
    else:
        logger.warning("BASE_URL is not set, webhook was not registered")

    if config.REMINDERS_ENABLED:
        scheduler = create_scheduler(
            application.bot, storage, clock, dimensions,
            reminder_hours=config.REMINDER_CRON_HOURS,
            tahajjud_hour=config.TAHAJJUD_REMINDER_HOUR,
        )
        scheduler.start()
        app.state.scheduler = scheduler
        logger.info("Reminder scheduler started (%s)", clock.tz.key)


async def stop_bot(app: FastAPI):
    scheduler = getattr(app.state, "scheduler", None)
    if scheduler is not None:
        scheduler.shutdown(wait=False)
    application = getattr(app.state, "telegram", None)
    if application is not None:
        await application.stop()
        await application.shutdown()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Проверяем конфигурацию до приёма запросов
    get_dimensions()
    get_clock()
    if config.BOT_TOKEN:
        await start_bot(app)
    else:
        logger.warning("BOT_TOKEN is not set, running API only")
    yield
    await stop_bot(app)


app = FastAPI(
    title="Ibadah Tracker API",
    description="Трекер поклонения: отметки по дням, цели, стрики и статистика",
    version=__version__,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # в продакшене указать конкретные домены
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Роуты
app.include_router(webhook_router)
app.include_router(stats_router, prefix=config.API_PREFIX)
app.include_router(days_router, prefix=config.API_PREFIX)
app.include_router(goals_router, prefix=config.API_PREFIX)


@app.get("/")
async def root():
    return {"message": "Ibadah tracker API is running", "version": __version__}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
