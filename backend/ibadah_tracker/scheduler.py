import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from telegram import Bot
from telegram.error import TelegramError

from .bot.texts import format_reminder
from .clock import Clock
from .core.dimensions import DimensionSet
from .storage import TrackerStorage
from .tracker import today_summary

logger = logging.getLogger(__name__)

TAHAJJUD_TEXT = "🕯 Тахаджуд: напоминание. Если встанешь — не забудь отметить ✅"


async def send_goal_reminders(bot: Bot, storage: TrackerStorage, clock: Clock, dimensions: DimensionSet) -> int:
    """Remind every configured user what is left for today. Returns messages sent."""
    sent = 0
    for user in storage.users_with_setup_done():
        if not user.chat_id:
            continue
        _, _, _, remaining = today_summary(storage, user.user_id, clock, dimensions)
        try:
            await bot.send_message(chat_id=user.chat_id, text=format_reminder(remaining))
            sent += 1
        except TelegramError:
            logger.exception("Failed to send reminder to user %s", user.user_id)
    return sent


async def send_tahajjud_reminders(bot: Bot, storage: TrackerStorage, clock: Clock) -> int:
    sent = 0
    today = clock.today_key()
    for user in storage.users_with_setup_done():
        if not user.chat_id:
            continue
        record = storage.get_day(user.user_id, today)
        if record and record.tahajjud:
            continue
        try:
            await bot.send_message(chat_id=user.chat_id, text=TAHAJJUD_TEXT)
            sent += 1
        except TelegramError:
            logger.exception("Failed to send tahajjud reminder to user %s", user.user_id)
    return sent


def create_scheduler(bot: Bot, storage: TrackerStorage, clock: Clock, dimensions: DimensionSet,
                     reminder_hours: str = "*/3", tahajjud_hour: int = 3) -> AsyncIOScheduler:
    scheduler = AsyncIOScheduler(timezone=clock.tz)
    scheduler.add_job(
        send_goal_reminders,
        CronTrigger(hour=reminder_hours, minute=0, timezone=clock.tz),
        args=(bot, storage, clock, dimensions),
        id="goal_reminders",
    )
    scheduler.add_job(
        send_tahajjud_reminders,
        CronTrigger(hour=tahajjud_hour, minute=0, timezone=clock.tz),
        args=(bot, storage, clock),
        id="tahajjud_reminders",
    )
    return scheduler
