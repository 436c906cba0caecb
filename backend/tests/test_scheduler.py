import asyncio
from unittest.mock import AsyncMock, MagicMock

from telegram.error import TelegramError

from ibadah_tracker.core import EXTENDED_DIMENSIONS
from ibadah_tracker.scheduler import TAHAJJUD_TEXT, create_scheduler, send_goal_reminders, send_tahajjud_reminders

DATE = "2026-03-01"


def _configured_user(storage, user_id, chat_id):
    storage.ensure_user(user_id, chat_id=chat_id)
    storage.set_setup_done(user_id, True)


class TestGoalReminders:

    def test_only_configured_users_get_reminders(self, storage, clock):
        _configured_user(storage, "1", 101)
        storage.ensure_user("2", chat_id=102)
        bot = MagicMock()
        bot.send_message = AsyncMock()

        sent = asyncio.run(send_goal_reminders(bot, storage, clock, EXTENDED_DIMENSIONS))

        assert sent == 1
        kwargs = bot.send_message.call_args.kwargs
        assert kwargs["chat_id"] == 101
        assert kwargs["text"].startswith("⏰ Напоминание")
        assert "📖 Коран: осталось 20 стр" in kwargs["text"]

    def test_send_failure_does_not_stop_others(self, storage, clock):
        _configured_user(storage, "1", 101)
        _configured_user(storage, "2", 102)
        bot = MagicMock()
        bot.send_message = AsyncMock(side_effect=[TelegramError("blocked"), None])

        sent = asyncio.run(send_goal_reminders(bot, storage, clock, EXTENDED_DIMENSIONS))

        assert sent == 1
        assert bot.send_message.await_count == 2


class TestTahajjudReminders:

    def test_skips_users_who_marked_tahajjud(self, storage, clock):
        _configured_user(storage, "1", 101)
        _configured_user(storage, "2", 102)
        storage.toggle("1", DATE, "tahajjud")
        bot = MagicMock()
        bot.send_message = AsyncMock()

        sent = asyncio.run(send_tahajjud_reminders(bot, storage, clock))

        assert sent == 1
        bot.send_message.assert_awaited_once_with(chat_id=102, text=TAHAJJUD_TEXT)


class TestCreateScheduler:

    def test_jobs_registered(self, storage, clock):
        scheduler = create_scheduler(MagicMock(), storage, clock, EXTENDED_DIMENSIONS)
        assert {job.id for job in scheduler.get_jobs()} == {"goal_reminders", "tahajjud_reminders"}
