import logging
import re

from telegram import Update
from telegram.error import BadRequest
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes, MessageHandler, filters

from ..clock import Clock
from ..core.dimensions import DimensionSet
from ..core.setup import advance, parse_amount
from ..storage import TrackerStorage
from ..tracker import load_goals, today_record, today_summary, user_statistics
from . import keyboards
from .sessions import SessionStore
from .texts import format_goals, format_statistics, format_today_report, setup_prompt

logger = logging.getLogger(__name__)

INPUT_PROMPTS = {
    "quran_pages": "Добавь страницы Корана (суммируется). Цель {goal}:",
    "istighfar_count": "Добавь истигфар (суммируется). Цель {goal}:",
    "dhikr_count": "Добавь зикр (суммируется). Цель {goal}:",
    "charity_amount": "Добавь садаку в ₽ (суммируется). Цель {goal}₽:",
    "dua_count": "Добавь дуа (суммируется). Цель {goal}:",
}


def _user_id(update: Update) -> str:
    return str(update.effective_user.id)


class TrackerBot:
    """Telegram handlers. All state lives in storage and the injected session store."""

    def __init__(self, storage: TrackerStorage, clock: Clock, dimensions: DimensionSet,
                 sessions: SessionStore = None):
        self.storage = storage
        self.clock = clock
        self.dimensions = dimensions
        self.sessions = sessions or SessionStore()

    def register(self, application: Application):
        application.add_handler(CommandHandler("start", self.start))
        application.add_handler(CommandHandler("goals", self.goals))
        application.add_handler(CommandHandler("reset_today", self.reset_today))
        application.add_handler(CommandHandler("wipe", self.wipe))
        application.add_handler(CommandHandler("stats", self.stats))
        application.add_handler(CommandHandler("today", self.today))

        menu = {
            keyboards.BTN_GOALS: self.goals,
            keyboards.BTN_RESET_TODAY: self.reset_today,
            keyboards.BTN_WIPE: self.wipe,
            keyboards.BTN_STATS: self.stats,
            keyboards.BTN_MARK_TODAY: self.mark_today,
        }
        for text, callback in menu.items():
            application.add_handler(MessageHandler(filters.Regex(f"^{re.escape(text)}$"), callback))

        application.add_handler(CallbackQueryHandler(self.on_toggle, pattern=f"^{keyboards.TOGGLE_PREFIX}"))
        application.add_handler(CallbackQueryHandler(self.on_edit, pattern=f"^{keyboards.EDIT_PREFIX}"))
        application.add_handler(CallbackQueryHandler(self.on_show_report, pattern=f"^{keyboards.SHOW_REPORT}$"))
        application.add_handler(CallbackQueryHandler(self.on_wipe_answer, pattern=f"^({keyboards.WIPE_YES}|{keyboards.WIPE_NO})$"))
        application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.on_text))

    def _ensure_user_and_day(self, update: Update):
        user_id = _user_id(update)
        chat_id = update.effective_chat.id if update.effective_chat else None
        user = self.storage.ensure_user(user_id, chat_id=chat_id)
        self.storage.ensure_day(user_id, self.clock.today_key())
        return user

    def _today_report(self, user_id: str) -> str:
        record, goals, score, _ = today_summary(self.storage, user_id, self.clock, self.dimensions)
        return format_today_report(record, goals, score, self.dimensions, self.clock.campaign_day())

    # ----- commands and menu -----

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        user = self._ensure_user_and_day(update)
        if not user.setup_done:
            return await self._start_setup(update, user.user_id)

        if self.clock.campaign_start:
            hint = f"Старт Рамадана: {self.clock.campaign_start.isoformat()} ({self.clock.tz.key})"
        else:
            hint = 'Если хочешь "день Рамадана", задай RAMADAN_START.'
        await update.effective_message.reply_text(
            f"Ассаляму алейкум!\nТрекер поклонения.\n{hint}\n\nНажми \"{keyboards.BTN_MARK_TODAY}\".",
            reply_markup=keyboards.main_keyboard(),
        )

    async def _start_setup(self, update: Update, user_id: str):
        self.sessions.start_setup(user_id)
        await update.effective_message.reply_text(
            "Настроим твои цели на Рамадан ✅\n(в любой момент можно снова: /goals)",
            reply_markup=keyboards.main_keyboard(),
        )
        await update.effective_message.reply_text(setup_prompt(0))

    async def goals(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        user = self._ensure_user_and_day(update)
        self.sessions.start_setup(user.user_id)
        self.storage.set_setup_done(user.user_id, False)
        await update.effective_message.reply_text(
            "🎯 Редактирование целей.\nДавай заново зададим твои цели (или «по умолчанию»).",
            reply_markup=keyboards.main_keyboard(),
        )
        await update.effective_message.reply_text(setup_prompt(0))

    async def reset_today(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        user = self._ensure_user_and_day(update)
        self.storage.reset_day(user.user_id, self.clock.today_key())
        await update.effective_message.reply_text(
            "♻️ Сегодняшние отметки сброшены.", reply_markup=keyboards.main_keyboard()
        )

    async def wipe(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.effective_message.reply_text(
            "🧹 Полная очистка удалит ВСЕ твои данные (цели + история дней) без возможности восстановления.\n\n"
            "Точно удалить?",
            reply_markup=keyboards.wipe_confirm_keyboard(),
        )

    async def stats(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        user = self._ensure_user_and_day(update)
        report = user_statistics(self.storage, user.user_id, self.clock, self.dimensions)
        await update.effective_message.reply_text(format_statistics(report), reply_markup=keyboards.main_keyboard())

    async def today(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        user = self._ensure_user_and_day(update)
        record = today_record(self.storage, user.user_id, self.clock)
        await update.effective_message.reply_text(
            "Отмечай пункты 👇", reply_markup=keyboards.today_keyboard(record, self.dimensions)
        )
        await update.effective_message.reply_text(
            self._today_report(user.user_id), reply_markup=keyboards.main_keyboard()
        )

    async def mark_today(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        user = self._ensure_user_and_day(update)
        record = today_record(self.storage, user.user_id, self.clock)
        await update.effective_message.reply_text(
            "Отмечай пункты 👇", reply_markup=keyboards.today_keyboard(record, self.dimensions)
        )

    # ----- free text: goal wizard or counter input -----

    async def on_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        user_id = _user_id(update)
        text = update.effective_message.text or ""

        if self.sessions.setup_step(user_id) is not None:
            return await self._on_setup_answer(update, user_id, text)
        if self.sessions.pending_input(user_id):
            return await self._on_counter_input(update, user_id, text)

        await update.effective_message.reply_text(
            f"Нажми \"{keyboards.BTN_MARK_TODAY}\", чтобы отметить пункты.", reply_markup=keyboards.main_keyboard()
        )

    async def _on_setup_answer(self, update: Update, user_id: str, text: str):
        transition = advance(self.sessions.setup_step(user_id), text)
        if not transition.accepted:
            return await update.effective_message.reply_text(
                "Введите число (0 или больше), или напишите: по умолчанию"
            )

        self.storage.save_goal(user_id, transition.key, transition.value)
        if not transition.complete:
            self.sessions.set_setup_step(user_id, transition.next_step)
            return await update.effective_message.reply_text(setup_prompt(transition.next_step))

        self.sessions.finish_setup(user_id)
        self.storage.set_setup_done(user_id, True)
        logger.info("User %s finished goal setup", user_id)
        await update.effective_message.reply_text(
            "✅ Готово! Твои цели сохранены.\n\n"
            f"{format_goals(load_goals(self.storage, user_id))}\n\n"
            f"Теперь нажми \"{keyboards.BTN_MARK_TODAY}\".",
            reply_markup=keyboards.main_keyboard(),
        )

    async def _on_counter_input(self, update: Update, user_id: str, text: str):
        amount = parse_amount(text)
        if amount is None:
            return await update.effective_message.reply_text("Введите число (0 или больше).")

        field = self.sessions.pending_input(user_id)
        self.sessions.clear_input(user_id)
        self.storage.increment(user_id, self.clock.today_key(), field, amount)
        await update.effective_message.reply_text(
            "✅ Добавил.\n\n" + self._today_report(user_id), reply_markup=keyboards.main_keyboard()
        )

    # ----- inline buttons -----

    async def on_toggle(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()
        field = query.data[len(keyboards.TOGGLE_PREFIX):]
        record = self.storage.toggle(_user_id(update), self.clock.today_key(), field)
        try:
            await query.edit_message_reply_markup(keyboards.today_keyboard(record, self.dimensions))
        except BadRequest:
            # "message is not modified" и устаревшие сообщения
            logger.debug("Could not refresh inline keyboard", exc_info=True)

    async def on_edit(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()
        field = query.data[len(keyboards.EDIT_PREFIX):]
        if field not in INPUT_PROMPTS:
            return
        user_id = _user_id(update)
        goal = getattr(load_goals(self.storage, user_id), field)
        self.sessions.await_input(user_id, field)
        await update.effective_message.reply_text(INPUT_PROMPTS[field].format(goal=f"{goal:g}"))

    async def on_show_report(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await update.callback_query.answer()
        await update.effective_message.reply_text(
            self._today_report(_user_id(update)), reply_markup=keyboards.main_keyboard()
        )

    async def on_wipe_answer(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()
        if query.data == keyboards.WIPE_NO:
            return await update.effective_message.reply_text(
                "Ок, ничего не удаляю ✅", reply_markup=keyboards.main_keyboard()
            )

        user_id = _user_id(update)
        removed = self.storage.delete_all(user_id)
        self.sessions.clear(user_id)
        logger.info("Wiped user %s (%d days)", user_id, removed)
        await update.effective_message.reply_text(
            "✅ Всё удалено. Запусти /start и задай цели заново.", reply_markup=keyboards.main_keyboard()
        )


def build_application(token: str, tracker_bot: TrackerBot) -> Application:
    # Без Updater: апдейты приходят через вебхук FastAPI
    application = Application.builder().token(token).updater(None).build()
    tracker_bot.register(application)
    return application
