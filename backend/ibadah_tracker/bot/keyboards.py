from telegram import InlineKeyboardButton, InlineKeyboardMarkup, ReplyKeyboardMarkup

from ..core.dimensions import CheckKind, DimensionSet
from ..models import DayRecord

BTN_MARK_TODAY = "✅ Отметить сегодня"
BTN_STATS = "📊 Статистика"
BTN_GOALS = "🎯 Цели"
BTN_RESET_TODAY = "♻️ Сбросить сегодня"
BTN_WIPE = "🧹 Полная очистка"

PRAYER_LABELS = {
    "fajr": "Фаджр",
    "dhuhr": "Зухр",
    "asr": "Аср",
    "maghrib": "Магриб",
    "isha": "Иша",
}

EDIT_LABELS = {
    "quran_pages": "📖 Коран (+стр)",
    "istighfar_count": "🤍 Истигфар (+)",
    "dhikr_count": "📿 Зикр (+)",
    "charity_amount": "💰 Садака (+₽)",
    "dua_count": "🤲 Дуа (+раз)",
}

# callback_data
TOGGLE_PREFIX = "toggle:"
EDIT_PREFIX = "edit:"
SHOW_REPORT = "show_report"
WIPE_YES = "wipe_yes"
WIPE_NO = "wipe_no"


def _mark(done: bool) -> str:
    return "✅" if done else "☐"


def _pairs(buttons):
    return [buttons[i:i + 2] for i in range(0, len(buttons), 2)]


def main_keyboard() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        [
            [BTN_MARK_TODAY, BTN_STATS],
            [BTN_GOALS, BTN_RESET_TODAY],
            [BTN_WIPE],
        ],
        resize_keyboard=True,
    )


def today_keyboard(record: DayRecord, dimensions: DimensionSet) -> InlineKeyboardMarkup:
    prayers = [
        InlineKeyboardButton(
            f"{_mark(getattr(record.mosque, prayer))} {label}",
            callback_data=f"{TOGGLE_PREFIX}mosque.{prayer}",
        )
        for prayer, label in PRAYER_LABELS.items()
    ]
    flags = [
        InlineKeyboardButton(f"{_mark(getattr(record, c.key))} {c.label}", callback_data=f"{TOGGLE_PREFIX}{c.key}")
        for c in dimensions.flag_checks
    ]
    edits = [
        InlineKeyboardButton(EDIT_LABELS[c.key], callback_data=f"{EDIT_PREFIX}{c.key}")
        for c in dimensions.checks
        if c.kind is CheckKind.GOAL
    ]
    rows = _pairs(prayers) + _pairs(flags) + _pairs(edits)
    rows.append([InlineKeyboardButton("📩 Показать отчет", callback_data=SHOW_REPORT)])
    return InlineKeyboardMarkup(rows)


def wipe_confirm_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [
            [InlineKeyboardButton("✅ Да, удалить всё", callback_data=WIPE_YES)],
            [InlineKeyboardButton("❌ Нет", callback_data=WIPE_NO)],
        ]
    )
