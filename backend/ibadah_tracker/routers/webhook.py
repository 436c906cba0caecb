import logging

from fastapi import APIRouter, HTTPException, Request
from telegram import Update

from .. import config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/telegram", tags=["telegram"])


@router.post("/{secret}")
async def telegram_webhook(secret: str, request: Request):
    """Вебхук Telegram: апдейт передаётся в приложение бота"""
    if not config.WEBHOOK_SECRET or secret != config.WEBHOOK_SECRET:
        logger.warning("Rejected webhook call with unknown secret")
        raise HTTPException(status_code=404, detail="Not found")

    application = getattr(request.app.state, "telegram", None)
    if application is None:
        raise HTTPException(status_code=503, detail="Bot is not running")

    update_id = None
    try:
        data = await request.json()
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        update_id = data.get("update_id")
        await application.process_update(Update.de_json(data, application.bot))
    except Exception:
        # 200 всё равно: иначе Telegram будет повторять тот же апдейт
        logger.exception("Failed to handle update %s", update_id)
    return {"ok": True}
