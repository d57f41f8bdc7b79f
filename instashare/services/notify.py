# instashare/services/notify.py
import asyncio
import logging
from typing import Any

from fastapi.encoders import jsonable_encoder

from instashare.services.socket_manager import emit_to_user

logger = logging.getLogger(__name__)

# Strong refs so pending emits aren't garbage-collected mid-flight
_pending: set = set()


async def _emit_logged(user_id: str, event: str, payload: Any) -> None:
    try:
        await emit_to_user(user_id, event, payload)
    except Exception:
        logger.warning("Socket emit %s to user %s failed", event, user_id, exc_info=True)


def emit_to_user_bg(user_id: str, event: str, payload: Any) -> None:
    """
    Fire-and-forget emit so the route returns fast.
    Call from controllers after the DB write succeeded.
    """
    data = jsonable_encoder(payload, by_alias=True)
    loop = asyncio.get_running_loop()
    task = loop.create_task(_emit_logged(str(user_id), event, data))
    _pending.add(task)
    task.add_done_callback(_pending.discard)
