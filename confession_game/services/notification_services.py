# confession_game/services/notification_services.py
import logging
import uuid
from typing import Optional

import httpx

from confession_game.core.config import settings

logger = logging.getLogger(__name__)


async def send_notification(
    http_client: httpx.AsyncClient, title: str, body: str, target_url: Optional[str] = None
) -> bool:
    """
    Posts a push notification to the configured webhook.
    Returns False when notifications are disabled or the webhook rejects the call.
    """
    if not settings.NOTIFICATION_URL:
        logger.info(f"Notifications disabled, skipping: {title}")
        return False

    payload = {
        "notificationId": str(uuid.uuid4()),
        "title": title,
        "body": body,
        "targetUrl": target_url or settings.APP_BASE_URL,
    }
    try:
        response = await http_client.post(settings.NOTIFICATION_URL, json=payload)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.exception(f"Failed to send notification '{title}': {e}")
        return False

    logger.debug(f"Notification sent: {title}")
    return True
