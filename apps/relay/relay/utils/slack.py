"""Slack incoming-webhook utilities."""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


async def send_message(
    http_client: httpx.AsyncClient, webhook_url: str, recipient: str, text: str
) -> bool:
    """Post one message to a user (``@name``) or channel (``#name``).

    Args:
        http_client: Client used for the outbound request
        webhook_url: The Slack incoming-webhook URL
        recipient: Channel override for the message
        text: The message text

    Returns:
        True if Slack accepted the message, False otherwise
    """
    if not webhook_url:
        logger.debug("SLACKURL not configured, dropping message for %s", recipient)
        return False

    try:
        response = await http_client.post(
            webhook_url,
            json={"channel": recipient, "text": text},
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning(
            "Slack webhook error (%s) sending to %s: %s",
            e.response.status_code,
            recipient,
            e.response.text,
        )
        return False
    except (httpx.HTTPError, httpx.InvalidURL):
        logger.exception("Failed to send Slack message to %s", recipient)
        return False

    return True
