"""Asana API utilities."""

from __future__ import annotations

import logging
import re

import httpx

logger = logging.getLogger(__name__)

ASANA_API_URL = "https://app.asana.com/api/1.0"
ASANA_TASK_LINK = re.compile(r"https://app\.asana\.com/0/[0-9]+/([0-9]+)")


def find_asana_task_id(text: str) -> str | None:
    """Return the task ID of the first Asana task link in ``text``, if any."""
    match = ASANA_TASK_LINK.search(text or "")
    return match.group(1) if match else None


async def maybe_notify_asana(
    http_client: httpx.AsyncClient, body: str, item_url: str, api_key: str
) -> bool:
    """Add ``item_url`` as a comment on the Asana task linked from ``body``.

    Best effort: failures are logged and reported, never raised.

    Args:
        http_client: Client used for the outbound request
        body: Text to scan for an Asana task link
        item_url: The GitHub URL to post as the comment text
        api_key: Asana personal access token

    Returns:
        True if a comment was created, False otherwise
    """
    task_id = find_asana_task_id(body)
    if not task_id:
        return False

    if not api_key:
        logger.warning("Found Asana task %s but ASANAKEY is not configured", task_id)
        return False

    try:
        response = await http_client.post(
            f"{ASANA_API_URL}/tasks/{task_id}/stories",
            headers={"Authorization": f"Bearer {api_key}"},
            json={"data": {"text": item_url}},
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning(
            "Asana API error (%s) commenting on task %s: %s",
            e.response.status_code,
            task_id,
            e.response.text,
        )
        return False
    except (httpx.HTTPError, httpx.InvalidURL):
        logger.exception("Failed to comment on Asana task %s", task_id)
        return False

    logger.info("Commented %s on Asana task %s", item_url, task_id)
    return True
