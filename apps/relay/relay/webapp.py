"""FastAPI routes for the review relay."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse

from .config import RelayConfig
from .events import WebhookEvent
from .routing import Recipe, build_notifications, classify, resolve
from .utils.asana import maybe_notify_asana
from .utils.slack import send_message

logger = logging.getLogger(__name__)

WEBHOOK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


async def relay_event(
    event: WebhookEvent, config: RelayConfig, http_client: httpx.AsyncClient
) -> int:
    """Notify everyone interested in ``event``.

    Returns:
        The number of chat messages Slack accepted
    """
    recipe = classify(event, broadcast_enabled=config.broadcast_enabled)
    resolution = resolve(event, recipe, config)
    if resolution.recipe is Recipe.UNHANDLED:
        logger.debug("Ignoring action %r", event.action)
        return 0

    if resolution.body:
        await maybe_notify_asana(http_client, resolution.body, resolution.item_url, config.asana_key)

    notifications = build_notifications(resolution, config.identity_map, config)
    delivered = 0
    for notification in notifications:
        if await send_message(
            http_client, config.slack_url, notification.recipient, notification.text
        ):
            delivered += 1
    logger.info(
        "Sent %d/%d notifications for %s #%s",
        delivered,
        len(notifications),
        resolution.repository,
        resolution.number,
    )
    return delivered


def create_app(
    config: RelayConfig, transport: httpx.AsyncBaseTransport | None = None
) -> FastAPI:
    """Build the relay app.

    Args:
        config: Settings loaded at start-up
        transport: Optional httpx transport for outbound calls (used by tests)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with httpx.AsyncClient(timeout=config.http_timeout, transport=transport) as client:
            app.state.http_client = client
            yield

    app = FastAPI(lifespan=lifespan)
    app.state.config = config

    @app.api_route("/", methods=WEBHOOK_METHODS)
    async def github_webhook(request: Request) -> Response:
        """Handle GitHub pull request, review and comment webhooks."""
        body = await request.body()
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Failed to parse webhook JSON: %s", e)
            return PlainTextResponse(str(e), status_code=500)

        if not isinstance(payload, dict):
            logger.warning("Webhook payload is %s, not an object", type(payload).__name__)
            payload = {}

        event = WebhookEvent.model_validate(payload)
        logger.info("Handling %s", event.action)
        await relay_event(event, request.app.state.config, request.app.state.http_client)
        return Response(status_code=200)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
