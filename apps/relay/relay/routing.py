"""Event classification and recipient resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .config import RelayConfig
from .events import WebhookEvent
from .identity import IdentityMap

logger = logging.getLogger(__name__)

ASSIGNED_VERB = "You were assigned"
COMMENTS_VERB = "New comments on"


class Recipe(str, Enum):
    ASSIGNED = "assigned"
    COMMENT_OR_REVIEW = "comment_or_review"
    OPENED = "opened"
    UNHANDLED = "unhandled"


ACTION_RECIPES: dict[str, Recipe] = {
    "assigned": Recipe.ASSIGNED,
    "submitted": Recipe.COMMENT_OR_REVIEW,
    "created": Recipe.COMMENT_OR_REVIEW,
    "opened": Recipe.OPENED,
}


@dataclass(frozen=True)
class Notification:
    recipient: str
    text: str


@dataclass
class Resolution:
    """Everything needed to build the notifications for one event."""

    recipe: Recipe
    recipients: list[str] = field(default_factory=list)
    number: str = "0"
    title: str = ""
    verb: str = ""
    author: str = ""
    repository: str = ""
    body: str = ""
    item_url: str = ""


def review_url(base: str, repository: str, number: str) -> str:
    """Build the review tool link, e.g. ``https://reviewable.io/reviews/org/repo/42``."""
    return f"{base}/{repository}/{number}"


def classify(event: WebhookEvent, broadcast_enabled: bool = False) -> Recipe:
    """Pick a notification recipe from the event action (exact match)."""
    recipe = ACTION_RECIPES.get(event.action, Recipe.UNHANDLED)
    if recipe is Recipe.OPENED and not broadcast_enabled:
        return Recipe.UNHANDLED
    return recipe


def _unique(logins: list[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for login in logins:
        if login and login not in seen:
            seen.add(login)
            result.append(login)
    return result


def _assigned_recipients(event: WebhookEvent) -> list[str]:
    # Payloads carry either a singular assignee or a list, top-level or nested.
    if event.assignee.login:
        return [event.assignee.login]
    if event.assignees:
        return [assignee.login for assignee in event.assignees]
    return event.item.assignee_logins


def _comment_recipients(event: WebhookEvent) -> list[str]:
    sender = event.sender.login
    author = event.item.user.login
    recipients = [login for login in event.item.assignee_logins if login != sender]
    if author != sender:
        recipients.append(author)
    return recipients


def resolve(event: WebhookEvent, recipe: Recipe, config: RelayConfig) -> Resolution:
    """Work out who should hear about ``event`` and with which wording.

    Args:
        event: The validated webhook payload
        recipe: Result of :func:`classify`
        config: Relay configuration (bot login, URL base)

    Returns:
        A Resolution. Recipients are GitHub logins, deduplicated in first-seen order.
    """
    item = event.item
    resolution = Resolution(
        recipe=recipe,
        number=str(item.number),
        title=item.title,
        author=item.user.login,
        repository=event.repository.full_name,
        body=item.body,
        item_url=item.html_url,
    )

    if recipe is Recipe.UNHANDLED:
        return resolution

    if config.bot_login and event.sender.login == config.bot_login:
        logger.info("Ignoring %s event from bot account %s", event.action, config.bot_login)
        resolution.recipe = Recipe.UNHANDLED
        return resolution

    if recipe is Recipe.ASSIGNED:
        resolution.verb = ASSIGNED_VERB
        resolution.recipients = _unique(_assigned_recipients(event))
    elif recipe is Recipe.COMMENT_OR_REVIEW:
        resolution.verb = COMMENTS_VERB
        resolution.recipients = _unique(_comment_recipients(event))
        resolution.body = event.review.body or event.comment.body

    return resolution


def build_notifications(
    resolution: Resolution, identity_map: IdentityMap, config: RelayConfig
) -> list[Notification]:
    """Turn a resolution into concrete chat messages, one per destination."""
    url = review_url(config.review_url_base, resolution.repository, resolution.number)

    if resolution.recipe is Recipe.OPENED:
        if not config.broadcast_channel:
            return []
        text = f"{resolution.title} {url} by {resolution.author}"
        return [Notification(recipient=config.broadcast_channel, text=text)]

    text = f"{resolution.verb} {resolution.title} {url}"
    if config.include_author:
        text = f"{text} by {resolution.author}"

    notifications = []
    for login in resolution.recipients:
        slack_name = identity_map.resolve(login)
        if not slack_name and config.skip_unmapped:
            logger.warning("No USERMAP entry for %s, skipping notification", login)
            continue
        notifications.append(Notification(recipient=f"@{slack_name}", text=text))
    return notifications
