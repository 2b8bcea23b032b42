"""Process configuration loaded once from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx
from dotenv import load_dotenv

from .identity import ConfigError, IdentityMap

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080
DEFAULT_HOST = "0.0.0.0"  # noqa: S104
DEFAULT_REVIEW_URL_BASE = "https://reviewable.io/reviews"
DEFAULT_HTTP_TIMEOUT_SEC = 10.0

FALSE_VALUES = {"0", "false", "no", "off"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in FALSE_VALUES


def _url(env: Mapping[str, str], name: str) -> str:
    raw = env.get(name, "").strip()
    if not raw:
        return ""
    try:
        url = httpx.URL(raw)
    except httpx.InvalidURL as e:
        msg = f"{name} is not a valid URL: {e}"
        raise ConfigError(msg) from e
    if url.scheme not in {"http", "https"} or not url.host:
        msg = f"{name} must be an absolute http(s) URL, got {raw!r}"
        raise ConfigError(msg)
    return raw


def _log_level(env: Mapping[str, str]) -> str:
    level = env.get("LOG_LEVEL", "").strip().upper() or "INFO"
    if level not in LOG_LEVELS:
        msg = f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
        raise ConfigError(msg)
    return level


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigError(msg) from e


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        msg = f"{name} must be a number, got {raw!r}"
        raise ConfigError(msg) from e


@dataclass(frozen=True)
class RelayConfig:
    """Settings shared by every request.

    Built once at start-up and handed to the web app; nothing reads the
    environment after this point.
    """

    identity_map: IdentityMap = field(default_factory=IdentityMap)
    slack_url: str = ""
    asana_key: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    bot_login: str = ""
    broadcast_channel: str = ""
    include_author: bool = False
    skip_unmapped: bool = False
    review_url_base: str = DEFAULT_REVIEW_URL_BASE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT_SEC
    log_level: str = "INFO"

    @property
    def broadcast_enabled(self) -> bool:
        return bool(self.broadcast_channel)

    @classmethod
    def from_env(
        cls, env: Mapping[str, str] | None = None, *, dotenv: bool = True
    ) -> RelayConfig:
        """Load configuration from environment variables.

        Args:
            env: Mapping to read instead of ``os.environ``
            dotenv: Load a ``.env`` file into ``os.environ`` first (ignored when ``env`` is given)

        Returns:
            The loaded RelayConfig

        Raises:
            ConfigError: If a value cannot be parsed
        """
        if env is None:
            if dotenv:
                load_dotenv()
            env = os.environ

        broadcast_channel = env.get("BROADCAST_CHANNEL", "").strip()
        config = cls(
            identity_map=IdentityMap.parse(env.get("USERMAP", "")),
            slack_url=_url(env, "SLACKURL"),
            asana_key=env.get("ASANAKEY", "").strip(),
            host=env.get("HOST", "").strip() or DEFAULT_HOST,
            port=_int(env, "PORT", DEFAULT_PORT),
            bot_login=env.get("BOT_LOGIN", "").strip(),
            broadcast_channel=broadcast_channel,
            include_author=_flag(env.get("INCLUDE_AUTHOR"), default=bool(broadcast_channel)),
            skip_unmapped=_flag(env.get("SKIP_UNMAPPED"), default=False),
            review_url_base=(
                env.get("REVIEW_URL_BASE", "").strip() or DEFAULT_REVIEW_URL_BASE
            ).rstrip("/"),
            http_timeout=_float(env, "HTTP_TIMEOUT_SEC", DEFAULT_HTTP_TIMEOUT_SEC),
            log_level=_log_level(env),
        )

        if not config.slack_url:
            logger.warning("SLACKURL is not configured - chat messages will not be sent")
        if not config.asana_key:
            logger.info("ASANAKEY is not configured - Asana comments are disabled")
        return config
