"""GitHub review notifications relayed to Slack and Asana."""

from relay.config import RelayConfig
from relay.identity import ConfigError, IdentityMap, UserMapError
from relay.webapp import create_app

__all__ = ["ConfigError", "IdentityMap", "RelayConfig", "UserMapError", "create_app"]
