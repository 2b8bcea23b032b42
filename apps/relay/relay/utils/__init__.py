"""Outbound API clients."""

from relay.utils.asana import find_asana_task_id, maybe_notify_asana
from relay.utils.slack import send_message

__all__ = ["find_asana_task_id", "maybe_notify_asana", "send_message"]
