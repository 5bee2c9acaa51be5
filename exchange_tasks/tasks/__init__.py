"""Task entry points: Graph read and send, legacy EWS read."""

from exchange_tasks.tasks.ews_read import ews_read_email
from exchange_tasks.tasks.graph_read import read_email
from exchange_tasks.tasks.graph_send import send_email

__all__ = ["ews_read_email", "read_email", "send_email"]
