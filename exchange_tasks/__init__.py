"""Microsoft Exchange read/send email tasks over Graph and EWS."""

from exchange_tasks.tasks import ews_read_email, read_email, send_email

__all__ = ["ews_read_email", "read_email", "send_email"]
