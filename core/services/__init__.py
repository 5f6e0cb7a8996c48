# Services Module
from .currency import Currency, parse_currency
from .notifications import Notifier, LoggingNotifier, RecordingNotifier

__all__ = ["Currency", "parse_currency", "Notifier", "LoggingNotifier", "RecordingNotifier"]
