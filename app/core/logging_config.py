import logging

# Fields passed through `extra={...}` that are appended to the log line, in this order.
CONTEXT_FIELDS: tuple[str, ...] = (
    "user_id",
    "booking_id",
    "date",
    "time",
    "status",
    "slot_count",
    "count",
    "rule_count",
    "override_count",
    "key",
    "url",
    "reason",
)

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


class ContextFormatter(logging.Formatter):
    """Appends `field=value` pairs for the booking context attached to a record."""

    def __init__(self, fmt: str = LOG_FORMAT, fields: tuple[str, ...] = CONTEXT_FIELDS) -> None:
        super().__init__(fmt)
        self._fields = fields

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        # 0 is a real count; only missing or empty values are skipped.
        pairs = [
            f"{field}={getattr(record, field)}"
            for field in self._fields
            if getattr(record, field, None) not in (None, "")
        ]
        return f"{line} | {' '.join(pairs)}" if pairs else line


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
