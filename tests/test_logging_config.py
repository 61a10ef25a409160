import logging

from app.core.logging_config import ContextFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 1, "Slots generated", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_counts_and_context():
    line = ContextFormatter().format(_record(date="2024-01-01", slot_count=4, rule_count=7, override_count=0))

    assert line == "INFO:app.test:Slots generated | date=2024-01-01 slot_count=4 rule_count=7 override_count=0"


def test_formatter_keeps_plain_line_without_context():
    assert ContextFormatter().format(_record(user_id="", count=None)) == "INFO:app.test:Slots generated"


def test_formatter_reports_listed_booking_count():
    line = ContextFormatter().format(_record(user_id="user-a", count=2))

    assert line.endswith("| user_id=user-a count=2")
