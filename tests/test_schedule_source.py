"""
Tests for upstream schedule payload parsing and schedule sources.
"""

from __future__ import annotations

import httpx
import pytest

from app.application.dto.schedule_payload import parse_overrides, parse_weekly_rules
from app.application.exceptions import InvalidScheduleError, ScheduleFetchError
from app.application.use_cases.load_schedule import ScheduleService
from app.domain.entities.override import Override
from app.domain.entities.weekly_rule import WeeklyRule
from app.infrastructure.schedule.http_schedule_source import HttpScheduleSource
from app.infrastructure.schedule.static_schedule_source import StaticScheduleSource

STORE_TIMES = [
    {"id": "a1", "day_of_week": 1, "is_open": True, "start_time": "09:00", "end_time": "17:00"},
    {"id": "a2", "day_of_week": 0, "is_open": False, "start_time": "00:00", "end_time": "00:00"},
]
STORE_OVERRIDES = [
    {"id": "b1", "day": 25, "month": 12, "is_open": False, "start_time": "00:00", "end_time": "00:00"},
]


def test_parse_weekly_rules_uses_upstream_field_names():
    rules = parse_weekly_rules(STORE_TIMES)

    assert rules[0] == WeeklyRule(day_of_week=1, is_open=True, start_time="09:00", end_time="17:00")
    assert rules[1].is_open is False


def test_parse_overrides_uses_upstream_field_names():
    assert parse_overrides(STORE_OVERRIDES) == [
        Override(day=25, month=12, is_open=False, start_time="00:00", end_time="00:00")
    ]


@pytest.mark.parametrize(
    "payload",
    [
        {"day_of_week": 7, "is_open": True, "start_time": "09:00", "end_time": "17:00"},
        {"day_of_week": 1, "is_open": True, "start_time": "25:00", "end_time": "17:00"},
        {"day_of_week": 1, "is_open": True},
        {"is_open": True, "start_time": "09:00", "end_time": "17:00"},
    ],
)
def test_parse_weekly_rules_rejects_malformed_records(payload):
    with pytest.raises(InvalidScheduleError):
        parse_weekly_rules([payload])


def test_parse_overrides_rejects_impossible_dates():
    with pytest.raises(InvalidScheduleError):
        parse_overrides([{"day": 30, "month": 2, "is_open": False}])


def test_parse_rejects_non_list_payload():
    with pytest.raises(InvalidScheduleError):
        parse_weekly_rules({"results": []})


def _mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_http_source_fetches_both_collections():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        if request.url.path == "/store-times/":
            return httpx.Response(200, json=STORE_TIMES)
        return httpx.Response(200, json=STORE_OVERRIDES)

    source = HttpScheduleSource(base_url="https://schedule.test/", client=_mock_client(handler))

    assert len(source.get_weekly_rules()) == 2
    assert len(source.get_overrides()) == 1
    assert seen == ["/store-times/", "/store-overrides/"]


def test_http_source_sends_basic_auth():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"].startswith("Basic ")
        return httpx.Response(200, json=[])

    source = HttpScheduleSource(
        base_url="https://schedule.test", username="u", password="p", client=_mock_client(handler)
    )

    assert source.get_weekly_rules() == []


def test_http_source_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    source = HttpScheduleSource(base_url="https://schedule.test", client=_mock_client(handler))

    with pytest.raises(ScheduleFetchError):
        source.get_weekly_rules()


def test_http_source_rejects_invalid_records():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"day": 1, "month": 13, "is_open": True}])

    source = HttpScheduleSource(base_url="https://schedule.test", client=_mock_client(handler))

    with pytest.raises(InvalidScheduleError):
        source.get_overrides()


def test_schedule_service_caches_until_refresh():
    source = StaticScheduleSource(
        rules=[WeeklyRule(day_of_week=1, is_open=True, start_time="09:00", end_time="10:00")],
        overrides=[],
    )
    service = ScheduleService(source=source)

    first = service.current()
    assert service.current() is first
    assert service.refresh() == first
    assert service.refresh() is not first


def test_static_source_defaults_are_valid():
    source = StaticScheduleSource()

    assert parse_weekly_rules(
        [
            {"day_of_week": r.day_of_week, "is_open": r.is_open, "start_time": r.start_time, "end_time": r.end_time}
            for r in source.get_weekly_rules()
        ]
    ) == source.get_weekly_rules()
