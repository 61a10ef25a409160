from __future__ import annotations

import logging
from typing import Any

import httpx

from app.application.dto.schedule_payload import parse_overrides, parse_weekly_rules
from app.application.exceptions import ScheduleFetchError
from app.application.ports.schedule_source import ScheduleSourcePort
from app.domain.entities.override import Override
from app.domain.entities.weekly_rule import WeeklyRule

STORE_TIMES_PATH = "/store-times/"
STORE_OVERRIDES_PATH = "/store-overrides/"


class HttpScheduleSource(ScheduleSourcePort):
    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        timeout_seconds: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required for the HTTP schedule source")
        self._base_url = base_url.rstrip("/")
        self._auth = httpx.BasicAuth(username, password) if username and password else None
        self._client = client or httpx.Client(timeout=timeout_seconds)
        self._logger = logging.getLogger(__name__)

    def get_weekly_rules(self) -> list[WeeklyRule]:
        rules = parse_weekly_rules(self._get_json(STORE_TIMES_PATH))
        self._logger.info("Weekly rules fetched", extra={"count": len(rules)})
        return rules

    def get_overrides(self) -> list[Override]:
        overrides = parse_overrides(self._get_json(STORE_OVERRIDES_PATH))
        self._logger.info("Overrides fetched", extra={"count": len(overrides)})
        return overrides

    def _get_json(self, path: str) -> Any:
        url = f"{self._base_url}{path}"
        headers = {"Accept": "application/json"}
        try:
            response = self._client.get(url, headers=headers, auth=self._auth or httpx.USE_CLIENT_DEFAULT)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            self._logger.error("Schedule fetch failed", extra={"url": url, "reason": str(e)})
            raise ScheduleFetchError(f"Failed to fetch {path}: {e}") from e
