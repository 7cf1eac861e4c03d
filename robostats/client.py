"""Thin client for the RobotEvents v2 REST API.

API docs: https://www.robotevents.com/api/v2
Bearer-token auth. Collections are paged; ``meta.last_page`` tells us
when to stop.
"""

from __future__ import annotations

import logging

import requests

from ._config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

PER_PAGE = 250


class RobotEventsError(RuntimeError):
    """Any failed call to the RobotEvents API."""


class RobotEventsClient:
    """Read-only access to the handful of endpoints robostats needs."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        })
        self._program_ids: dict[str, int] | None = None

    # ── Transport ──────────────────────────────────────────────────────

    def get(self, path: str, params: dict | None = None) -> dict:
        """Single GET; raises RobotEventsError on any transport or HTTP error."""
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning("RobotEvents GET %s failed: %s", path, e)
            raise RobotEventsError(f"GET {path} failed: {e}") from e

    def get_paginated(self, path: str, params: dict | None = None) -> list[dict]:
        """Fetch every page of a collection endpoint and concatenate ``data``."""
        items: list[dict] = []
        page = 1
        while True:
            query = dict(params or {})
            query.update({"page": page, "per_page": PER_PAGE})
            body = self.get(path, query)
            items.extend(body.get("data", []))
            last_page = body.get("meta", {}).get("last_page", page)
            if page >= last_page:
                break
            page += 1
        return items

    # ── Programs / seasons ─────────────────────────────────────────────

    def program_id(self, code: str) -> int:
        """Resolve a program abbreviation (e.g. "VRC") to its numeric id."""
        if self._program_ids is None:
            programs = self.get_paginated("programs")
            self._program_ids = {p["abbr"].upper(): p["id"] for p in programs}
        try:
            return self._program_ids[code.upper()]
        except KeyError:
            raise RobotEventsError(f"Unknown program '{code}'") from None

    def current_season(self, code: str) -> int:
        """Id of the newest active season for a program."""
        seasons = self.get_paginated(
            "seasons", {"program[]": self.program_id(code), "active": "true"}
        )
        if not seasons:
            raise RobotEventsError(f"No active season for '{code}'")
        return max(s["id"] for s in seasons)

    # ── Teams ──────────────────────────────────────────────────────────

    def search_teams(self, number: str, program_code: str) -> list[dict]:
        return self.get_paginated(
            "teams", {"number[]": number, "program[]": self.program_id(program_code)}
        )

    def team_rankings(self, team_id: int, season_id: int) -> list[dict]:
        return self.get_paginated(f"teams/{team_id}/rankings", {"season[]": season_id})

    def team_skills(
        self,
        team_id: int,
        season_id: int,
        skill_type: str | None = None,
    ) -> list[dict]:
        params: dict = {"season[]": season_id}
        if skill_type:
            params["type[]"] = skill_type
        return self.get_paginated(f"teams/{team_id}/skills", params)

    # ── Events ─────────────────────────────────────────────────────────

    def search_events(self, sku: str) -> list[dict]:
        return self.get_paginated("events", {"sku[]": sku})

    def event_rankings(self, event_id: int, division_id: int) -> list[dict]:
        return self.get_paginated(f"events/{event_id}/divisions/{division_id}/rankings")

    def event_skills(self, event_id: int) -> list[dict]:
        return self.get_paginated(f"events/{event_id}/skills")
