"""Typed records built from raw RobotEvents payloads.

The API hands back loosely-shaped dicts; everything downstream works on the
dataclasses below. ``from_api`` checks the fields we rely on and raises
``RecordError`` when one is missing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class RecordError(ValueError):
    """Raw API record is missing a required field."""


def _require(raw: dict, *keys: str):
    for key in keys:
        if raw.get(key) is None:
            raise RecordError(f"record missing '{key}': {raw!r}")


def _team_name(raw: dict) -> str:
    team = raw.get("team") or {}
    if not team.get("name"):
        raise RecordError(f"record missing 'team.name': {raw!r}")
    return team["name"]


# ── Programs ───────────────────────────────────────────────────────────

class Program(str, Enum):
    VRC = "VRC"
    VEXU = "VEXU"
    VIQC = "VIQC"
    RADC = "RADC"

    @classmethod
    def parse(cls, code: str | None) -> "Program | None":
        """Member for a program code, or None when unsupported."""
        try:
            return cls((code or "").upper())
        except ValueError:
            return None


# ── Entities ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Team:
    id: int
    number: str
    program: str

    @classmethod
    def from_api(cls, raw: dict) -> "Team":
        _require(raw, "id", "number")
        return cls(
            id=raw["id"],
            number=raw["number"],
            program=(raw.get("program") or {}).get("code", ""),
        )


@dataclass(frozen=True)
class Event:
    id: int
    sku: str
    name: str
    program_code: str
    divisions: list[int] = field(default_factory=lambda: [1])

    @classmethod
    def from_api(cls, raw: dict) -> "Event":
        _require(raw, "id", "sku", "name")
        divisions = [d["id"] for d in raw.get("divisions") or [] if "id" in d]
        return cls(
            id=raw["id"],
            sku=raw["sku"],
            name=raw["name"],
            program_code=(raw.get("program") or {}).get("code", ""),
            divisions=divisions or [1],
        )

    @property
    def program(self) -> Program | None:
        return Program.parse(self.program_code)

    def info(self) -> dict:
        return {"sku": self.sku, "name": self.name, "program": self.program_code}


@dataclass(frozen=True)
class Ranking:
    rank: int
    team: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    wp: int = 0
    ap: int = 0
    sp: int = 0
    average_points: float = 0
    high_score: int = 0

    @classmethod
    def from_api(cls, raw: dict) -> "Ranking":
        _require(raw, "rank")
        return cls(
            rank=raw["rank"],
            team=_team_name(raw),
            wins=raw.get("wins") or 0,
            losses=raw.get("losses") or 0,
            ties=raw.get("ties") or 0,
            wp=raw.get("wp") or 0,
            ap=raw.get("ap") or 0,
            sp=raw.get("sp") or 0,
            average_points=raw.get("average_points") or 0,
            high_score=raw.get("high_score") or 0,
        )

    @property
    def matches(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}-{self.ties}"


@dataclass(frozen=True)
class SkillsRecord:
    rank: int
    team: str
    type: str
    score: int = 0
    attempts: int = 0

    @classmethod
    def from_api(cls, raw: dict) -> "SkillsRecord":
        _require(raw, "rank", "type")
        return cls(
            rank=raw["rank"],
            team=_team_name(raw),
            type=raw["type"],
            score=raw.get("score") or 0,
            attempts=raw.get("attempts") or 0,
        )


# ── Lookup results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    what: str


@dataclass(frozen=True)
class UpstreamError:
    message: str


LookupResult = Union[Ok[T], NotFound, UpstreamError]


def top_n(records, limit: int) -> list:
    """Records with rank <= limit, stably sorted by rank.

    Filtering happens before sorting, so gaps in the source ranks shrink
    the result rather than pulling in lower-ranked entries.
    """
    return sorted((r for r in records if r.rank <= limit), key=lambda r: r.rank)
