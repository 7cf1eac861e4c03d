"""Season-long team statistics, one aggregator per program.

Usage:
    from robostats.team_stats import get_team_stats
    get_team_stats(client, "vrc", "8768A")
    # {"awp_rate": "22%", "avg_ap": 0.8, "record": "5-3-1"}
"""

from __future__ import annotations

import logging
from typing import Callable

from .client import RobotEventsClient, RobotEventsError
from .formatting import NOT_AVAILABLE, round_half_away
from .models import (
    LookupResult,
    NotFound,
    Ok,
    Program,
    Ranking,
    RecordError,
    SkillsRecord,
    Team,
    UpstreamError,
)

logger = logging.getLogger(__name__)

TEAM_NOT_FOUND = {"error": "Team not found"}
PROGRAM_NOT_SUPPORTED = {"error": "Program not supported."}
VEXU_NOT_SUPPORTED = {"error": "Team stats for VEXU are not yet supported."}


# ── Fetching ───────────────────────────────────────────────────────────

def find_team(client: RobotEventsClient, number: str, program: Program) -> LookupResult[Team]:
    """First team matching ``number`` within ``program``."""
    try:
        teams = client.search_teams(number, program.value)
        if not teams:
            return NotFound(number)
        return Ok(Team.from_api(teams[0]))
    except (RobotEventsError, RecordError) as e:
        logger.warning("Team lookup %s/%s failed: %s", program.value, number, e)
        return UpstreamError(str(e))


def season_rankings(
    client: RobotEventsClient, team: Team, program: Program
) -> LookupResult[list[Ranking]]:
    try:
        season = client.current_season(program.value)
        raw = client.team_rankings(team.id, season)
        return Ok([Ranking.from_api(r) for r in raw])
    except (RobotEventsError, RecordError) as e:
        logger.warning("Rankings for team %s failed: %s", team.number, e)
        return UpstreamError(str(e))


def season_driver_skills(
    client: RobotEventsClient, team: Team, program: Program
) -> LookupResult[list[SkillsRecord]]:
    try:
        season = client.current_season(program.value)
        raw = client.team_skills(team.id, season, skill_type="driver")
        return Ok([SkillsRecord.from_api(s) for s in raw])
    except (RobotEventsError, RecordError) as e:
        logger.warning("Skills for team %s failed: %s", team.number, e)
        return UpstreamError(str(e))


# ── Reductions ─────────────────────────────────────────────────────────

def _record(rankings: list[Ranking]) -> str:
    wins = sum(r.wins for r in rankings)
    losses = sum(r.losses for r in rankings)
    ties = sum(r.ties for r in rankings)
    return f"{wins}-{losses}-{ties}"


def _high_and_average(rankings: list[Ranking], played: Callable[[Ranking], int]) -> tuple:
    """(high score, match-weighted average score), both "N/A" with no matches."""
    total_played = sum(played(r) for r in rankings)
    if not total_played:
        return NOT_AVAILABLE, NOT_AVAILABLE
    high_score = max((r.high_score for r in rankings), default=0)
    weighted = sum(r.average_points * played(r) for r in rankings)
    return high_score, round_half_away(weighted / total_played, 0)


def vrc_stats(rankings: list[Ranking]) -> dict:
    """AWP rate, average AP and W-L-T across a season of qualification rankings.

    WP beyond 2 per win and 1 per tie is autonomous win point bonus.
    """
    qual_matches = sum(r.matches for r in rankings)
    awp_count = sum(r.wp - (2 * r.wins + r.ties) for r in rankings)
    total_ap = sum(r.ap for r in rankings)

    if qual_matches:
        awp_rate = f"{round_half_away((awp_count / qual_matches) * 100, 0)}%"
        avg_ap = round_half_away(total_ap / qual_matches, 1)
    else:
        awp_rate = avg_ap = NOT_AVAILABLE

    return {
        "awp_rate": awp_rate,
        "avg_ap": avg_ap,
        "record": _record(rankings),
    }


def viqc_stats(rankings: list[Ranking], skills: list[SkillsRecord]) -> dict:
    # IQ rankings report matches played in the "ties" field
    high_score, avg_score = _high_and_average(rankings, lambda r: r.ties)
    highest_driver = max((s.score for s in skills if s.type == "driver"), default=0)
    return {
        "high_score": high_score,
        "avg_score": avg_score,
        "max_d_skills": highest_driver or NOT_AVAILABLE,
    }


def radc_stats(rankings: list[Ranking]) -> dict:
    high_score, avg_score = _high_and_average(rankings, lambda r: r.matches)
    return {
        "high_score": high_score,
        "avg_score": avg_score,
        "record": _record(rankings),
    }


# ── Per-program entry points ───────────────────────────────────────────

def _resolve(client: RobotEventsClient, number: str, program: Program):
    """(team, rankings) or None when either lookup fails."""
    team = find_team(client, number, program)
    if not isinstance(team, Ok):
        return None
    rankings = season_rankings(client, team.value, program)
    if not isinstance(rankings, Ok):
        return None
    return team.value, rankings.value


def get_vrc_team_stats(client: RobotEventsClient, number: str) -> dict:
    resolved = _resolve(client, number, Program.VRC)
    if resolved is None:
        return dict(TEAM_NOT_FOUND)
    _, rankings = resolved
    return vrc_stats(rankings)


def get_viqc_team_stats(client: RobotEventsClient, number: str) -> dict:
    resolved = _resolve(client, number, Program.VIQC)
    if resolved is None:
        return dict(TEAM_NOT_FOUND)
    team, rankings = resolved
    skills = season_driver_skills(client, team, Program.VIQC)
    if not isinstance(skills, Ok):
        return dict(TEAM_NOT_FOUND)
    return viqc_stats(rankings, skills.value)


def get_radc_team_stats(client: RobotEventsClient, number: str) -> dict:
    resolved = _resolve(client, number, Program.RADC)
    if resolved is None:
        return dict(TEAM_NOT_FOUND)
    _, rankings = resolved
    return radc_stats(rankings)


def get_vexu_team_stats(client: RobotEventsClient, number: str) -> dict:
    # VEXU ranking data has no agreed shape yet
    return dict(VEXU_NOT_SUPPORTED)


_HANDLERS = {
    Program.VRC: get_vrc_team_stats,
    Program.VIQC: get_viqc_team_stats,
    Program.RADC: get_radc_team_stats,
    Program.VEXU: get_vexu_team_stats,
}


def get_team_stats(client: RobotEventsClient, program_code: str, number: str) -> dict:
    """Dispatch on program code; unsupported codes get an error payload."""
    program = Program.parse(program_code)
    if program is None:
        return dict(PROGRAM_NOT_SUPPORTED)
    return _HANDLERS[program](client, number)
