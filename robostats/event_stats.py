"""Top-N qualification and skills rankings for a single event.

Usage:
    from robostats.event_stats import get_rankings, get_skills_text
    get_rankings(client, "RE-VRC-23-1234", 5)
    get_skills_text(client, "RE-VRC-23-1234", 5)
"""

from __future__ import annotations

import logging

from .client import RobotEventsClient, RobotEventsError
from .formatting import rankings_text, safe_average, skills_text
from .models import (
    Event,
    LookupResult,
    NotFound,
    Ok,
    Program,
    Ranking,
    RecordError,
    SkillsRecord,
    UpstreamError,
    top_n,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5

EVENT_NOT_FOUND = "Event not found"
PROGRAM_NOT_SUPPORTED = "Program not supported"


# ── Fetching ───────────────────────────────────────────────────────────

def find_event(client: RobotEventsClient, sku: str) -> LookupResult[Event]:
    try:
        events = client.search_events(sku)
        if not events:
            return NotFound(sku)
        return Ok(Event.from_api(events[0]))
    except (RobotEventsError, RecordError) as e:
        logger.warning("Event lookup %s failed: %s", sku, e)
        return UpstreamError(str(e))


def event_rankings(client: RobotEventsClient, event: Event) -> LookupResult[list[Ranking]]:
    """Rankings of the event's first division.

    Each division ranks its teams from 1, so divisions are never merged.
    """
    try:
        raw = client.event_rankings(event.id, event.divisions[0])
        return Ok([Ranking.from_api(r) for r in raw])
    except (RobotEventsError, RecordError) as e:
        logger.warning("Rankings for %s failed: %s", event.sku, e)
        return UpstreamError(str(e))


def event_skills(client: RobotEventsClient, event: Event) -> LookupResult[list[SkillsRecord]]:
    try:
        return Ok([SkillsRecord.from_api(s) for s in client.event_skills(event.id)])
    except (RobotEventsError, RecordError) as e:
        logger.warning("Skills for %s failed: %s", event.sku, e)
        return UpstreamError(str(e))


# ── Projections ────────────────────────────────────────────────────────

def _per_match(total: int, matches: int):
    return safe_average(total, matches, 2)


def project_ranking(program: Program, e: Ranking) -> dict:
    if program in (Program.VRC, Program.VEXU):
        return {
            "Rank": e.rank,
            "Team": e.team,
            "Avg. WP": _per_match(e.wp, e.matches),
            "Avg. AP": _per_match(e.ap, e.matches),
            "Avg. SP": _per_match(e.sp, e.matches),
            "W-L-T": e.record,
        }
    if program is Program.VIQC:
        return {
            "Rank": e.rank,
            "Team": e.team,
            "Avg. Score": e.average_points,
            "Played": e.ties,
        }
    return {
        "Rank": e.rank,
        "Team": e.team,
        "Avg. WP": _per_match(e.wp, e.matches),
        "Avg. Score": e.average_points,
        "W-L-T": e.record,
    }


def pair_skills(prog: list[SkillsRecord], driver: list[SkillsRecord]) -> list[dict]:
    """Combine the i-th programming run with the i-th driver run.

    Pairing is positional, not by team. A programming entry without a
    driver entry at the same index gets ``Driving: None`` and its own score.
    "Driving Attempts" mirrors the programming attempt count.
    """
    paired = []
    for i, p in enumerate(prog):
        d = driver[i] if i < len(driver) else None
        paired.append({
            "Rank": p.rank,
            "Team": p.team,
            "Score": p.score + (d.score if d else 0),
            "Prog.": p.score,
            "Prog. Attempts": p.attempts,
            "Driving": d.score if d else None,
            "Driving Attempts": p.attempts,
        })
    return paired


# ── Public API ─────────────────────────────────────────────────────────

def get_rankings(client: RobotEventsClient, sku: str, limit: int = DEFAULT_LIMIT) -> dict:
    """Top ``limit`` qualification rankings with per-program columns."""
    found = find_event(client, sku)
    if not isinstance(found, Ok):
        return {"error": EVENT_NOT_FOUND}
    event = found.value
    rankings = event_rankings(client, event)
    if not isinstance(rankings, Ok):
        return {"error": EVENT_NOT_FOUND}

    program = event.program
    if program is None:
        return {"error": PROGRAM_NOT_SUPPORTED}

    return {
        "event": {**event.info(), "sku": sku},
        "rankings": [project_ranking(program, e) for e in top_n(rankings.value, limit)],
    }


def get_skills(client: RobotEventsClient, sku: str, limit: int = DEFAULT_LIMIT) -> dict:
    """Top ``limit`` skills rankings; programming and driver combined."""
    found = find_event(client, sku)
    if not isinstance(found, Ok):
        return {"error": EVENT_NOT_FOUND}
    event = found.value
    skills = event_skills(client, event)
    if not isinstance(skills, Ok):
        return {"error": EVENT_NOT_FOUND}

    prog = top_n((s for s in skills.value if s.type == "programming"), limit)
    driver = top_n((s for s in skills.value if s.type == "driver"), limit)

    program = event.program
    if program is Program.RADC:
        skills_info = [
            {"Rank": p.rank, "Team": p.team, "Score": p.score, "# Attempts": p.attempts}
            for p in prog
        ]
    elif program in (Program.VRC, Program.VEXU, Program.VIQC):
        skills_info = pair_skills(prog, driver)
    else:
        return {"error": PROGRAM_NOT_SUPPORTED}

    return {
        "event": {**event.info(), "sku": sku},
        "skills": skills_info,
    }


def get_rankings_text(client: RobotEventsClient, sku: str, limit: int = DEFAULT_LIMIT) -> dict:
    result = get_rankings(client, sku, limit)
    if "error" in result:
        return {"text": result["error"]}
    return {"text": rankings_text(result, limit)}


def get_skills_text(client: RobotEventsClient, sku: str, limit: int = DEFAULT_LIMIT) -> dict:
    result = get_skills(client, sku, limit)
    if "error" in result:
        return {"text": result["error"]}
    return {"text": skills_text(result, limit)}
