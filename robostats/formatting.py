"""Number rounding and chat-friendly text for rankings and skills."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

RESULTS_URL = "https://robotevents.com/{sku}.html#results"
NOT_AVAILABLE = "N/A"


def round_half_away(value: float, decimals: int = 0):
    """Round half away from zero to ``decimals`` places.

    Works from the float's shortest repr, so 2.345 -> 2.35 rather than the
    2.34 a binary multiply-round-divide gives. Returns an int for 0 places.

    Differs from multiply-round-divide only on values whose repr ends in
    a 5 just past ``decimals`` but whose scaled binary value falls below
    the half (1.005 -> 1.01 here, 1 there; 2.345 -> 2.35 here, 2.34
    there). Negative halves also go away from zero (-0.5 -> -1, not 0).
    """
    if isinstance(value, float) and not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if decimals == 0 else float(rounded)


def safe_average(total: float, count: int, decimals: int):
    """Rounded total/count, or "N/A" when nothing was played."""
    if not count:
        return NOT_AVAILABLE
    return round_half_away(total / count, decimals)


def results_suffix(sku: str) -> str:
    return f" | Full results: {RESULTS_URL.format(sku=sku)}"


def rankings_text(result: dict, limit: int) -> str:
    """One line: header, "{rank}. {team} " per team, results link."""
    event = result["event"]
    text = f"Top {limit} ranked teams for {event['name']}: "
    text += "".join(f"{e['Rank']}. {e['Team']} " for e in result["rankings"])
    return text + results_suffix(event["sku"])


def skills_text(result: dict, limit: int) -> str:
    """One line: header, " | "-joined "{rank}. {team} ({score} pts.)", results link."""
    event = result["event"]
    # RADC lines carry a trailing space
    tail = " " if event["program"] == "RADC" else ""
    text = f"Top {limit} skills rankings for {event['name']}:"
    for i, e in enumerate(result["skills"]):
        sep = "" if i == 0 else " |"
        text += f"{sep} {e['Rank']}. {e['Team']} ({e['Score']} pts.){tail}"
    return text + results_suffix(event["sku"])
