"""
Score parsing for match entry.

Turns the two free-form score fields of the match form ("21" / "19",
"6-4" / "4-6", "21 pts") into a declared result. Each field is read up to
the end of its leading number, so a set score counts by its first figure.
When the scores cannot be read the result is ``None`` and the winner has
to be picked by hand.
"""

import math
import re
from typing import NamedTuple

from app.models import MatchResult

LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class ScoreResult(NamedTuple):
    result: MatchResult | None
    score_a: str
    score_b: str


def _compare(a: float, b: float) -> MatchResult:
    if a > b:
        return MatchResult.TEAM_A
    if b > a:
        return MatchResult.TEAM_B
    return MatchResult.DRAW


def _parse_number(score: str) -> float | None:
    """Leading number of a score: "21" -> 21, "6-4, 6-3" -> 6, "21 pts" -> 21."""
    match = LEADING_NUMBER.match(score)
    if match is None:
        return None
    value = float(match.group())
    return value if math.isfinite(value) else None


def parse_score(score_a: str, score_b: str) -> ScoreResult:
    """Parse both teams' scores and work out who won."""
    score_a = score_a.strip()
    score_b = score_b.strip()
    if not score_a or not score_b:
        return ScoreResult(None, score_a, score_b)

    num_a = _parse_number(score_a)
    num_b = _parse_number(score_b)
    if num_a is None or num_b is None:
        return ScoreResult(None, score_a, score_b)

    return ScoreResult(_compare(num_a, num_b), score_a, score_b)


def get_score_description(score: ScoreResult) -> str:
    """Human-readable summary of a parsed score."""
    if score.result is None:
        if score.score_a and score.score_b:
            return f"{score.score_a} - {score.score_b} (Winner to be selected manually)"
        return "Enter scores to auto-detect winner"

    display = f"{score.score_a} - {score.score_b}"
    if score.result == MatchResult.TEAM_A:
        return f"{display} (Team A wins)"
    if score.result == MatchResult.TEAM_B:
        return f"{display} (Team B wins)"
    return f"{display} (Draw)"
