"""
Risk scoring and verdict classification.

Flags are weighted by severity with diminishing returns, and the raw point
total goes through a saturating curve so that contracts with very different
flag counts still get distinct scores instead of all landing on 100.
"""
import math
from collections import Counter

from schemas import RedFlag, Severity, Verdict

# severity -> (full-weight flags, points for each of those, points for each extra flag)
SEVERITY_WEIGHTS = {
    Severity.HIGH: (2, 12, 6),
    Severity.MODERATE: (3, 6, 3),
    Severity.LOW: (4, 2, 1),
}

CURVE_FLOOR = 20
CURVE_SPAN = 65
CURVE_HALF_POINTS = 15

SIGN_MAX_SCORE = 35
NEGOTIATE_MAX_SCORE = 65


def _severity_of(flag):
    """Accept a RedFlag, a wire dict, a Severity or its string value."""
    if isinstance(flag, RedFlag):
        return flag.severity
    if isinstance(flag, dict):
        flag = flag.get("gravite", flag.get("severity"))
    try:
        return Severity(flag)
    except ValueError:
        raise ValueError(f"Unknown severity: {flag!r}") from None


def raw_points(red_flags):
    """Sum of severity points before the saturating curve is applied."""
    counts = Counter(_severity_of(flag) for flag in red_flags)
    points = 0
    for severity, (full_count, full_points, extra_points) in SEVERITY_WEIGHTS.items():
        count = counts[severity]
        points += min(count, full_count) * full_points
        points += max(0, count - full_count) * extra_points
    return points


def score_red_flags(red_flags) -> int:
    """Convert a list of red flags into a 0-100 risk score."""
    points = raw_points(red_flags)
    if points == 0:
        return 0

    curved = CURVE_FLOOR + (points / (points + CURVE_HALF_POINTS)) * CURVE_SPAN
    # Halves round up
    score = math.floor(curved + 0.5)
    return min(max(score, 0), 100)


def get_verdict(score) -> Verdict:
    """Map a 0-100 risk score to SIGNER, NÉGOCIER or REFUSER."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise TypeError(f"Risk score must be an integer, got {type(score).__name__}")
    if not 0 <= score <= 100:
        raise ValueError(f"Risk score out of range: {score}")

    if score <= SIGN_MAX_SCORE:
        return Verdict.SIGN
    if score <= NEGOTIATE_MAX_SCORE:
        return Verdict.NEGOTIATE
    return Verdict.REFUSE
