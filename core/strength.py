"""
strength.py -- Deterministic password strength evaluation.

Pure functions of the input string: no I/O, no randomness, no config. The
score, feedback, common-password flag and crack-time estimate are all derived
from regex character-class checks over the plaintext.
"""

import re

from .common_passwords import COMMON_PASSWORDS
from .models import PasswordStrength

# ---------------------------------------------------------------------------
# Character classes and weak patterns
# ---------------------------------------------------------------------------

_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SPECIAL_RE = re.compile(r"[^a-zA-Z0-9]")

_ALL_DIGITS_RE = re.compile(r"[0-9]+")
_ALL_LETTERS_RE = re.compile(r"[a-zA-Z]+")
_REPEATED_RE = re.compile(r"(.)\1{2,}")
_SEQUENCE_PREFIX_RE = re.compile(r"^(123|abc|qwe)", re.IGNORECASE)
# Feedback also flags a leading "password"; the score penalty does not.
_COMMON_PREFIX_RE = re.compile(r"^(123|abc|qwe|password)", re.IGNORECASE)

# ---------------------------------------------------------------------------
# Crack-time model
# ---------------------------------------------------------------------------

GUESSES_PER_SECOND = 1_000_000_000

_MINUTE = 60
_HOUR = 3600
_DAY = 86400
_MONTH = 2_592_000  # 30 days
_YEAR = 31_536_000  # 365 days

# Above this many combinations the estimate is past a billion years.
_CENTURIES_THRESHOLD = GUESSES_PER_SECOND * _YEAR * 1_000_000_000

_VERDICTS = {
    4: "Excellent! This is a very strong password",
    3: "Good password strength",
    2: "Moderate strength - could be improved",
    1: "Weak password - please strengthen it",
    0: "Very weak password - NOT RECOMMENDED",
}


def _score(password: str) -> int:
    """Additive score over length and character variety, minus weak patterns, on a 0-4 scale."""
    score = 0

    if len(password) >= 8:
        score += 1
    if len(password) >= 12:
        score += 1
    if len(password) >= 16:
        score += 1

    for pattern in (_LOWER_RE, _UPPER_RE, _DIGIT_RE, _SPECIAL_RE):
        if pattern.search(password):
            score += 1

    if _ALL_DIGITS_RE.fullmatch(password):
        score -= 2
    if _ALL_LETTERS_RE.fullmatch(password):
        score -= 1
    if _REPEATED_RE.search(password):
        score -= 1
    if _SEQUENCE_PREFIX_RE.match(password):
        score -= 1

    return max(0, min(4, score // 2))


def _feedback(password: str, score: int, is_common: bool) -> list[str]:
    feedback: list[str] = []

    if len(password) < 8:
        feedback.append("Password should be at least 8 characters long")
    elif len(password) < 12:
        feedback.append("Consider using at least 12 characters for better security")

    if not _LOWER_RE.search(password):
        feedback.append("Add lowercase letters (a-z)")
    if not _UPPER_RE.search(password):
        feedback.append("Add uppercase letters (A-Z)")
    if not _DIGIT_RE.search(password):
        feedback.append("Add numbers (0-9)")
    if not _SPECIAL_RE.search(password):
        feedback.append("Add special characters (!@#$%^&*)")

    if _REPEATED_RE.search(password):
        feedback.append('Avoid repeated characters (e.g., "aaa", "111")')
    if _COMMON_PREFIX_RE.match(password):
        feedback.append("Avoid common sequences and words")

    if is_common:
        feedback.append("This is a commonly used password - DO NOT USE IT")

    feedback.append(_VERDICTS[score])
    return feedback


def _char_space(password: str) -> int:
    space = 0
    if _LOWER_RE.search(password):
        space += 26
    if _UPPER_RE.search(password):
        space += 26
    if _DIGIT_RE.search(password):
        space += 10
    if _SPECIAL_RE.search(password):
        space += 32
    return space


def _crack_time(password: str) -> str:
    """Estimate brute-force time at GUESSES_PER_SECOND and bucket it for display.

    Combinations are computed as an exact integer and compared against the
    top bucket before any float division, so long passwords cannot overflow.
    """
    combinations = _char_space(password) ** len(password)
    if combinations >= _CENTURIES_THRESHOLD:
        return "Centuries"

    return _format_duration(combinations / GUESSES_PER_SECOND)


def _round_half_up(value: float) -> int:
    # round() is banker's rounding; 2.5 must display as 3.
    return int(value + 0.5)


def _format_duration(seconds: float) -> str:
    if seconds < 1:
        return "Instant"
    if seconds < _MINUTE:
        return f"{_round_half_up(seconds)} seconds"
    if seconds < _HOUR:
        return f"{_round_half_up(seconds / _MINUTE)} minutes"
    if seconds < _DAY:
        return f"{_round_half_up(seconds / _HOUR)} hours"
    if seconds < _MONTH:
        return f"{_round_half_up(seconds / _DAY)} days"
    if seconds < _YEAR:
        return f"{_round_half_up(seconds / _MONTH)} months"

    years = seconds / _YEAR
    if years < 1_000_000:
        return f"{_round_half_up(years):,} years"
    return f"{_round_half_up(years / 1_000_000):,} million years"


def is_common_password(password: str) -> bool:
    """Return True if the password (case-insensitive) is in the static common set."""
    return password.lower() in COMMON_PASSWORDS


def check_password(password: str) -> PasswordStrength:
    """Evaluate a plaintext password and return its strength report."""
    score = _score(password)
    is_common = is_common_password(password)
    return PasswordStrength(
        score=score,
        feedback=_feedback(password, score, is_common),
        is_common=is_common,
        crack_time=_crack_time(password),
    )
