"""
formatter.py -- Renders a PasswordStrength report to terminal output or JSON.

JSON keys mirror the REST API (camelCase) so CLI output can be diffed against
POST /password/check responses.
"""

import json
import os
import re
import sys
from typing import Optional

from .models import PasswordStrength, PwnedResult

W = 60  # output width

# ---------------------------------------------------------------------------
# ANSI color control
# ---------------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from a string."""
    return _ANSI_RE.sub("", text)


def _use_color() -> bool:
    """Return True if stdout is a TTY and color has not been disabled.

    Respects NO_COLOR (https://no-color.org) and FORCE_COLOR.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


_color_enabled: Optional[bool] = None  # None = auto-detect


def disable_color() -> None:
    """Force-disable color output (called when --no-color flag is set)."""
    global _color_enabled
    _color_enabled = False


def enable_color() -> None:
    global _color_enabled
    _color_enabled = True


def _color_active() -> bool:
    if _color_enabled is not None:
        return _color_enabled
    return _use_color()


SCORE_COLORS = {
    0: "\033[91m",  # red
    1: "\033[91m",
    2: "\033[93m",  # yellow
    3: "\033[94m",  # blue
    4: "\033[92m",  # green
}

SCORE_LABELS = {
    0: "Very weak",
    1: "Weak",
    2: "Moderate",
    3: "Strong",
    4: "Very strong",
}


def _reset() -> str:
    return "\033[0m" if _color_active() else ""


def _bold() -> str:
    return "\033[1m" if _color_active() else ""


def _red() -> str:
    return "\033[91m" if _color_active() else ""


def _score_color(score: int) -> str:
    return SCORE_COLORS.get(score, "") if _color_active() else ""


def _meter(score: int) -> str:
    """Five-slot meter: one filled slot per point plus the baseline slot."""
    return "█" * (score + 1) + "░" * (4 - score)


# ---------------------------------------------------------------------------
# Terminal renderer
# ---------------------------------------------------------------------------


def print_strength(strength: PasswordStrength, pwned: Optional[PwnedResult] = None) -> None:
    bold = _bold()
    reset = _reset()
    color = _score_color(strength.score)

    print(f"\n{bold}{'═' * W}{reset}")
    print(
        f"  {bold}Strength{reset}  {color}{_meter(strength.score)}  "
        f"{strength.score}/4 {SCORE_LABELS[strength.score]}{reset}"
    )
    print(f"{bold}{'═' * W}{reset}")

    print(f"    Time to crack   {strength.crack_time}")
    common_val = f"{_red()}{bold}YES{reset}" if strength.is_common else "No"
    print(f"    Common password {common_val}")
    if pwned is not None:
        if pwned.is_pwned:
            print(f"    Seen in breaches {_red()}{bold}YES ({pwned.count:,} times){reset}")
        else:
            print("    Seen in breaches No")

    print(f"\n  {bold}FEEDBACK{reset}\n  {'─' * (W - 2)}")
    for line in strength.feedback:
        print(f"    - {line}")
    print()


# ---------------------------------------------------------------------------
# JSON renderer
# ---------------------------------------------------------------------------


def to_dict(strength: PasswordStrength, pwned: Optional[PwnedResult] = None) -> dict:
    data: dict = {
        "score": strength.score,
        "feedback": list(strength.feedback),
        "isCommon": strength.is_common,
        "crackTime": strength.crack_time,
    }
    if pwned is not None:
        data["isPwned"] = pwned.is_pwned
        data["pwnedCount"] = pwned.count
    return data


def to_json(strength: PasswordStrength, pwned: Optional[PwnedResult] = None) -> str:
    return json.dumps(to_dict(strength, pwned), indent=2, ensure_ascii=False)
