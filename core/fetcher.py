"""
fetcher.py -- Breach lookup against the Have I Been Pwned range API.

k-anonymity: only the first 5 hex characters of the password's SHA-1 leave the
process. The API answers with every known suffix sharing that prefix, and the
match happens locally.

Fails open: any network, HTTP, or parse error yields "not pwned". An outage of
a third-party API must never block a password check.
"""

import hashlib
import logging
from typing import Optional

import requests

from .models import PwnedResult

logger = logging.getLogger("passcheck.fetcher")

PWNED_RANGE_API = "https://api.pwnedpasswords.com/range/"
DEFAULT_TIMEOUT = 5.0

# Module-level session shared across all fetcher calls for connection pooling.
# max_redirects=3 replaces the requests default of 30 -- this is a known public
# API, 3 hops is generous and protects against redirect chains.
_session = requests.Session()
_session.max_redirects = 3
_session.headers.update({"User-Agent": "password-checker", "Add-Padding": "true"})


def sha1_prefix_suffix(password: str) -> tuple[str, str]:
    """Return the upper-case SHA-1 hex of password split into (5-char prefix, suffix)."""
    digest = hashlib.sha1(password.encode("utf-8")).hexdigest().upper()  # noqa: S324 -- HIBP protocol, not storage
    return digest[:5], digest[5:]


def fetch_pwned_range(prefix: str, api_url: str = PWNED_RANGE_API, timeout: float = DEFAULT_TIMEOUT) -> Optional[str]:
    """Fetch the raw SUFFIX:COUNT body for a 5-char hash prefix. Returns None on failure."""
    try:
        resp = _session.get(f"{api_url}{prefix}", timeout=timeout)
        resp.raise_for_status()
        return resp.text
    except requests.RequestException as e:
        logger.warning("Pwned range fetch failed for prefix %s: %s", prefix, e)
        return None


def parse_range(body: str, suffix: str) -> int:
    """Return the breach count for suffix in a range response body, or 0 if absent.

    With Add-Padding the API injects fake suffixes with a count of 0; a match
    on one of those is reported as 0 like any miss.
    """
    for line in body.splitlines():
        candidate, _, count = line.strip().partition(":")
        if candidate.upper() == suffix:
            return int(count)
    return 0


def check_pwned(password: str, api_url: str = PWNED_RANGE_API, timeout: float = DEFAULT_TIMEOUT) -> PwnedResult:
    """Look up password in the breach corpus without sending the full hash.

    Args:
        password: Plaintext to check. Never logged and never sent.
        api_url:  Range endpoint base, prefix is appended. Overridable for tests
                  and self-hosted mirrors.
        timeout:  Per-request timeout in seconds.
    """
    prefix, suffix = sha1_prefix_suffix(password)
    body = fetch_pwned_range(prefix, api_url=api_url, timeout=timeout)
    if body is None:
        return PwnedResult()
    try:
        count = parse_range(body, suffix)
    except ValueError as e:
        logger.warning("Unparseable pwned range response for prefix %s: %s", prefix, e)
        return PwnedResult()
    return PwnedResult(is_pwned=count > 0, count=count)
