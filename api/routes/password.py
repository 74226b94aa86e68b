"""
api/routes/password.py -- Password strength and breach lookup endpoints.

Routes:
  POST /password/check        -- strength report (score, feedback, isCommon, crackTime)
  POST /password/check-pwned  -- k-anonymity breach lookup {isPwned, count}

Both require authentication. The submitted password is never logged or stored.
check-pwned fails open: if the breach API is down the response is
{isPwned: false, count: 0} with status 200.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.models import CheckPasswordRequest, PasswordStrengthResponse, PwnedResponse
from auth.dependencies import get_current_user
from core.config import get_settings
from core.fetcher import check_pwned
from core.strength import check_password

router = APIRouter(prefix="/password", dependencies=[Depends(get_current_user)])


@router.post("/check", response_model=PasswordStrengthResponse)
async def check(body: CheckPasswordRequest) -> PasswordStrengthResponse:
    return PasswordStrengthResponse.from_strength(check_password(body.password))


@router.post("/check-pwned", response_model=PwnedResponse)
def check_pwned_password(body: CheckPasswordRequest) -> PwnedResponse:
    """Plain `def`: the breach lookup is a blocking requests call, run in the threadpool."""
    settings = get_settings()
    result = check_pwned(body.password, api_url=settings.pwned_api_url, timeout=settings.pwned_timeout)
    return PwnedResponse.from_result(result)
