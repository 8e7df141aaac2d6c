"""Sign-in and sign-out form endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from src.config import settings
from src.middleware.rate_limit import limiter
from src.modules.auth.actions import authenticate
from src.modules.auth.dependencies import get_identity
from src.modules.auth.identity import IdentityService
from src.schemas.forms import FormState

router = APIRouter(tags=["auth"])


@router.post("/login")
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    identity: IdentityService = Depends(get_identity),
):
    """Credential sign-in. Success sets the session cookie and redirects."""
    form_data = await request.form()
    outcome = await authenticate(identity, None, form_data)
    if isinstance(outcome, str):
        return JSONResponse(status_code=401, content=FormState(message=outcome).model_dump())

    response = RedirectResponse(outcome.redirect_to, status_code=303)
    response.set_cookie(
        settings.session_cookie_name,
        outcome.session_token,
        max_age=settings.session_expiry_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment != "development",
    )
    return response


@router.post("/logout")
async def logout():
    response = RedirectResponse(settings.login_path, status_code=303)
    response.delete_cookie(settings.session_cookie_name)
    return response
