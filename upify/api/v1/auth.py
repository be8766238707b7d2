import logging
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException

from upify.api.v1.schemas import SignInRequestSchema, SignInResponseSchema
from upify.application import messages
from upify.infrastructure.auth.supabase_session import SupabaseAuthSession
from upify.wiring.dependencies import get_auth_session_factory

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/sign-in", response_model=SignInResponseSchema)
def sign_in(
    req: SignInRequestSchema,
    auth_factory: Callable[[], SupabaseAuthSession] = Depends(get_auth_session_factory),
):
    """
    Exchange email/password for a Supabase access token. The token goes into the
    Authorization header of the submit call.
    """
    try:
        auth = auth_factory()
    except ValueError as e:
        logger.error("Sign-in is not configured", extra={"reason": str(e)})
        raise HTTPException(status_code=503, detail=str(e))

    token = auth.get_access_token() if auth.sign_in_with_password(req.email, req.password) else None
    if not token:
        raise HTTPException(status_code=401, detail=messages.SIGN_IN_FAILED)
    return SignInResponseSchema(access_token=token)
