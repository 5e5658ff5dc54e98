"""API router for account registration, login and email verification."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from app.application.services.account_service import AccountService
from app.core.config import Settings
from app.core.dependencies import (
    get_account_service,
    get_resend_issuer,
    get_settings,
    get_verification_processor,
)
from app.domain.errors import (
    AccountNotActivatedError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from app.domain.models import TokenNotFound, UserNotFound
from app.presentation.api.schemas.account_schemas import (
    AccountLoginRequest,
    AccountLoginResponse,
    AccountRegisterRequest,
    AccountRegisterResponse,
    MessageResponse,
)
from app.services.resend_issuer import ResendIssuer
from app.services.verification_processor import VerificationProcessor

router = APIRouter(prefix="/account", tags=["account"])


@router.post("/register", response_model=AccountRegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: AccountRegisterRequest,
    account_service: AccountService = Depends(get_account_service),
) -> AccountRegisterResponse:
    """Register a new account and send its verification email."""
    try:
        user, _ = account_service.register(
            name=request.name,
            email=request.email,
            password=request.password,
        )
    except (ValueError, EmailAlreadyRegisteredError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return AccountRegisterResponse(
        user_id=user.id,
        email=user.email,
        message="Registration successful. Please check your email to verify your account.",
    )


@router.post("/login", response_model=AccountLoginResponse)
async def login(
    request: AccountLoginRequest,
    account_service: AccountService = Depends(get_account_service),
) -> AccountLoginResponse:
    """Login once the account has been activated."""
    try:
        access_token = account_service.login(request.email, request.password)
    except AccountNotActivatedError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=exc.reason) from exc
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    return AccountLoginResponse(access_token=access_token)


@router.get(
    "/verify/resend/{email}",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def resend_verification(
    email: str,
    resend_issuer: ResendIssuer = Depends(get_resend_issuer),
) -> MessageResponse:
    """Issue a fresh verification token and email it again."""
    result = resend_issuer.resend(email)

    if isinstance(result, UserNotFound):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No account registered with this email.")

    return MessageResponse(message="Verification email sent")


@router.get("/verify/{token}", name="account.verify")
async def verify(
    token: str,
    processor: VerificationProcessor = Depends(get_verification_processor),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """Consume a verification token and redirect to the login page."""
    result = processor.consume(token)

    if isinstance(result, TokenNotFound):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid or expired verification link.",
        )

    return RedirectResponse(url=settings.login_url, status_code=status.HTTP_303_SEE_OTHER)
