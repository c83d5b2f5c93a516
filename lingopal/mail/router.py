from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from lingopal.exceptions import ValidationError
from lingopal.middleware.security import mail_route_limit

from .sender import send_verification_email


class VerificationEmailRequest(BaseModel):
    to: str | None = None
    verificationUrl: str | None = Field(default=None)  # noqa: N815


class VerificationEmailResponse(BaseModel):
    message: str


router = APIRouter(prefix="/api/mail", tags=["mail"], dependencies=[Depends(mail_route_limit)])


@router.post("/send-verification")
async def send_verification(data: VerificationEmailRequest) -> VerificationEmailResponse:
    """Send an account verification e-mail."""
    if not data.to or not data.verificationUrl:
        msg = "Missing required fields: 'to' and 'verificationUrl'."
        raise ValidationError(msg)

    await send_verification_email(email=data.to, verification_url=data.verificationUrl)
    return VerificationEmailResponse(message=f"Verification email sent to {data.to}")
