"""
Forgot Password Use Case

Issues a one-time verification code and mails it to the account owner.
"""

import logging
from datetime import timedelta

from config import ApplicationConfig
from src.app.services.mailer import IMailer, MailOptions
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import EMAIL_DELIVERY_FAILED, user_not_found
from src.domain.base import utcnow
from src.domain.entities import AuthVerify, VerifyPurpose
from src.domain.result import Error, Result, Return
from src.domain.rules import mask_email, normalize_identity

from .dtos import ForgotPasswordResponse
from .otp import code_digest, generate_verification_code

logger = logging.getLogger(__name__)


class ForgotPasswordUseCase:
    """
    Use case for starting password recovery.

    Business Rules:
    - identity matches email or username of an active user, else 404
    - 6-digit code, never a single repeated digit
    - Code row is stored with its SHA-1 and a short expiry
    - Email carries the raw code and a click-through link keyed by the SHA-1
    - Response exposes only a masked email
    """

    def __init__(self, uow: UnitOfWork, mailer: IMailer):
        self.uow = uow
        self.mailer = mailer

    async def execute(self, identity: str, link_base: str) -> Result[ForgotPasswordResponse]:
        """
        Execute forgot-password use case.

        Args:
            identity: Email or username
            link_base: Scheme and host the verification link should point at

        Returns:
            Result with masked email and admin flag, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_identity(normalize_identity(identity))
            if user is None:
                return Return.err(user_not_found())

            code = generate_verification_code()
            sha1 = code_digest(code)
            await self.uow.auth_verifies.create(
                AuthVerify(
                    user_id=user.id,
                    code=code,
                    sha1=sha1,
                    purpose=VerifyPurpose.password_reset,
                    expires_at=utcnow()
                    + timedelta(minutes=ApplicationConfig.VERIFICATION_CODE_EXPIRES_MINUTES),
                )
            )
            await self.uow.commit()

            user_id = user.id
            email = user.email
            response = ForgotPasswordResponse(email=mask_email(email), is_admin=user.is_admin)
            context = {
                "user": {"full_name": user.full_name, "username": user.username},
                "verification_code": code,
                "reset_link": build_verification_link(link_base, sha1),
            }

        delivered = await self.mailer.send_mail(
            "reset-password",
            context,
            MailOptions(to=email, subject="Reset Password"),
            mode="html",
        )
        if not delivered:
            logger.error("Reset password email was not delivered for user %s", user_id)
            return Return.err(
                Error(EMAIL_DELIVERY_FAILED, "Unable to send email. Please try again later")
            )

        return Return.ok(response)


def build_verification_link(link_base: str, sha1: str) -> str:
    web_root = ApplicationConfig.WEB_PREFIX.rstrip("/")
    return f"{link_base.rstrip('/')}{web_root}/verification?token={sha1}"
