"""Account tokens: e-mail verification and password reset.

Tokens are random URL-safe strings stored on the User. Delivery is out of
scope; issued tokens are logged and returned by the handler so the caller can
hand them to whatever transport is configured.
"""

from datetime import UTC, datetime

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.passwords import hash_password
from storefront.user.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RequestEmailVerification:
    user_id: Identifier(required=True)


@storefront.command(part_of="User")
class VerifyEmail:
    token: String(required=True, max_length=100)


@storefront.command(part_of="User")
class RequestPasswordReset:
    email: String(required=True, max_length=254)


@storefront.command(part_of="User")
class ResetPassword:
    token: String(required=True, max_length=100)
    new_password: String(required=True, max_length=128)


@storefront.command_handler(part_of=User)
class AccountTokenHandler:
    @handle(RequestEmailVerification)
    def request_email_verification(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        token = user.issue_email_verification()
        repo.add(user)

        logger.info("email_verification_issued", user_id=str(user.id))
        return token

    @handle(VerifyEmail)
    def verify_email(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_verification_token(command.token)
        if user is None:
            raise ValidationError({"token": ["Invalid verification token"]})

        user.verify_email(command.token)
        repo.add(user)

        logger.info("email_verified", user_id=str(user.id))
        return str(user.id)

    @handle(RequestPasswordReset)
    def request_password_reset(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None:
            # Unknown addresses are accepted silently
            logger.info("password_reset_unknown_email")
            return None

        token = user.issue_password_reset()
        repo.add(user)

        logger.info("password_reset_issued", user_id=str(user.id))
        return token

    @handle(ResetPassword)
    def reset_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_reset_token(command.token)
        if user is None:
            raise ValidationError({"token": ["Invalid or expired reset token"]})

        user.reset_password(command.token, hash_password(command.new_password), now=datetime.now(UTC))
        repo.add(user)

        logger.info("password_reset_completed", user_id=str(user.id))
        return str(user.id)
