"""Login: command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.auth.exceptions import InvalidCredentials
from storefront.domain import storefront
from storefront.user.passwords import verify_password
from storefront.user.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class LogIn:
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)


@storefront.command_handler(part_of=User)
class LogInHandler:
    @handle(LogIn)
    def log_in(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)

        if user is None or not verify_password(command.password, user.password_hash):
            logger.warning("login_failed")
            raise InvalidCredentials("Invalid email or password")

        user.record_login()
        repo.add(user)

        logger.info("login_succeeded", user_id=str(user.id))
        return str(user.id)
