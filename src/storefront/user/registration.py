"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.passwords import hash_password
from storefront.user.user import Role, User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create an account. `role` is `user` for self-registration and `admin`
    when a super admin creates staff."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128)
    role: String(choices=Role, default=Role.USER.value)
    phone: String(max_length=30)
    address: String(max_length=500)
    avatar: String(max_length=500)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.email_taken(command.email):
            logger.info("registration_rejected", reason="email_taken")
            raise ValidationError({"email": ["Email already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=hash_password(command.password),
            role=command.role,
            phone=command.phone,
            address=command.address,
            avatar=command.avatar,
        )
        repo.add(user)

        logger.info("user_registered", user_id=str(user.id), role=user.role)
        return str(user.id)
