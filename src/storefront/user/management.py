"""User management: admin edits, self-service profile, role changes and deletion."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.passwords import hash_password
from storefront.user.user import Role, User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="User")
class UpdateUser:
    """Admin edit of any field except role. Omitted fields are left unchanged."""

    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=254)
    password: String(max_length=128)
    phone: String(max_length=30)
    address: String(max_length=500)
    avatar: String(max_length=500)


@storefront.command(part_of="User")
class UpdateProfile:
    """Self-service edit of the signed-in user's own profile."""

    user_id: Identifier(required=True)
    name: String(max_length=100)
    password: String(max_length=128)
    phone: String(max_length=30)
    address: String(max_length=500)
    avatar: String(max_length=500)


@storefront.command(part_of="User")
class ChangeRole:
    user_id: Identifier(required=True)
    role: String(required=True, choices=Role)


@storefront.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageUserHandler:
    def _apply_changes(self, user, command, email=None):
        user.update_profile(
            name=command.name,
            email=email,
            phone=command.phone,
            address=command.address,
            avatar=command.avatar,
        )
        if command.password:
            user.change_password(hash_password(command.password))

    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email and repo.email_taken(command.email, exclude_id=user.id):
            raise ValidationError({"email": ["Email already exists"]})

        self._apply_changes(user, command, email=command.email)
        repo.add(user)

        logger.info("user_updated", user_id=str(user.id))

    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        self._apply_changes(user, command)
        repo.add(user)

        logger.info("profile_updated", user_id=str(user.id))

    @handle(ChangeRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        previous_role = user.role

        user.change_role(command.role)
        repo.add(user)

        logger.info(
            "user_role_changed",
            user_id=str(user.id),
            previous_role=previous_role,
            new_role=command.role,
        )

    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        repo.remove(user)

        logger.info("user_deleted", user_id=str(command.user_id), email=user.email)
