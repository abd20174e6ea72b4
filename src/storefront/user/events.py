"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created, either by self-registration or by a super admin."""

    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserProfileUpdated:
    """One or more profile fields (name, e-mail, phone, address, avatar) changed."""

    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    phone: String()
    address: String()
    avatar: String()


@storefront.event(part_of="User")
class UserPasswordChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserRoleChanged:
    """A super admin changed the user's role."""

    __version__ = 1

    user_id: Identifier(required=True)
    previous_role: String(required=True)
    new_role: String(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    __version__ = 1

    user_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)


@storefront.event(part_of="User")
class EmailVerificationRequested:
    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)


@storefront.event(part_of="User")
class EmailVerified:
    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    verified_at: DateTime(required=True)


@storefront.event(part_of="User")
class PasswordResetRequested:
    """A reset token was issued; it expires at `expires_at`."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    expires_at: DateTime(required=True)
