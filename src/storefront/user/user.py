"""User aggregate root: identity, credentials, profile and role."""

import secrets
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront
from storefront.shared.email import EmailAddress
from storefront.shared.settings import get_password_reset_lifetime

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

_PROFILE_FIELDS = ("name", "phone", "address", "avatar")


class Role(Enum):
    """Access levels, from least to most privileged."""

    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


STAFF_ROLES = frozenset({Role.ADMIN.value, Role.SUPER_ADMIN.value})


@storefront.aggregate
class User:
    """A person who can sign in: a shopper, an admin, or a super admin.

    Credentials are stored only as a bcrypt hash. The e-mail address is unique
    across users and stored lower-cased. Verification and password-reset tokens
    are single-use and cleared once consumed.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    avatar: String(max_length=500, default="")
    phone: String(max_length=30, default="")
    address: String(max_length=500, default="")
    role: String(choices=Role, default=Role.USER.value)
    is_email_verified: Boolean(default=False)
    email_verification_token: String(max_length=100)
    password_reset_token: String(max_length=100)
    password_reset_expires: DateTime()
    last_login_at: DateTime()
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @property
    def is_staff(self):
        return self.role in STAFF_ROLES

    @classmethod
    def register(
        cls,
        name,
        email,
        password_hash,
        role=Role.USER.value,
        phone=None,
        address=None,
        avatar=None,
    ):
        from storefront.user.events import UserRegistered

        email_vo = EmailAddress.normalized(email)
        now = datetime.now(UTC)

        user = cls(
            name=name,
            email=email_vo.address,
            password_hash=password_hash,
            role=role,
            phone=phone or "",
            address=address or "",
            avatar=avatar or "",
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                name=name,
                email=email_vo.address,
                role=role,
                registered_at=now,
            )
        )
        return user

    def update_profile(self, name=_UNSET, email=_UNSET, phone=_UNSET, address=_UNSET, avatar=_UNSET):
        """Replace the supplied profile fields; omitted fields keep their value."""
        from storefront.user.events import UserProfileUpdated

        if email is not _UNSET and email is not None:
            self.email = EmailAddress.normalized(email).address

        changes = {"name": name, "phone": phone, "address": address, "avatar": avatar}
        for field in _PROFILE_FIELDS:
            value = changes[field]
            if value is not _UNSET and value is not None:
                setattr(self, field, value)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            UserProfileUpdated(
                user_id=self.id,
                name=self.name,
                email=self.email,
                phone=self.phone,
                address=self.address,
                avatar=self.avatar,
            )
        )

    def change_password(self, password_hash):
        from storefront.user.events import UserPasswordChanged

        now = datetime.now(UTC)
        self.password_hash = password_hash
        self.password_reset_token = None
        self.password_reset_expires = None
        self.updated_at = now
        self.raise_(UserPasswordChanged(user_id=self.id, changed_at=now))

    def change_role(self, new_role):
        from storefront.user.events import UserRoleChanged

        if new_role not in {role.value for role in Role}:
            raise ValidationError({"role": [f"Unknown role: {new_role}"]})

        previous_role = self.role
        self.role = new_role
        self.updated_at = datetime.now(UTC)
        self.raise_(
            UserRoleChanged(
                user_id=self.id,
                previous_role=previous_role,
                new_role=new_role,
            )
        )

    def record_login(self):
        from storefront.user.events import UserLoggedIn

        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=self.id, logged_in_at=now))

    # -------------------------------------------------------------------
    # Account tokens
    # -------------------------------------------------------------------
    def issue_email_verification(self):
        from storefront.user.events import EmailVerificationRequested

        if self.is_email_verified:
            raise ValidationError({"email": ["Email is already verified"]})

        token = secrets.token_urlsafe(32)
        self.email_verification_token = token
        self.updated_at = datetime.now(UTC)
        self.raise_(EmailVerificationRequested(user_id=self.id, email=self.email))
        return token

    def verify_email(self, token):
        from storefront.user.events import EmailVerified

        if not self.email_verification_token or not secrets.compare_digest(self.email_verification_token, token):
            raise ValidationError({"token": ["Invalid verification token"]})

        now = datetime.now(UTC)
        self.is_email_verified = True
        self.email_verification_token = None
        self.updated_at = now
        self.raise_(EmailVerified(user_id=self.id, email=self.email, verified_at=now))

    def issue_password_reset(self):
        from storefront.user.events import PasswordResetRequested

        token = secrets.token_urlsafe(32)
        expires_at = datetime.now(UTC) + get_password_reset_lifetime()
        self.password_reset_token = token
        self.password_reset_expires = expires_at
        self.raise_(
            PasswordResetRequested(
                user_id=self.id,
                email=self.email,
                expires_at=expires_at,
            )
        )
        return token

    def reset_password(self, token, password_hash, now=None):
        now = now or datetime.now(UTC)

        if not self.password_reset_token or not secrets.compare_digest(self.password_reset_token, token):
            raise ValidationError({"token": ["Invalid or expired reset token"]})

        expires_at = self.password_reset_expires
        if expires_at is not None and expires_at.tzinfo is None:
            # SQL columns without a timezone hand back naive UTC values
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at is None or expires_at < now:
            raise ValidationError({"token": ["Invalid or expired reset token"]})

        self.change_password(password_hash)
