"""EmailAddress value object for validated, normalized e-mail addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


@storefront.value_object
class EmailAddress:
    """A structurally valid e-mail address.

    Exactly one @, non-empty local and domain parts, a dotted domain without
    leading/trailing dots or hyphens, no whitespace, no consecutive dots, and no
    forbidden characters. Addresses are compared lower-cased, so construct with
    `EmailAddress.normalized(...)` when the value will be stored or looked up.
    """

    address: String(required=True, max_length=254)

    @classmethod
    def normalized(cls, address):
        return cls(address=address.strip().lower())

    @invariant.post
    def address_must_be_well_formed(self):
        email = self.address

        if any(ch.isspace() for ch in email):
            raise _invalid(email)

        if email.count("@") != 1:
            raise _invalid(email)

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise _invalid(email)

        if not domain_part or "." not in domain_part:
            raise _invalid(email)

        if domain_part.startswith(".") or domain_part.endswith("."):
            raise _invalid(email)

        if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
            raise _invalid(email)

        if ".." in email:
            raise _invalid(email)

        if any(ch in email for ch in _FORBIDDEN_CHARACTERS):
            raise _invalid(email)
