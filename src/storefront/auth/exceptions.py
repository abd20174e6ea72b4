"""Authentication failures, translated to 401 responses at the HTTP edge."""


class InvalidCredentials(Exception):
    """E-mail unknown or password mismatch. Deliberately unspecific."""


class InvalidToken(Exception):
    """Bearer token missing, malformed, expired, or naming a user that no longer exists."""
