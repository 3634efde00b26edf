"""Error taxonomy shared by the services and mapped to HTTP status codes in main."""


class RideshareError(Exception):
    """Base for errors that surface to clients as a status code and a short message."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(RideshareError):
    """Missing or malformed required fields."""

    status_code = 400
    default_message = "Invalid input"


class Unauthenticated(RideshareError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Authentication failed"


class Unauthorized(RideshareError):
    """Valid identity lacking the required permission."""

    status_code = 403
    default_message = "Not authorized"


class NotFound(RideshareError):
    status_code = 404
    default_message = "Not found"


class Conflict(RideshareError):
    """Uniqueness violation reported by the store."""

    status_code = 409
    default_message = "Conflict"


class AuthFailure(Unauthenticated):
    """A bearer token that cannot be accepted."""


class MalformedToken(AuthFailure):
    default_message = "Invalid token"


class ExpiredToken(AuthFailure):
    default_message = "Token has expired"


class UnknownSubject(AuthFailure):
    default_message = "User doesn't exist"
