"""Shared exceptions for service layer operations."""


class CredentialsTakenError(Exception):
    """Raised on signup when the email is already registered."""

    def __init__(self) -> None:
        super().__init__("Credentials taken")


class CredentialsInvalidError(Exception):
    """
    Raised on signin when the email is unknown or the password is wrong.

    Both cases use this one exception and message so a caller cannot tell which
    of the two happened.
    """

    def __init__(self) -> None:
        super().__init__("Credentials invalid")


class AccessDeniedError(Exception):
    """
    Raised when a bookmark doesn't exist or doesn't belong to the user.

    The two cases are deliberately not distinguished.
    """

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Access to resource is denied")
