"""Repository credentials supplied out-of-band from the URL."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from .base import PASSWORD, USERNAME, ValidationResult

BOTH_REQUIRED_MESSAGE = "Both Username and password are required."


@dataclass(frozen=True)
class Credentials:
    """Optional username/password pair used for a single query.

    Empty strings count as absent.
    """

    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_username(self) -> bool:
        return bool(self.username)

    @property
    def has_password(self) -> bool:
        return bool(self.password)

    @property
    def is_present(self) -> bool:
        """True when any credential component was supplied."""
        return self.has_username or self.has_password

    @property
    def is_complete(self) -> bool:
        return self.has_username and self.has_password

    def user_info(self) -> Optional[str]:
        """Return ``user:password`` percent-encoded for a URL userinfo part.

        Returns:
            Encoded userinfo, or None unless both components are present
        """
        if not self.is_complete:
            return None
        return f"{quote(self.username, safe='')}:{quote(self.password, safe='')}"

    def validate(self, result: ValidationResult) -> None:
        """Record an error when exactly one component is supplied.

        The error is keyed on whichever component is missing.
        """
        if self.has_username == self.has_password:
            return
        missing_key = PASSWORD if self.has_username else USERNAME
        result.add_error(missing_key, BOTH_REQUIRED_MESSAGE)

    def __repr__(self) -> str:
        password = "***" if self.has_password else None
        return f"Credentials(username={self.username!r}, password={password!r})"
