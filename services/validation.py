"""
Input policies for the account and store forms.

Self-signup and admin provisioning deliberately use different limits, so each
endpoint gets its own named policy instead of one shared rule set.
"""
import re
from dataclasses import dataclass, field

from errors import ValidationError

ROLES = ("admin", "user", "store_owner")
PASSWORD_SYMBOLS = "!@#$%^&*"
ADDRESS_MAX_LENGTH = 400


@dataclass(frozen=True)
class PasswordPolicy:
    min_length: int
    max_length: int
    pattern: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        symbols = re.escape(PASSWORD_SYMBOLS)
        # frozen dataclass: compiled once here, reused by every check()
        object.__setattr__(
            self,
            "pattern",
            re.compile(
                rf"^(?=.*[A-Z])(?=.*[{symbols}])[A-Za-z\d{symbols}]{{{self.min_length},{self.max_length}}}$"
            ),
        )

    @property
    def description(self) -> str:
        return (
            f"Password must be {self.min_length}-{self.max_length} characters "
            "with at least one uppercase and one special character"
        )

    def check(self, password: str | None) -> None:
        if not password or not self.pattern.match(password):
            raise ValidationError(self.description)


@dataclass(frozen=True)
class NamePolicy:
    min_length: int
    max_length: int

    def check(self, name: str | None) -> None:
        if name is None or not self.min_length <= len(name) <= self.max_length:
            raise ValidationError(f"Name must be between {self.min_length}-{self.max_length} characters")


# signup / change-password
SIGNUP_NAME = NamePolicy(8, 20)
SIGNUP_PASSWORD = PasswordPolicy(6, 12)

# admin "add user"
ADMIN_USER_NAME = NamePolicy(20, 60)
ADMIN_USER_PASSWORD = PasswordPolicy(8, 16)

# admin "add store"
STORE_NAME = NamePolicy(10, 60)


def check_address(address: str | None) -> None:
    if address and len(address) > ADDRESS_MAX_LENGTH:
        raise ValidationError(f"Address must be max {ADDRESS_MAX_LENGTH} characters")


def check_role(role: str | None) -> None:
    if role not in ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")


def check_rating(value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 5:
        raise ValidationError("Rating must be between 1 and 5")
