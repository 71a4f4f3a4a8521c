"""Account profile and the change-set applied to it."""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import AddressInput, PostalAddress


@dataclass(frozen=True)
class Profile:
    email: str
    first_name: str = ""
    last_name: str = ""
    default_shipping_address_id: str | None = None
    default_shipping_address: PostalAddress | None = None


@dataclass(frozen=True)
class PasswordChange:
    new_password: str
    confirmation: str

    def __post_init__(self) -> None:
        if not self.new_password or not self.confirmation:
            raise ValidationError("Please fill both password fields")
        if self.new_password != self.confirmation:
            raise ValidationError("Passwords do not match")


@dataclass(frozen=True)
class ProfileChangeSet:
    """What the customer asked to change.

    ``current_password`` is always required, whichever fields changed.
    """

    current_password: str
    first_name: str | None = None
    last_name: str | None = None
    shipping_address: AddressInput | None = None
    password: PasswordChange | None = None

    @property
    def changes_name(self) -> bool:
        return self.first_name is not None or self.last_name is not None

    @property
    def is_empty(self) -> bool:
        return not (
            self.changes_name
            or self.shipping_address is not None
            or self.password is not None
        )


@dataclass
class ProfileUpdateResult:
    applied: list[str] = field(default_factory=list)
