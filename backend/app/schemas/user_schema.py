import enum
from typing import Optional

from pydantic import BaseModel, field_validator


class Role(enum.Enum):
    BUYER = "buyer"
    SELLER = "seller"


class AccountUser(BaseModel):
    """User object returned by the account service's authorize endpoint."""

    id: int
    email: str = ""
    full_name: str = ""
    address: str = ""
    phone_number: str = ""
    # unknown role strings carry no capability
    role: Optional[Role] = None

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, v):
        try:
            return Role(v)
        except ValueError:
            return None

    def has_role(self, role: Role) -> bool:
        return self.role is role
