"""User entity and tool parameter models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

# Range of the users.id column (PostgreSQL int4, ids start at 1)
MIN_USER_ID = 1
MAX_USER_ID = 2**31 - 1


class User(BaseModel):
    """A user row as returned by the store."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Server-assigned identifier")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address (format not enforced)")
    role: str = Field(..., description="Free-text role, e.g. admin or user")
    created_at: datetime = Field(..., description="When the row was inserted")


# ============ TOOL PARAMETER MODELS ============
# Extra keys are allowed so clients may send fields a tool does not use.


class ListUsersParams(BaseModel):
    """Parameters for list_users (none)."""

    model_config = ConfigDict(extra="allow")


class GetUserParams(BaseModel):
    """Parameters for get_user."""

    model_config = ConfigDict(extra="allow")

    id: StrictInt | StrictFloat = Field(..., description="ID of the user to fetch")

    @field_validator("id", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Input should be a valid number, not a boolean")
        return value

    @property
    def key(self) -> int | None:
        """Integer store key, or None when the id cannot match any row.

        Fractional ids and ids outside the column range never reach the store.
        """
        if isinstance(self.id, float):
            if not self.id.is_integer():
                return None
            key = int(self.id)
        else:
            key = self.id
        if not MIN_USER_ID <= key <= MAX_USER_ID:
            return None
        return key


class CreateUserParams(BaseModel):
    """Parameters for create_user."""

    model_config = ConfigDict(extra="allow")

    name: StrictStr = Field(..., description="Display name")
    email: StrictStr = Field(..., description="Email address")
    role: StrictStr = Field(..., description="Role, e.g. admin or user")

    def to_fields(self) -> dict[str, str]:
        """Columns to insert; extra keys are not persisted."""
        return {"name": self.name, "email": self.email, "role": self.role}
