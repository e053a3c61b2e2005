"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from uuid import UUID, uuid4


ADMIN_ROLE = "admin"

# Integer primary key range shared by every table
MAX_ROW_ID = 2**31 - 1


def is_row_id(value: int) -> bool:
    """Check that ``value`` fits an integer primary key column."""
    return 0 < value <= MAX_ROW_ID


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for unit-of-work tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)


@dataclass(frozen=True)
class Identity:
    """
    Authenticated caller as asserted by the external identity service.
    
    Only the user id and role are consumed by the ordering core.
    """
    user_id: int
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        """Check if caller holds the admin role."""
        return self.role == ADMIN_ROLE

    def can_access(self, owner_id: int) -> bool:
        """Admins access everything, users only what they own."""
        return self.is_admin or self.user_id == owner_id
