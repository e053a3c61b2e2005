"""Domain value objects."""

from .value_objects import ADMIN_ROLE, MAX_ROW_ID, ExecutionID, Identity, is_row_id
from .order_patch import OrderPatch

__all__ = [
    "ADMIN_ROLE",
    "ExecutionID",
    "Identity",
    "is_row_id",
    "MAX_ROW_ID",
    "OrderPatch",
]
