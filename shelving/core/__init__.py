"""Core command logic for the shelving commands.

This package contains zero external dependencies. The change-management
store and the diff-statistics tool are reached through the ports in
ports.py; concrete implementations live in the adapters package.
"""

from .errors import (
    ArgumentShapeError,
    EncodingError,
    NoShelvesFoundError,
    ShelvingError,
    StoreOperationError,
    TargetValidationError,
)
from .models import (
    ClientContext,
    Depth,
    NotifyAction,
    NotifyCallback,
    ShelfNotification,
    ShelfRecord,
    ShelveOptions,
)

__all__ = [
    "ArgumentShapeError",
    "ClientContext",
    "Depth",
    "EncodingError",
    "NoShelvesFoundError",
    "NotifyAction",
    "NotifyCallback",
    "ShelfNotification",
    "ShelfRecord",
    "ShelveOptions",
    "ShelvingError",
    "StoreOperationError",
    "TargetValidationError",
]
