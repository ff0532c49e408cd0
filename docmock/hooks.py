"""Pre-save hook registry.

A hook receives the full pending document payload and returns an
awaitable resolving to one of:
    {"accepted": payload}   accept, merging payload into the save
    {"success": payload}    same, in the remote webhook spelling
    {"error": message}      reject
    None                    accept unchanged
Raising inside the hook also rejects the save.
"""

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from docmock.exceptions import UnsupportedHookTypeError
from docmock.observability.logging import get_logger

logger = get_logger(__name__)

PreSaveHook = Callable[[dict[str, Any]], Awaitable[dict[str, Any] | None]]


class HookType(str, Enum):
    """Hook kinds. Only beforeSave is emulated."""

    BEFORE_SAVE = "beforeSave"


class HookRegistry:
    """Holds at most one pre-save hook per collection."""

    def __init__(self) -> None:
        self._hooks: dict[str, dict[HookType, PreSaveHook]] = {}

    def register(self, collection: str, hook_type: str | HookType, handler: PreSaveHook) -> None:
        """Register a hook, replacing any previous one of the same kind.

        Raises:
            UnsupportedHookTypeError: For any kind other than beforeSave
        """
        try:
            kind = HookType(hook_type)
        except ValueError:
            raise UnsupportedHookTypeError(str(hook_type)) from None

        self._hooks.setdefault(collection, {})[kind] = handler
        logger.debug("hook_registered", collection=collection, hook_type=kind.value)

    def pre_save(self, collection: str) -> PreSaveHook | None:
        return self._hooks.get(collection, {}).get(HookType.BEFORE_SAVE)

    def clear(self) -> None:
        self._hooks.clear()
