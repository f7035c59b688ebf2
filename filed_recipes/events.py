# filed_recipes/events.py
"""
Change notification for the recipe repository.

Responsibilities:
- Keep a registry of subscriber callbacks keyed by an opaque handle.
- Fire a RecipesChanged event to every subscriber, synchronously, after each
  successful mutation of the repository (add, delete, load, save).
- Provide log_change(...), a ready-made subscriber that writes each change to
  the standard logging system.

Callbacks receive (sender, event) where sender is the repository that changed.
Exceptions raised by a callback propagate to the caller of the mutating
operation; the mutation itself has already been applied by then.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    """Which repository operation produced a change."""
    ADDED = "added"
    DELETED = "deleted"
    LOADED = "loaded"
    SAVED = "saved"


class RecipesChanged(BaseModel):
    """Payload delivered to change subscribers."""
    kind: ChangeKind = Field(..., description="Operation that changed the collection")
    count: int = Field(..., ge=0, description="Number of recipes after the change")
    is_modified: bool = Field(..., description="Dirty flag after the change")
    recipe_name: Optional[str] = Field(None, description="Name of the added or deleted recipe, if any")
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), description="When the change happened (UTC)")


ChangeCallback = Callable[[Any, RecipesChanged], None]


class ChangeNotifier:
    """Registry of change callbacks keyed by subscriber handle."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, ChangeCallback] = {}

    def subscribe(self, callback: ChangeCallback) -> str:
        """
        Register a callback.

        Args:
            callback: Called as callback(sender, event) after each change

        Returns:
            Handle to pass to unsubscribe()
        """
        handle = str(uuid.uuid4())
        self._subscribers[handle] = callback
        return handle

    def unsubscribe(self, handle: str) -> None:
        """Remove a callback. Unknown handles are ignored."""
        self._subscribers.pop(handle, None)

    def fire(self, sender: Any, event: RecipesChanged) -> None:
        """Deliver event to every subscriber before returning."""
        # Copy so callbacks may unsubscribe while being notified.
        for callback in list(self._subscribers.values()):
            callback(sender, event)

    def __len__(self) -> int:
        return len(self._subscribers)


def log_change(sender: Any, event: RecipesChanged) -> None:
    """
    Subscriber that logs a change.

    Usage:
        repository.subscribe(log_change)
    """
    if event.recipe_name is not None:
        logger.info(
            "Recipes %s: %r (count=%d, modified=%s)",
            event.kind.value,
            event.recipe_name,
            event.count,
            event.is_modified,
        )
    else:
        logger.info(
            "Recipes %s (count=%d, modified=%s)",
            event.kind.value,
            event.count,
            event.is_modified,
        )
