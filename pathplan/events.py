"""
Change notification

Views subscribe to a ChangeNotifier and recompute derived values (progress,
completion) when told that a goal or step changed.
"""

import enum
from dataclasses import dataclass
from typing import Callable, List, Optional

from pathplan.core.logging import get_logger

logger = get_logger(__name__)


class ChangeKind(str, enum.Enum):
    GOAL_CREATED = "goal_created"
    GOAL_UPDATED = "goal_updated"
    GOAL_DELETED = "goal_deleted"
    STEP_ADDED = "step_added"
    STEP_UPDATED = "step_updated"
    STEP_REMOVED = "step_removed"


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    goal_id: str
    step_id: Optional[str] = None


Observer = Callable[[ChangeEvent], None]


class ChangeNotifier:
    """Synchronous observer registry, called in subscription order"""

    def __init__(self):
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a function that unregisters it"""
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def notify(self, event: ChangeEvent) -> None:
        # a failing observer must not starve the others
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("Observer %r failed on %s", observer, event.kind.value)

    def __len__(self):
        return len(self._observers)
