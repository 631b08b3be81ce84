"""Pending variable edits, held per sport until saved or discarded."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from src.sport_manager.catalog_state import Sport, VariableValue

logger = logging.getLogger(__name__)


@dataclass
class VariableDraft:
    """Unsaved variable edits for one sport."""

    sport_name: str
    changes: Dict[str, VariableValue] = field(default_factory=dict)

    def set(self, key: str, value: VariableValue):
        self.changes[key] = value

    def is_empty(self) -> bool:
        return not self.changes

    def apply(self, sport: Sport) -> Sport:
        """Return *sport* with the drafted values layered over its variables."""
        if sport.name != self.sport_name:
            raise ValueError(
                f"Draft for {self.sport_name!r} cannot be applied to {sport.name!r}"
            )
        merged = dict(sport.variables)
        merged.update(self.changes)
        return sport.with_variables(merged)

    def discard(self):
        self.changes.clear()


class PendingEdits:
    """Drafts keyed by sport name."""

    def __init__(self):
        self._drafts: Dict[str, VariableDraft] = {}

    def edit(self, sport_name: str, key: str, value: VariableValue) -> VariableDraft:
        draft = self._drafts.setdefault(sport_name, VariableDraft(sport_name))
        draft.set(key, value)
        logger.debug("Drafted %s.%s = %r", sport_name, key, value)
        return draft

    def get(self, sport_name: str) -> Optional[VariableDraft]:
        return self._drafts.get(sport_name)

    def sport_names(self) -> List[str]:
        return [name for name, draft in self._drafts.items() if not draft.is_empty()]

    def discard(self, sport_name: Optional[str] = None):
        """Drop the draft for *sport_name*, or every draft when omitted."""
        if sport_name is None:
            self._drafts.clear()
        else:
            self._drafts.pop(sport_name, None)

    def __iter__(self) -> Iterator[VariableDraft]:
        return iter([d for d in self._drafts.values() if not d.is_empty()])

    def __len__(self) -> int:
        return len(self.sport_names())
