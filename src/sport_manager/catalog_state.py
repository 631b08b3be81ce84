"""Catalog data models - measures, sports and the catalog context."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

VariableValue = Union[float, int, str, bool]


class MeasureType(str, Enum):
    """Value type of a measure."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Measure:
    """A user-answerable attribute such as height or dominant hand."""

    key: str
    type: MeasureType
    options: Tuple[str, ...] = ()

    @classmethod
    def create(cls, key: str, type: str, options: Optional[List[str]] = None):
        return cls(key=key, type=MeasureType(type), options=tuple(options or ()))


@dataclass(frozen=True)
class MeasureValue:
    """The user's current answer for one measure."""

    measure_key: str
    raw_value: str


@dataclass(frozen=True)
class Sport:
    """A ranking candidate.

    Sports are value objects: edits produce a new Sport so a ranking or a
    sync in progress never sees a half-updated entry.
    """

    name: str
    variables: Mapping[str, VariableValue] = field(default_factory=dict)
    disabled: bool = False

    def __post_init__(self):
        # Read-only view over a private copy; callers cannot edit in place.
        object.__setattr__(self, "variables", MappingProxyType(dict(self.variables)))

    def with_variables(self, variables: Mapping[str, VariableValue]) -> "Sport":
        return replace(self, variables=dict(variables))

    def with_disabled(self, disabled: bool) -> "Sport":
        return replace(self, disabled=disabled)


class CatalogContext:
    """Sports and measures loaded from a catalog source.

    Built explicitly from a source and reloaded through :meth:`refresh`;
    there is no module-level catalog.
    """

    def __init__(self, source):
        self.source = source
        self.sports: List[Sport] = []
        self.measures: List[Measure] = []
        self.loaded = False

    def refresh(self) -> "CatalogContext":
        """Reload sports and measures from the source."""
        self.sports = list(self.source.list_sports())
        self.measures = list(self.source.list_measures())
        self.loaded = True
        logger.info(
            "Catalog refreshed: %d sports, %d measures",
            len(self.sports),
            len(self.measures),
        )
        return self

    def get_sport(self, name: str) -> Optional[Sport]:
        """Get a sport by name."""
        for sport in self.sports:
            if sport.name == name:
                return sport
        return None

    def get_measure(self, key: str) -> Optional[Measure]:
        """Get a measure by key."""
        for measure in self.measures:
            if measure.key == key:
                return measure
        return None

    def add_sport(self, sport: Sport):
        if self.get_sport(sport.name) is not None:
            raise ValueError(f"Sport {sport.name!r} already exists")
        self.sports.append(sport)

    def replace_sport(self, sport: Sport):
        """Swap the entry with the same name, keeping catalog order."""
        for i, existing in enumerate(self.sports):
            if existing.name == sport.name:
                self.sports[i] = sport
                return
        raise KeyError(sport.name)

    def remove_sport(self, name: str):
        before = len(self.sports)
        self.sports = [s for s in self.sports if s.name != name]
        if len(self.sports) == before:
            raise KeyError(name)
