"""Boundary contracts for catalog sources and write-back."""

from typing import Dict, List, Protocol, runtime_checkable

from src.sport_manager.catalog_state import Measure, Sport, VariableValue


class SyncFetchError(Exception):
    """Raised when a sport template cannot be retrieved."""


class CatalogMutationError(Exception):
    """Raised when creating, updating or deleting a sport fails."""


@runtime_checkable
class SportCatalogSource(Protocol):
    """Read side of the catalog."""

    def list_sports(self) -> List[Sport]: ...

    def list_measures(self) -> List[Measure]: ...

    def get_sport_template(self) -> Sport: ...

    def get_template_variables(self, sport_name: str) -> Dict[str, VariableValue]: ...


@runtime_checkable
class CatalogWriter(Protocol):
    """Write side of the catalog."""

    def create_sport(self, sport: Sport, disabled: bool) -> Sport: ...

    def update_sport_variables(
        self, sport_name: str, variables: Dict[str, VariableValue]
    ) -> None: ...

    def set_sport_disabled(self, sport_name: str, disabled: bool) -> None: ...

    def delete_sport(self, sport_name: str) -> None: ...


__all__ = [
    "CatalogMutationError",
    "CatalogWriter",
    "SportCatalogSource",
    "SyncFetchError",
]
