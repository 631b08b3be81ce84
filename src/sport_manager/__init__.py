from src.sport_manager.catalog_persistence import JsonCatalogStore
from src.sport_manager.catalog_source import (
    CatalogMutationError,
    CatalogWriter,
    SportCatalogSource,
    SyncFetchError,
)
from src.sport_manager.catalog_state import (
    CatalogContext,
    Measure,
    MeasureType,
    MeasureValue,
    Sport,
)
from src.sport_manager.notifications import LoggingNotifier, Notifier, Severity
from src.sport_manager.sport_controller import SportManagerController, SyncInProgressError
from src.sport_manager.sport_sync import SportSync, SyncDiff, compute_diff
from src.sport_manager.template_client import HttpTemplateSource
from src.sport_manager.variable_drafts import PendingEdits, VariableDraft

__all__ = [
    "CatalogContext",
    "CatalogMutationError",
    "CatalogWriter",
    "HttpTemplateSource",
    "JsonCatalogStore",
    "LoggingNotifier",
    "Measure",
    "MeasureType",
    "MeasureValue",
    "Notifier",
    "PendingEdits",
    "Severity",
    "Sport",
    "SportCatalogSource",
    "SportManagerController",
    "SportSync",
    "SyncDiff",
    "SyncFetchError",
    "SyncInProgressError",
    "VariableDraft",
    "compute_diff",
]
