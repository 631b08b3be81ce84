"""Sport definition sync - detect and repair drift from the sport template."""

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional

from src.sport_manager.catalog_source import SyncFetchError
from src.sport_manager.catalog_state import Sport, VariableValue
from src.sport_manager.config import TEMPLATE_FETCH_TIMEOUT_SECONDS, TEMPLATE_FETCH_WORKERS
from src.sport_manager.notifications import Notifier, Severity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncDiff:
    """Difference between a sport's local variables and its template."""

    added: FrozenSet[str] = field(default_factory=frozenset)
    removed: FrozenSet[str] = field(default_factory=frozenset)
    changed: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)


def compute_diff(
    local: Dict[str, VariableValue], template: Dict[str, VariableValue]
) -> SyncDiff:
    """Compare *local* against *template*.

    ``added`` holds keys only the template has, ``removed`` keys only the
    local set has, ``changed`` shared keys whose values differ.
    """
    local_keys = set(local)
    template_keys = set(template)
    return SyncDiff(
        added=frozenset(template_keys - local_keys),
        removed=frozenset(local_keys - template_keys),
        changed=frozenset(
            key for key in local_keys & template_keys if local[key] != template[key]
        ),
    )


class SportSync:
    """Compares sports against their templates and applies the template.

    The template is authoritative for which variables exist and for their
    values. Templates are never cached; every call fetches again through a
    worker pool owned by this instance, so a hung fetch only ties up one
    worker until it returns.
    """

    def __init__(
        self,
        source,
        timeout: float = TEMPLATE_FETCH_TIMEOUT_SECONDS,
        notifier: Optional[Notifier] = None,
    ):
        self.source = source
        self.timeout = timeout
        self.notifier = notifier
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=TEMPLATE_FETCH_WORKERS, thread_name_prefix="template-fetch"
        )

    def diff(self, sport: Sport) -> SyncDiff:
        """Fetch the template and diff it against *sport*.

        Raises:
            SyncFetchError: If the template cannot be fetched in time or is
                not a variable mapping.
        """
        template = self._fetch_template(sport.name)
        return compute_diff(sport.variables, template)

    def check_out_of_sync(self, sport: Sport) -> bool:
        """Whether *sport* has drifted from its template.

        A failed or timed-out fetch counts as out of sync so drift is never
        hidden.
        """
        try:
            diff = self.diff(sport)
        except SyncFetchError as e:
            logger.warning("Sync status unknown for %s, assuming out of sync: %s", sport.name, e)
            self._notify(f"Could not check sport {sport.name} against its template.", Severity.WARNING)
            return True

        if not diff.is_empty:
            logger.info(
                "Sport %s out of sync: +%s -%s ~%s",
                sport.name,
                sorted(diff.added),
                sorted(diff.removed),
                sorted(diff.changed),
            )
        return not diff.is_empty

    def sync(self, sport: Sport) -> Sport:
        """Return a copy of *sport* whose variables match the template.

        ``name`` and ``disabled`` are carried over unchanged.

        Raises:
            SyncFetchError: If the template cannot be fetched; *sport* is
                left as it was.
        """
        template = self._fetch_template(sport.name)
        diff = compute_diff(sport.variables, template)

        if diff.is_empty:
            logger.debug("Sport %s already in sync", sport.name)
            return sport.with_variables(sport.variables)

        merged = {
            key: template[key] for key in sport.variables if key not in diff.removed
        }
        for key in sorted(diff.added):
            merged[key] = template[key]

        logger.info(
            "Synced sport %s: %d added, %d removed, %d changed",
            sport.name,
            len(diff.added),
            len(diff.removed),
            len(diff.changed),
        )
        return sport.with_variables(merged)

    def close(self):
        """Stop the fetch workers without waiting for a hung fetch."""
        self._executor.shutdown(wait=False)

    def _fetch_template(self, sport_name: str) -> Dict[str, VariableValue]:
        future = self._executor.submit(self.source.get_template_variables, sport_name)
        try:
            variables = future.result(timeout=self.timeout)
        except concurrent.futures.TimeoutError as e:
            future.cancel()
            raise SyncFetchError(
                f"Template fetch for {sport_name!r} timed out after {self.timeout}s"
            ) from e
        except SyncFetchError:
            raise
        except Exception as e:
            raise SyncFetchError(f"Template fetch for {sport_name!r} failed: {e}") from e

        if not isinstance(variables, Mapping):
            raise SyncFetchError(
                f"Template for {sport_name!r} is not a variable mapping: {variables!r}"
            )
        return dict(variables)

    def _notify(self, message: str, severity: Severity):
        if self.notifier is not None:
            self.notifier.notify(message, severity)
