"""Sport manager controller - orchestrates admin edits, switches and syncs."""

import logging
import threading
from typing import Dict, List, Optional

from src.catalog_pipeline.cleaning import to_sport_key
from src.sport_manager.catalog_source import CatalogMutationError, SyncFetchError
from src.sport_manager.catalog_state import CatalogContext, Sport, VariableValue
from src.sport_manager.notifications import Notifier, Severity
from src.sport_manager.sport_sync import SportSync, SyncDiff
from src.sport_manager.variable_drafts import PendingEdits

logger = logging.getLogger(__name__)


class SyncInProgressError(Exception):
    """Raised when a sport is synced while another sync for it is running."""


class SportManagerController:
    """Main controller for catalog administration.

    Coordinates the CatalogContext (local state), the catalog writer
    (persistence) and SportSync (template reconciliation). Local state is
    only touched after the writer succeeds, so a failed write leaves the
    catalog exactly as it was.
    """

    def __init__(
        self,
        context: CatalogContext,
        writer,
        sync: SportSync,
        notifier: Notifier,
    ):
        self.context = context
        self.writer = writer
        self.sync = sync
        self.notifier = notifier
        self.pending = PendingEdits()
        # sport name -> "sync" or "save" while a write for it is in flight
        self._busy: Dict[str, str] = {}
        self._busy_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Create / switch / delete
    # ------------------------------------------------------------------

    def create_sport(
        self,
        name: str,
        variables: Optional[Dict[str, VariableValue]] = None,
        disabled: bool = False,
    ) -> Sport:
        """Create a sport from the blank template plus *variables*.

        Raises:
            CatalogMutationError: If the name is empty or taken, or the
                writer fails.
        """
        key = to_sport_key(name)
        if not key:
            raise CatalogMutationError(f"Invalid sport name {name!r}")
        if self.context.get_sport(key) is not None:
            raise CatalogMutationError(f"Sport {key!r} already exists")

        template = self.context.source.get_sport_template()
        merged = dict(template.variables)
        merged.update(variables or {})
        sport = Sport(name=key, variables=merged, disabled=disabled)

        try:
            created = self.writer.create_sport(sport, disabled)
        except CatalogMutationError:
            self.notifier.notify("Failed to create sport", Severity.ERROR)
            raise

        self.context.add_sport(created)
        self.notifier.notify(f"Sport '{created.name}' created successfully!", Severity.SUCCESS)
        return created

    def switch_sport(self, name: str, disabled: bool) -> Sport:
        """Enable or disable a sport. Never touches its variables."""
        self._ensure_not_syncing(name)
        sport = self._require_sport(name)
        try:
            self.writer.set_sport_disabled(name, disabled)
        except CatalogMutationError:
            self.notifier.notify(f"Failed to update sport {name}.", Severity.ERROR)
            raise

        updated = sport.with_disabled(disabled)
        self.context.replace_sport(updated)
        self.notifier.notify(
            f"Sport {name} {'disabled' if disabled else 'enabled'}.", Severity.SUCCESS
        )
        return updated

    def delete_sport(self, name: str):
        self._ensure_not_syncing(name)
        self._require_sport(name)
        try:
            self.writer.delete_sport(name)
        except CatalogMutationError:
            self.notifier.notify(f"Failed to delete sport {name}.", Severity.ERROR)
            raise

        self.context.remove_sport(name)
        self.pending.discard(name)
        self.notifier.notify(f"Sport {name} deleted.", Severity.SUCCESS)

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    def is_out_of_sync(self, name: str) -> bool:
        return self.sync.check_out_of_sync(self._require_sport(name))

    def sync_diff(self, name: str) -> SyncDiff:
        return self.sync.diff(self._require_sport(name))

    def sync_sport(self, name: str) -> Sport:
        """Pull the template into a sport and persist it.

        Raises:
            SyncInProgressError: If this sport is already being synced or
                its drafts are being saved.
            SyncFetchError: If the template cannot be fetched.
            CatalogMutationError: If the write fails.
        """
        if not self._claim(name, "sync"):
            raise SyncInProgressError(f"Sport {name} is already being synced or saved")

        try:
            sport = self._require_sport(name)
            try:
                synced = self.sync.sync(sport)
                self.writer.update_sport_variables(name, synced.variables)
            except (SyncFetchError, CatalogMutationError) as e:
                logger.warning("Sync of %s failed: %s", name, e)
                self.notifier.notify(f"Failed to sync sport {name}.", Severity.ERROR)
                raise

            self.context.replace_sport(synced)
            self.pending.discard(name)
            self.notifier.notify(
                f"Sport {name} synced, check new variables.", Severity.SUCCESS
            )
            return synced
        finally:
            self._release(name)

    def is_syncing(self, name: str) -> bool:
        with self._busy_guard:
            return self._busy.get(name) == "sync"

    # ------------------------------------------------------------------
    # Pending variable edits
    # ------------------------------------------------------------------

    def edit_variable(self, name: str, key: str, value: VariableValue):
        """Draft a variable change; nothing is written until save_pending()."""
        self._ensure_not_syncing(name)
        self._require_sport(name)
        self.pending.edit(name, key, value)

    def save_pending(self) -> List[Sport]:
        """Write every drafted sport; drafts that fail are kept.

        A sport that is being synced is not written; the sync replaces its
        variables with the template and drops the draft.

        Returns:
            The sports that were saved.
        """
        saved = []
        failed = []
        skipped = []
        for draft in list(self.pending):
            name = draft.sport_name
            if not self._claim(name, "save"):
                logger.warning("Not saving %s: sync in progress", name)
                skipped.append(name)
                continue

            try:
                sport = self.context.get_sport(name)
                if sport is None:
                    logger.warning("Dropping draft for missing sport %s", name)
                    self.pending.discard(name)
                    continue

                updated = draft.apply(sport)
                try:
                    self.writer.update_sport_variables(updated.name, updated.variables)
                except CatalogMutationError as e:
                    logger.warning("Saving %s failed: %s", updated.name, e)
                    failed.append(updated.name)
                    continue

                self.context.replace_sport(updated)
                self.pending.discard(updated.name)
                saved.append(updated)
            finally:
                self._release(name)

        if skipped:
            self.notifier.notify(
                f"Not saved while syncing: {', '.join(skipped)}", Severity.WARNING
            )
        if failed:
            self.notifier.notify(
                f"Failed to save sports: {', '.join(failed)}", Severity.ERROR
            )
        if saved:
            self.notifier.notify(f"Saved {len(saved)} sports.", Severity.SUCCESS)
        return saved

    def discard_pending(self, name: Optional[str] = None):
        self.pending.discard(name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _claim(self, name: str, operation: str) -> bool:
        with self._busy_guard:
            if name in self._busy:
                return False
            self._busy[name] = operation
            return True

    def _release(self, name: str):
        with self._busy_guard:
            self._busy.pop(name, None)

    def _ensure_not_syncing(self, name: str):
        if self.is_syncing(name):
            raise SyncInProgressError(f"Sport {name} is being synced")

    def _require_sport(self, name: str) -> Sport:
        sport = self.context.get_sport(name)
        if sport is None:
            raise KeyError(f"Unknown sport: {name}")
        return sport
