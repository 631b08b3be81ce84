"""Measure value store - the user's current answer for each measure."""

import logging
import math
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from src.sport_manager.catalog_state import Measure, MeasureType, MeasureValue

logger = logging.getLogger(__name__)

_BOOLEAN_VALUES = {"true", "false"}


def normalize_value(measure: Measure, raw_value: str) -> Optional[str]:
    """Validate *raw_value* for *measure*.

    Returns:
        The value to store (booleans lower-cased, numbers and strings
        stripped), or None if the value is not acceptable.
    """
    if not isinstance(raw_value, str):
        return None

    if measure.options and raw_value not in measure.options:
        return None

    value = raw_value.strip()
    if measure.type == MeasureType.NUMBER:
        try:
            number = float(value)
        except ValueError:
            return None
        return value if math.isfinite(number) else None

    if measure.type == MeasureType.BOOLEAN:
        lowered = value.lower()
        return lowered if lowered in _BOOLEAN_VALUES else None

    return value or None


class MeasureValueStore:
    """Holds one raw value per measure key.

    :meth:`set_value` is the only way in, and each write replaces the whole
    entry. The store never triggers a ranking itself.
    """

    def __init__(self):
        self._values: Dict[str, MeasureValue] = {}

    def set_value(self, measure: Measure, raw_value: str) -> bool:
        """Store *raw_value* for *measure* if it is valid.

        Returns:
            True if accepted; False leaves the store unchanged.
        """
        value = normalize_value(measure, raw_value)
        if value is None:
            logger.debug("Rejected value %r for measure %s", raw_value, measure.key)
            return False

        # Re-insert so iteration order follows the latest writes.
        self._values.pop(measure.key, None)
        self._values[measure.key] = MeasureValue(measure_key=measure.key, raw_value=value)
        logger.info("Measure %s = %s", measure.key, value)
        return True

    def get_values(self) -> Mapping[str, str]:
        """Read-only snapshot of measure key to raw value."""
        return MappingProxyType(
            {key: entry.raw_value for key, entry in self._values.items()}
        )

    def get_value(self, measure_key: str) -> Optional[str]:
        entry = self._values.get(measure_key)
        return entry.raw_value if entry else None

    def changed_keys(self) -> List[str]:
        """Measure keys, least recently written first."""
        return list(self._values)

    def clear(self):
        self._values.clear()

    def __contains__(self, measure_key: str) -> bool:
        return measure_key in self._values

    def __len__(self) -> int:
        return len(self._values)
