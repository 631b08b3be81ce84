"""HTTP client for the remote sport template service."""

import logging
from typing import Dict, Optional

import requests

from src.sport_manager.catalog_source import SyncFetchError
from src.sport_manager.catalog_state import Sport, VariableValue
from src.sport_manager.config import TEMPLATE_FETCH_TIMEOUT_SECONDS, TEMPLATE_SERVICE_URL

logger = logging.getLogger(__name__)


class HttpTemplateSource:
    """Fetches authoritative sport templates over HTTP.

    Only the template side of the catalog is remote; sports and measures
    come from whatever source the catalog context was built with.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = TEMPLATE_FETCH_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or TEMPLATE_SERVICE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_template_variables(self, sport_name: str) -> Dict[str, VariableValue]:
        payload = self._get_json(f"{self.base_url}/sports/{sport_name}/template")
        variables = payload.get("variables") if isinstance(payload, dict) else None
        if not isinstance(variables, dict):
            raise SyncFetchError(f"Malformed template payload for sport {sport_name!r}")
        return variables

    def get_sport_template(self) -> Sport:
        payload = self._get_json(f"{self.base_url}/sports/template")
        variables = payload.get("variables") if isinstance(payload, dict) else None
        if not isinstance(variables, dict):
            raise SyncFetchError("Malformed blank sport template payload")
        return Sport(name=payload.get("name", ""), variables=variables)

    def _get_json(self, url: str):
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.Timeout as e:
            logger.warning("Template request timed out after %ss: %s", self.timeout, url)
            raise SyncFetchError(f"Timed out fetching {url}") from e
        except (requests.RequestException, ValueError) as e:
            logger.warning("Template request failed: %s (%s)", url, e)
            raise SyncFetchError(f"Failed to fetch {url}: {e}") from e
