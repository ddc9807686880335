import requests
import logging
from typing import Any, Dict, Optional

from .base import FactsStore
from ..errors import BackendError
from ..models.environment import Environment
from ..models.facts import Facts

logger = logging.getLogger(__name__)


class RestFactsStore(FactsStore):
    """
    Facts fetched from a remote node service.

    Responsible ONLY for transport. 404 means the server has no facts.
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout_seconds: int = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout_seconds = timeout_seconds

    def find(self, name: str, environment: Optional[Environment] = None) -> Optional[Facts]:
        url = f"{self.base_url}/facts/{name}"
        params = {"environment": environment.name} if environment is not None else {}

        logger.info("[FACTS REST] GET %s | params=%s", url, params)

        try:
            response = requests.get(
                url,
                params=params,
                headers=self.headers,
                timeout=self.timeout_seconds,
            )
            if response.status_code == 404:
                return None

            response.raise_for_status()

        except requests.exceptions.RequestException as e:
            raise BackendError(f"REST transport failure (GET {url}): {e}") from e

        data = self._decode(response, url)
        return Facts.from_data_hash(data)

    def save(self, facts: Facts) -> None:
        url = f"{self.base_url}/facts/{facts.name}"

        payload: Dict[str, Any] = {"values": facts.values}
        if facts.expiration is not None:
            payload["expiration"] = facts.expiration

        logger.info("[FACTS REST] PUT %s", url)

        try:
            response = requests.put(
                url,
                json=payload,
                headers=self.headers,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise BackendError(f"REST transport failure (PUT {url}): {e}") from e

    @staticmethod
    def _decode(response, url: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            raise BackendError(
                f"Remote service did not return valid JSON ({url}). "
                f"Response text: {response.text}"
            )

        if not isinstance(data, dict):
            raise BackendError(f"Invalid facts payload from {url}: {data}")

        return data
