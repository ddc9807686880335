import requests
import logging
from typing import Dict, Optional

from .base import NodeTerminus
from ..errors import BackendError
from ..models.environment import Environment
from ..models.node import Node

logger = logging.getLogger(__name__)


class RestTerminus(NodeTerminus):
    """
    Node data fetched from a remote node service.

    Responsible ONLY for transport. 404 means the node is unknown.
    """

    def __init__(
        self,
        context,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout_seconds: int = 10,
    ):
        super().__init__(context)
        self.base_url = base_url.rstrip("/")
        self.headers = headers or {}
        self.timeout_seconds = timeout_seconds

    def find(self, name: str, environment=None) -> Optional[Node]:
        url = f"{self.base_url}/nodes/{name}"
        params = {}
        if environment is not None:
            params["environment"] = (
                environment.name if isinstance(environment, Environment) else environment
            )

        logger.info("[TERMINUS REST] GET %s | params=%s", url, params)

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

        try:
            data = response.json()
        except ValueError:
            raise BackendError(
                f"Remote service did not return valid JSON ({url}). "
                f"Response text: {response.text}"
            )

        if not isinstance(data, dict):
            raise BackendError(f"Invalid node payload from {url}: {data}")

        return self._build(data, environment)
