import os
from typing import Mapping, Optional


NODE_NAME_POLICIES = {"cert", "facter"}
NODE_TERMINI = {"plain", "memory", "json", "rest"}
FACTS_TERMINI = {"memory", "json", "rest"}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_ENV_PREFIX = "NODECATALOG_"


class NodeSettings:
    """
    Configuration handed to every Node and backend.

    Replaces process-wide settings: nothing in the package reads
    global state, everything receives a NodeSettings instance.
    """

    def __init__(
        self,
        strict_hostname_checking: bool = False,
        trusted_server_facts: bool = False,
        node_name: str = "cert",         # "cert" or "facter"
        environment: str = "production",
        node_terminus: str = "plain",    # "plain", "memory", "json", "rest"
        facts_terminus: str = "memory",  # "memory", "json", "rest"
        data_dir: Optional[str] = None,
        server_url: Optional[str] = None,
        timeout_seconds: int = 10,
    ):
        self.strict_hostname_checking = strict_hostname_checking
        self.trusted_server_facts = trusted_server_facts
        self.node_name = node_name
        self.environment = environment
        self.node_terminus = node_terminus
        self.facts_terminus = facts_terminus
        self.data_dir = data_dir
        self.server_url = server_url
        self.timeout_seconds = timeout_seconds

        self._validate()

    def _validate(self):
        if self.node_name not in NODE_NAME_POLICIES:
            raise ValueError(f"Unsupported node_name: {self.node_name}")

        if not self.environment or not isinstance(self.environment, str):
            raise ValueError("Default environment must be a non-empty string")

        if self.node_terminus not in NODE_TERMINI:
            raise ValueError(f"Unsupported node_terminus: {self.node_terminus}")

        if self.facts_terminus not in FACTS_TERMINI:
            raise ValueError(f"Unsupported facts_terminus: {self.facts_terminus}")

        uses = {self.node_terminus, self.facts_terminus}

        if "json" in uses and not self.data_dir:
            raise ValueError("json backends require data_dir")

        if "rest" in uses and not self.server_url:
            raise ValueError("rest backends require server_url")

        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "NodeSettings":
        """
        Build settings from NODECATALOG_* variables.

        Unset variables keep their defaults.
        """
        environ = os.environ if environ is None else environ
        kwargs = {}

        for key in ("strict_hostname_checking", "trusted_server_facts"):
            raw = environ.get(_ENV_PREFIX + key.upper())
            if raw is not None:
                kwargs[key] = raw.strip().lower() in _TRUE_VALUES

        for key in (
            "node_name",
            "environment",
            "node_terminus",
            "facts_terminus",
            "data_dir",
            "server_url",
        ):
            raw = environ.get(_ENV_PREFIX + key.upper())
            if raw:
                kwargs[key] = raw

        raw = environ.get(_ENV_PREFIX + "TIMEOUT_SECONDS")
        if raw:
            kwargs["timeout_seconds"] = int(raw)

        return cls(**kwargs)

    def __repr__(self) -> str:
        return (
            f"NodeSettings(environment={self.environment!r}, "
            f"node_terminus={self.node_terminus!r}, "
            f"facts_terminus={self.facts_terminus!r})"
        )
