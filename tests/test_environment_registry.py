"""
Unit tests for the EnvironmentRegistry.
"""

from enum import Enum

import pytest

from nodecatalog.config import NodeSettings
from nodecatalog.environments.registry import EnvironmentRegistry
from nodecatalog.errors import EnvironmentNotFound
from nodecatalog.models.environment import Environment


class Tier(Enum):
    PRODUCTION = "production"


def test_register_and_lookup() -> None:
    registry = EnvironmentRegistry()
    env = Environment("production")
    registry.register(env)

    assert registry.get("production") is env
    assert registry.get_or_raise("production") is env
    assert registry.get(Tier.PRODUCTION) is env
    assert registry.has_environment("production")
    assert len(registry) == 1


def test_register_rejects_duplicates() -> None:
    registry = EnvironmentRegistry([Environment("production")])

    with pytest.raises(ValueError):
        registry.register(Environment("production"))


def test_register_rejects_non_environment() -> None:
    with pytest.raises(TypeError):
        EnvironmentRegistry().register("production")


def test_register_or_update() -> None:
    registry = EnvironmentRegistry()

    assert registry.register_or_update(Environment("production")) == "registered"
    assert registry.register_or_update(Environment("production")) == "unchanged"
    assert registry.register_or_update(Environment("production", manifest="site.pp")) == "updated"
    assert registry.get("production").manifest == "site.pp"


def test_missing_environment() -> None:
    registry = EnvironmentRegistry()

    assert registry.get("nowhere") is None
    with pytest.raises(EnvironmentNotFound) as exc_info:
        registry.get_or_raise("nowhere")

    assert exc_info.value.name == "nowhere"
    assert isinstance(exc_info.value, LookupError)


def test_default_environment_uses_settings() -> None:
    staging = Environment("staging")
    registry = EnvironmentRegistry([Environment("production"), staging])

    assert registry.default_environment(NodeSettings(environment="staging")) is staging


def test_list_names_is_sorted() -> None:
    registry = EnvironmentRegistry([Environment("zeta"), Environment("alpha")])

    assert registry.list_names() == ["alpha", "zeta"]


@pytest.mark.parametrize("name", ["", None, 3])
def test_invalid_names(name) -> None:
    with pytest.raises(ValueError):
        EnvironmentRegistry().get(name)


def test_environment_model() -> None:
    env = Environment("production", modulepath=["/etc/modules"])

    assert str(env) == "production"
    assert env.modulepath == ("/etc/modules",)
    with pytest.raises(ValueError):
        Environment("")
