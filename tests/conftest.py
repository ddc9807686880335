"""
Shared pytest fixtures.

Every fixture builds its own context so tests never share registry,
facts store or trusted scope state.
"""

from typing import Callable, Optional

import pytest

from nodecatalog.config import NodeSettings
from nodecatalog.context import NodeContext
from nodecatalog.environments.registry import EnvironmentRegistry
from nodecatalog.facts.memory import MemoryFactsStore
from nodecatalog.models.environment import Environment
from nodecatalog.models.node import Node
from nodecatalog.trusted import TrustedScope


@pytest.fixture
def settings() -> NodeSettings:
    return NodeSettings()


@pytest.fixture
def production() -> Environment:
    return Environment("production", manifest="site.pp")


@pytest.fixture
def testing_env() -> Environment:
    return Environment("testing")


@pytest.fixture
def registry(production: Environment, testing_env: Environment) -> EnvironmentRegistry:
    return EnvironmentRegistry([production, testing_env])


@pytest.fixture
def facts_store() -> MemoryFactsStore:
    return MemoryFactsStore()


@pytest.fixture
def make_context(registry, facts_store) -> Callable[..., NodeContext]:
    """Build a context sharing the fixture registry and facts store."""

    def _make(settings: Optional[NodeSettings] = None, **overrides) -> NodeContext:
        kwargs = dict(
            settings=settings or NodeSettings(),
            environments=registry,
            facts_store=facts_store,
            trusted_scope=TrustedScope(),
        )
        kwargs.update(overrides)
        return NodeContext(**kwargs)

    return _make


@pytest.fixture
def context(make_context) -> NodeContext:
    return make_context()


@pytest.fixture
def make_node(context) -> Callable[..., Node]:

    def _make(name: str = "web01.example.com", ctx: Optional[NodeContext] = None, **options) -> Node:
        return Node(name, ctx or context, **options)

    return _make
