"""
Tests for the node lookup termini and their factory.
"""

import json
from unittest.mock import Mock, patch

import pytest

from nodecatalog.config import NodeSettings
from nodecatalog.context import NodeContext
from nodecatalog.errors import BackendError
from nodecatalog.models.node import Node
from nodecatalog.termini.factory import create_terminus
from nodecatalog.termini.json_terminus import JsonTerminus
from nodecatalog.termini.memory import MemoryTerminus
from nodecatalog.termini.plain import PlainTerminus
from nodecatalog.termini.rest import RestTerminus


def test_plain_terminus_builds_bare_nodes(context) -> None:
    node = PlainTerminus(context).find("web01")

    assert node.name == "web01"
    assert node.classes == []
    assert node.context is context


def test_plain_terminus_applies_requested_environment(context, testing_env) -> None:
    node = PlainTerminus(context).find("web01", "testing")

    assert node.environment_name == "testing"
    assert node.environment is testing_env


def test_memory_terminus_round_trip(context) -> None:
    terminus = MemoryTerminus(context)
    terminus.save(Node("web01", context, classes=["base"], parameters={"role": "web"}))

    found = terminus.find("web01")

    assert found.classes == ["base"]
    assert found.parameters == {"role": "web"}
    assert terminus.find("web02") is None
    assert terminus.list_names() == ["web01"]


def test_memory_terminus_returns_fresh_nodes(context) -> None:
    terminus = MemoryTerminus(context)
    terminus.save(Node("web01", context, parameters={"role": "web"}))

    terminus.find("web01").parameters["role"] = "db"

    assert terminus.find("web01").parameters["role"] == "web"


def test_requested_environment_does_not_override_stored_one(context) -> None:
    terminus = MemoryTerminus(context)
    stored = Node("web01", context)
    stored.environment_name = "production"
    terminus.save(stored)

    assert terminus.find("web01", "testing").environment.name == "production"


def test_json_terminus_round_trip(context, tmp_path) -> None:
    terminus = JsonTerminus(context, str(tmp_path))
    terminus.save(Node("web01", context, classes="base", environment="testing"))

    found = terminus.find("web01")

    assert found.classes == ["base"]
    assert found.environment_name == "testing"
    assert terminus.find("web02") is None


def test_json_terminus_rejects_non_object(context, tmp_path) -> None:
    (tmp_path / "nodes").mkdir()
    (tmp_path / "nodes" / "web01.json").write_text(json.dumps(["web01"]))

    with pytest.raises(BackendError):
        JsonTerminus(context, str(tmp_path)).find("web01")


def test_rest_terminus_fetches_node(context) -> None:
    response = Mock(status_code=200)
    response.json.return_value = {"name": "web01", "environment": "testing", "classes": ["base"]}

    with patch("nodecatalog.termini.rest.requests.get", return_value=response) as get:
        node = RestTerminus(context, "http://nodes.local").find("web01")

    assert node.classes == ["base"]
    assert node.environment_name == "testing"
    get.assert_called_once_with(
        "http://nodes.local/nodes/web01",
        params={},
        headers={},
        timeout=10,
    )


def test_rest_terminus_404_is_absence(context) -> None:
    with patch("nodecatalog.termini.rest.requests.get", return_value=Mock(status_code=404)):
        assert RestTerminus(context, "http://nodes.local").find("web01") is None


@pytest.mark.parametrize("kwargs, expected", [
    ({}, PlainTerminus),
    ({"node_terminus": "memory"}, MemoryTerminus),
    ({"node_terminus": "json", "data_dir": "/tmp/nodes"}, JsonTerminus),
    ({"node_terminus": "rest", "server_url": "http://nodes.local"}, RestTerminus),
])
def test_factory_selects_backend(kwargs, expected) -> None:
    terminus = create_terminus(NodeContext.default(NodeSettings(**kwargs)))

    assert isinstance(terminus, expected)


@pytest.mark.parametrize("backend", ["memory", "json"])
def test_saved_node_without_environment_takes_requested_one(context, tmp_path, backend) -> None:
    if backend == "memory":
        terminus = MemoryTerminus(context)
    else:
        terminus = JsonTerminus(context, str(tmp_path))
    terminus.save(Node("web01", context))

    assert terminus.find("web01", "testing").environment.name == "testing"
    assert terminus.find("web01").environment.name == "production"


def test_json_terminus_save_does_not_resolve_environment(context, tmp_path) -> None:
    node = Node("web01", context)
    JsonTerminus(context, str(tmp_path)).save(node)

    stored = json.loads((tmp_path / "nodes" / "web01.json").read_text())

    assert stored == {"name": "web01"}
    assert not node.has_environment_instance()


def test_resolved_environment_is_stored(context, tmp_path) -> None:
    node = Node("web01", context, environment="testing")
    JsonTerminus(context, str(tmp_path)).save(node)

    stored = json.loads((tmp_path / "nodes" / "web01.json").read_text())

    assert stored["environment"] == "testing"
