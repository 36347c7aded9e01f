import pytest

from hive_definition.constraints import Constraint, filter_nodes, filter_swarm_nodes, node_label_map
from hive_definition.errors import ConstraintSyntaxError, HiveDefinitionError
from hive_definition.schema import NodeDefinition, NodeRole
from hive_definition.tests.hive_builder import premise_hive


@pytest.fixture
def nodes():
    return [
        NodeDefinition(name="a", role=NodeRole.MANAGER),
        NodeDefinition(name="b", role=NodeRole.WORKER, labels={"Custom": {"zone": "us-east"}}),
        NodeDefinition(name="c", role=NodeRole.WORKER, labels={"Custom": {"zone": "us-west"}, "StorageSSD": True}),
    ]


def _names(nodes):
    return [node.name for node in nodes]


def test_filter_narrows(nodes):
    assert _names(filter_nodes(nodes, ["role==worker"])) == ["b", "c"]
    assert _names(filter_nodes(nodes, ["role==worker", "node!=b"])) == ["c"]


def test_filter_no_constraints(nodes):
    assert _names(filter_nodes(nodes, [])) == ["a", "b", "c"]
    assert _names(filter_nodes(nodes, None)) == ["a", "b", "c"]
    assert _names(filter_nodes(nodes, ["", "  "])) == ["a", "b", "c"]


def test_filter_labels(nodes):
    assert _names(filter_nodes(nodes, ["ZONE==US-West"])) == ["c"]
    assert _names(filter_nodes(nodes, ["zone!=us-east"])) == ["a", "c"]
    assert _names(filter_nodes(nodes, ["io.neonhive.storage.ssd==true"])) == ["c"]
    assert _names(filter_nodes(nodes, ["io.neonhive.node.role==manager"])) == ["a"]
    # a missing label compares as empty
    assert _names(filter_nodes(nodes, ["rack=="])) == ["a", "b", "c"]


def test_filter_stops_when_empty(nodes):
    # the malformed constraint is never parsed once nothing is left
    assert filter_nodes(nodes, ["node==z", "malformed"]) == []


@pytest.mark.parametrize("text, reason", [
    ("role", r"One of \[==\] or \[!=\] must be present"),
    ("role==a!=b", r"Only one \[==\] or \[!=\] may be present"),
    ("==worker", "No label is specified"),
])
def test_constraint_syntax(nodes, text, reason):
    with pytest.raises(ConstraintSyntaxError, match=reason) as e:
        filter_nodes(nodes, [text])
    assert isinstance(e.value, HiveDefinitionError)
    assert e.value.constraint == text
    assert str(e.value).startswith(f"Illegal constraint [{text}].")


def test_constraint_parse():
    constraint = Constraint.parse(" zone != us-east ")
    assert constraint == Constraint(label="zone", equals=False, value="us-east")
    assert str(constraint) == "zone!=us-east"


def test_node_label_map(nodes):
    labels = node_label_map(nodes[2])
    assert labels["node"] == "c"
    assert labels["io.neonhive.node.role"] == "worker"
    assert labels["io.neonhive.storage.ssd"] == "true"
    assert labels["io.neonhive.ceph.osd"] == "false"
    assert labels["zone"] == "us-west"


def test_filter_swarm_nodes():
    hive = premise_hive(managers=1, workers=2, pets=1)
    assert _names(filter_swarm_nodes(hive, [])) == ["manager-0", "worker-0", "worker-1"]
    assert _names(filter_swarm_nodes(hive, ["role!=manager"])) == ["worker-0", "worker-1"]
