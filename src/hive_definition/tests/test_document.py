import json

import pytest
import yaml

from hive_definition.document import dump_definition, guess_format, load_definition, parse_definition, save_definition
from hive_definition.errors import HiveDefinitionError
from hive_definition.schema import HostingEnvironment, NodeRole
from hive_definition.validator import validate

HIVE_YAML = """
Name: doc-hive
Hosting:
  Environment: Machine
Network:
  PremiseSubnet: 10.0.0.0/16
  NodesSubnet: 10.0.0.0/24
Nodes:
  Manager-0:
    Role: MANAGER
    PrivateAddress: 10.0.0.10
    Labels:
      LogEsData: true
      Custom:
        zone: us-west
  worker-0:
    PrivateAddress: 10.0.0.11
"""


def test_parse_yaml():
    hive = parse_definition(HIVE_YAML)
    assert hive.hosting.environment == HostingEnvironment.MACHINE
    assert list(hive.nodes) == ["manager-0", "worker-0"]

    manager = hive.node("MANAGER-0")
    assert manager.name == "manager-0"
    assert manager.role == NodeRole.MANAGER
    assert manager.labels.log_es_data
    assert manager.labels.custom == {"zone": "us-west"}
    assert hive.node("worker-0").role == NodeRole.WORKER


def test_dump_uses_document_names():
    hive = validate(parse_definition(HIVE_YAML))
    text = dump_definition(hive)
    assert text.startswith("Name: doc-hive\n")

    doc = yaml.safe_load(text)
    assert doc["Network"]["Gateway"] == "10.0.0.1"
    assert doc["HiveFS"]["OSDReplicaCount"] == 2
    assert doc["Nodes"]["manager-0"]["Labels"]["HiveMQManager"] is True
    assert doc["Nodes"]["manager-0"]["Labels"]["Custom"] == {"zone": "us-west"}

    doc = json.loads(dump_definition(hive, "json"))
    assert doc["HiveMQ"]["RamHighWatermark"] == "0.50"


@pytest.mark.parametrize("text, reason", [
    ("Name: [", "is not valid yaml"),
    ("- a\n- b\n", "must be a yaml object, got list"),
    ("Summary: no name\n", r"^\[HiveDefinition\.Name\] Field required"),
    ("Name: x\nBogus: 1\n", r"^\[HiveDefinition\.Bogus=1\] Extra inputs are not permitted"),
    ("Name: x\nHosting:\n  Environment: vmware\n", r"^\[HiveDefinition\.Hosting\.Environment=vmware\]"),
    ("Name: x\nNodes:\n  a:\n    Name: b\n", r"node \[a\] has a conflicting name \[b\]"),
    ("Name: x\nNodes:\n  a: {}\n  A: {}\n", r"node name \[a\] is defined more than once"),
])
def test_parse_errors(text, reason):
    with pytest.raises(HiveDefinitionError, match=reason):
        parse_definition(text)


def test_parse_json_errors():
    with pytest.raises(HiveDefinitionError, match="is not valid json"):
        parse_definition("{", "json")


def test_guess_format():
    assert guess_format("hive.json") == "json"
    assert guess_format("hive.JSON") == "json"
    assert guess_format("hive.yaml") == "yaml"
    assert guess_format("hive") == "yaml"


def test_load_and_save(tmp_path):
    source = tmp_path / "hive.yaml"
    source.write_text(HIVE_YAML)
    hive = validate(load_definition(source))

    target = tmp_path / "hive.json"
    save_definition(hive, target)
    assert json.loads(target.read_text())["Name"] == "doc-hive"

    loaded = load_definition(str(target))
    assert loaded.model_dump() == hive.model_dump()
