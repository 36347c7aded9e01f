import json
import logging

import pytest

from hive_definition.document import load_definition
from hive_definition.hasher import compute_hash
from hive_definition.tests.hive_builder import HiveBuilder
from hive_definition.tool import _main


@pytest.fixture
def hive_file(tmp_path):
    builder = HiveBuilder().add_nodes(managers=1, workers=2, pets=1)
    builder.doc["Nodes"]["worker-1"]["Labels"] = {"Custom": {"zone": "us-west"}}
    builder.doc["Nodes"]["worker-1"]["HostGroups"] = ["edge"]
    path = tmp_path / "hive.json"
    path.write_text(json.dumps(builder.document()))
    return path


def test_validate(hive_file, capsys):
    assert _main(["validate", "-c", str(hive_file)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("hive [test-hive] is valid: 4 nodes, hash ")


def test_validate_output(hive_file, tmp_path):
    output = tmp_path / "normalized.yaml"
    assert _main(["validate", "-c", str(hive_file), "-o", str(output)]) == 0

    hive = load_definition(output)
    assert hive.hash == compute_hash(hive)
    assert hive.network.gateway == "10.0.0.1"


def test_validate_failure(tmp_path, caplog):
    builder = HiveBuilder().add_nodes(managers=2)
    path = tmp_path / "hive.json"
    path.write_text(json.dumps(builder.document()))

    with caplog.at_level(logging.ERROR):
        assert _main(["validate", "-c", str(path)]) == 1
    assert "odd number of management nodes" in caplog.text


def test_hash(hive_file, capsys):
    assert _main(["hash", "-c", str(hive_file)]) == 0
    first = capsys.readouterr().out.strip()
    assert _main(["hash", "-c", str(hive_file), "-f", "json"]) == 0
    assert capsys.readouterr().out.strip() == first


def test_filter(hive_file, capsys):
    assert _main(["filter", "-c", str(hive_file), "role==worker", "zone!=us-west"]) == 0
    assert capsys.readouterr().out.split() == ["worker-0"]

    assert _main(["filter", "-c", str(hive_file)]) == 0
    assert capsys.readouterr().out.split() == ["manager-0", "worker-0", "worker-1"]


def test_filter_syntax_error(hive_file, caplog):
    with caplog.at_level(logging.ERROR):
        assert _main(["filter", "-c", str(hive_file), "role"]) == 1
    assert "Illegal constraint [role]" in caplog.text


def test_groups(hive_file, capsys):
    assert _main(["groups", "-c", str(hive_file)]) == 0
    out = capsys.readouterr().out
    assert "edge" in out
    assert "hivemq-managers" in out

    assert _main(["groups", "-c", str(hive_file), "--exclude-pets"]) == 0
    rows = [line.split() for line in capsys.readouterr().out.splitlines()]
    assert ["pets", "0"] in rows


def test_nodes(hive_file, capsys):
    assert _main(["nodes", "-c", str(hive_file)]) == 0
    out = capsys.readouterr().out
    assert "manager-0" in out
    assert "pet-0" in out


def test_subnets(hive_file, capsys):
    assert _main(["subnets", "-c", str(hive_file)]) == 0
    out = capsys.readouterr().out
    assert "NetworkOptions.NodesSubnet" in out
    assert "10.0.0.0/24" in out
    assert "CloudSubnet" not in out
    assert "VpnPoolSubnet" not in out


def test_nodes_hypervisor(tmp_path, capsys):
    builder = HiveBuilder().add_nodes(managers=1, workers=1)
    builder.doc["Hosting"] = {"Environment": "hyperv-dev", "VmNamePrefix": "lab"}
    builder.doc["Nodes"]["worker-0"]["VmMemory"] = "8GB"
    path = tmp_path / "hive.json"
    path.write_text(json.dumps(builder.document()))

    assert _main(["nodes", "-c", str(path)]) == 0
    out = capsys.readouterr().out
    assert "lab-worker-0" in out
    assert "8GB" in out
    assert "16GB cache 256MB journal 1024MB" in out
