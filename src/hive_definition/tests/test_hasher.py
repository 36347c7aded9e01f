import base64

from hive_definition.hasher import canonical_json, compute_hash, update_hash
from hive_definition.schema import HiveDefinition
from hive_definition.tests.hive_builder import HiveBuilder
from hive_definition.validator import validate


def test_hash_format(premise_builder):
    hive = validate(premise_builder.build())
    value = compute_hash(hive)
    assert len(base64.b64decode(value)) == 16
    assert hive.hash is None

    assert update_hash(hive) == value
    assert hive.hash == value
    # the stored hash is not part of the hashed content
    assert compute_hash(hive) == value


def test_hash_ignores_node_order(premise_builder):
    doc = premise_builder.document()
    reordered = dict(doc)
    reordered["Nodes"] = dict(reversed(list(doc["Nodes"].items())))

    first = validate(HiveDefinition.model_validate(doc))
    second = validate(HiveDefinition.model_validate(reordered))
    assert list(first.nodes) != list(second.nodes)
    assert compute_hash(first) == compute_hash(second)


def test_hash_ignores_secrets(cloud_builder):
    cloud_builder.set("Docker", Registries=[{"Registry": "registry.example.com", "Username": "u", "Password": "p1"}])
    first = validate(cloud_builder.build())
    cloud_builder.doc["Hosting"]["Aws"]["SecretAccessKey"] = "rotated"
    cloud_builder.set("Docker", Registries=[{"Registry": "registry.example.com", "Username": "u", "Password": "p2"}])
    second = validate(cloud_builder.build())
    assert compute_hash(first) == compute_hash(second)

    canonical = canonical_json(first)
    assert "AKIDEXAMPLE" not in canonical
    assert first.hosting.aws.access_key_id == "AKIDEXAMPLE"


def test_hash_tracks_changes(premise_builder):
    first = compute_hash(validate(premise_builder.build()))
    premise_builder.set("Log", RetentionDays=30)
    assert compute_hash(validate(premise_builder.build())) != first


def test_hash_is_deterministic():
    hashes = {compute_hash(validate(HiveBuilder().add_nodes(3, 3).build())) for _ in range(3)}
    assert len(hashes) == 1
