from hive_definition.placer import CephMonPlacer, place_ceph_roles, place_hivemq_roles
from hive_definition.tests.hive_builder import HiveBuilder, premise_hive
from hive_definition.validator import validate


def _labeled(hive, label):
    return [node.name for node in hive.sorted_nodes if getattr(node.labels, label)]


def test_ceph_defaults_small_hive():
    hive = premise_hive(managers=1, workers=2)
    place_ceph_roles(hive)

    assert _labeled(hive, "ceph_mon") == ["manager-0"]
    # fewer than three workers: every swarm node stores data
    assert _labeled(hive, "ceph_osd") == ["manager-0", "worker-0", "worker-1"]
    assert _labeled(hive, "ceph_mds") == ["manager-0"]


def test_ceph_defaults_dedicated_workers():
    hive = premise_hive(managers=3, workers=3, pets=1)
    place_ceph_roles(hive)

    assert _labeled(hive, "ceph_mon") == ["manager-0", "manager-1", "manager-2"]
    assert _labeled(hive, "ceph_osd") == ["worker-0", "worker-1", "worker-2"]
    assert _labeled(hive, "ceph_mds") == ["manager-0", "manager-1", "manager-2"]


def test_ceph_operator_labels_win():
    builder = HiveBuilder().add_nodes(managers=1, workers=3)
    builder.doc["Nodes"]["worker-2"]["Labels"] = {"CephOSD": True, "CephMON": True}
    hive = validate(builder.build())

    assert _labeled(hive, "ceph_osd") == ["worker-2"]
    assert _labeled(hive, "ceph_mon") == ["worker-2"]
    # metadata servers follow the monitors
    assert _labeled(hive, "ceph_mds") == ["worker-2"]
    assert hive.hivefs.osd_replica_count == 1
    assert hive.hivefs.osd_replica_count_min == 1


def test_placement_is_idempotent():
    hive = premise_hive(managers=3, workers=2)
    place_ceph_roles(hive)
    place_hivemq_roles(hive)
    before = hive.model_dump()

    assert CephMonPlacer()(hive) == []
    place_ceph_roles(hive)
    place_hivemq_roles(hive)
    assert hive.model_dump() == before


def test_hivemq_defaults_to_managers():
    hive = premise_hive(managers=3, workers=2)
    place_hivemq_roles(hive)

    assert _labeled(hive, "hivemq") == ["manager-0", "manager-1", "manager-2"]
    assert _labeled(hive, "hivemq_manager") == ["manager-0", "manager-1", "manager-2"]


def test_hivemq_manager_defaults_to_first_member():
    builder = HiveBuilder().add_nodes(managers=1, workers=3)
    builder.doc["Nodes"]["worker-2"]["Labels"] = {"HiveMQ": True}
    builder.doc["Nodes"]["worker-1"]["Labels"] = {"HiveMQ": True}
    hive = builder.build()
    place_hivemq_roles(hive)

    assert _labeled(hive, "hivemq") == ["worker-1", "worker-2"]
    assert _labeled(hive, "hivemq_manager") == ["worker-1"]


def test_hivemq_manager_becomes_member():
    builder = HiveBuilder().add_nodes(managers=1, workers=2)
    builder.doc["Nodes"]["worker-1"]["Labels"] = {"HiveMQManager": True}
    hive = builder.build()
    place_hivemq_roles(hive)

    assert _labeled(hive, "hivemq") == ["worker-1"]
    assert _labeled(hive, "hivemq_manager") == ["worker-1"]
