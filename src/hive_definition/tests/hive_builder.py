"""
Build hive definition documents for tests
"""

import copy
from typing import Optional

from hive_definition.schema import HiveDefinition

PREMISE_SUBNET = "10.0.0.0/16"
NODES_SUBNET = "10.0.0.0/24"


def _address(index: int) -> str:
    return f"10.0.0.{10 + index}"


class HiveBuilder:
    """ Assemble a hive definition document node by node.

    Managers, workers and pets are named manager-N, worker-N and pet-N and
    receive consecutive private addresses from NODES_SUBNET. The first node
    added stores log data so that the default log options validate.
    """

    def __init__(self, name: str = "test-hive", environment: str = "machine"):
        self.doc = {
            "Name": name,
            "Hosting": {"Environment": environment},
            "Nodes": {},
        }
        if environment in ("aws", "azure", "google"):
            self.doc["Network"] = {}
        else:
            self.doc["Network"] = {
                "PremiseSubnet": PREMISE_SUBNET,
                "NodesSubnet": NODES_SUBNET,
            }
        if environment == "aws":
            self.doc["Hosting"]["Aws"] = {
                "AccessKeyId": "AKIDEXAMPLE",
                "SecretAccessKey": "secret",
                "Region": "us-west-2",
            }

    @property
    def is_cloud(self) -> bool:
        return self.doc["Hosting"]["Environment"] in ("aws", "azure", "google")

    def add_node(self, name: str, role: str, labels: Optional[dict] = None, **fields) -> dict:
        node = {"Role": role}
        if not self.is_cloud:
            node["PrivateAddress"] = _address(len(self.doc["Nodes"]))
        if not self.doc["Nodes"]:
            node["Labels"] = {"LogEsData": True}
        if labels:
            node.setdefault("Labels", {}).update(labels)
        node.update(fields)
        self.doc["Nodes"][name] = node
        return node

    def add_nodes(self, managers: int = 1, workers: int = 0, pets: int = 0) -> 'HiveBuilder':
        for role, count in (("manager", managers), ("worker", workers), ("pet", pets)):
            for i in range(count):
                self.add_node(f"{role}-{i}", role)
        return self

    def set(self, section: str, **values) -> 'HiveBuilder':
        self.doc.setdefault(section, {}).update(values)
        return self

    def document(self) -> dict:
        return copy.deepcopy(self.doc)

    def build(self) -> HiveDefinition:
        return HiveDefinition.model_validate(self.document())


def premise_hive(managers: int = 1, workers: int = 2, pets: int = 0) -> HiveDefinition:
    return HiveBuilder().add_nodes(managers, workers, pets).build()


def cloud_hive(managers: int = 1, workers: int = 2) -> HiveDefinition:
    return HiveBuilder(environment="aws").add_nodes(managers, workers).build()
