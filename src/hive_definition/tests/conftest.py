import pytest

from hive_definition.tests.hive_builder import HiveBuilder


@pytest.fixture
def premise_builder() -> HiveBuilder:
    return HiveBuilder().add_nodes(managers=1, workers=2)


@pytest.fixture
def cloud_builder() -> HiveBuilder:
    return HiveBuilder(environment="aws").add_nodes(managers=1, workers=2)
