import re
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field, model_validator

from .base import OptionsModel
from .labels import NodeLabels

NAME_RE = re.compile(r'^[a-z0-9.\-_]+$', re.IGNORECASE)

DEFAULT_DATACENTER = "DATACENTER"
DEFAULT_PROVISIONER = "unknown"
DEFAULT_DRIVE_PREFIX = "sd"
DEFAULT_TIME_SOURCES = ("pool.ntp.org",)

# name of the virtual node addressing whichever manager currently leads the swarm
VIRTUAL_SWARM_MANAGER_NAME = "swarm-manager"

MIN_MANAGERS = 1
MAX_MANAGERS = 5


def is_valid_name(name: Optional[str]) -> bool:
    """ Check for a hive, datacenter or node name: letters, digits, dots, dashes
    and underscores only.
    """
    return bool(name) and NAME_RE.match(name) is not None


class _EnumBase(Enum):
    """ String enum parsed case-insensitively from documents """

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value == value.strip().lower():
                    return member
        return None

    @classmethod
    def values(cls) -> List[str]:
        return [e.value for e in cls]


class NodeRole(_EnumBase):
    MANAGER = "manager"
    WORKER = "worker"
    PET = "pet"

    @property
    def is_swarm(self) -> bool:
        return self in (NodeRole.MANAGER, NodeRole.WORKER)


class HostingEnvironment(_EnumBase):
    AWS = "aws"
    AZURE = "azure"
    GOOGLE = "google"
    HYPERV = "hyperv"
    HYPERV_DEV = "hyperv-dev"
    MACHINE = "machine"
    XENSERVER = "xenserver"

    @property
    def is_cloud(self) -> bool:
        return self in (HostingEnvironment.AWS, HostingEnvironment.AZURE, HostingEnvironment.GOOGLE)

    @property
    def is_remote_hypervisor(self) -> bool:
        return self in (HostingEnvironment.HYPERV, HostingEnvironment.XENSERVER)

    @property
    def is_hypervisor(self) -> bool:
        return self.is_remote_hypervisor or self == HostingEnvironment.HYPERV_DEV


class EnvironmentType(_EnumBase):
    OTHER = "other"
    DEVELOPMENT = "development"
    TEST = "test"
    STAGING = "staging"
    PRODUCTION = "production"


class CephRelease(_EnumBase):
    LUMINOUS = "luminous"
    MIMIC = "mimic"


class PartitionMode(_EnumBase):
    AUTOHEAL = "autoheal"
    PAUSE_MINORITY = "pause_minority"
    PAUSE_IF_ALL_DOWN = "pause_if_all_down"


class UpgradeMode(_EnumBase):
    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


## hosting


class AwsOptions(OptionsModel):
    """ Amazon Web Services hosting """
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    region: Optional[str] = None


class AzureOptions(OptionsModel):
    """ Microsoft Azure hosting """
    subscription_id: Optional[str] = None
    tenant_id: Optional[str] = None
    application_id: Optional[str] = None
    password: Optional[str] = None
    resource_group: Optional[str] = Field(
        default=None,
        description="Defaults to the hive name",
    )
    region: Optional[str] = None
    domain_label: Optional[str] = None
    static_hive_address: bool = False
    public_node_addresses: bool = False
    first_reserved_port: int = 37100
    fault_domains: int = 2
    update_domains: int = 5


class GoogleOptions(OptionsModel):
    """ Google Cloud Platform hosting """
    project_id: Optional[str] = None
    region: Optional[str] = None


class HyperVOptions(OptionsModel):
    """ Hyper-V hosts reached over the network """


class LocalHyperVOptions(OptionsModel):
    """ Hyper-V running on the workstation deploying the hive """


class MachineOptions(OptionsModel):
    """ Bare metal or pre-provisioned virtual machines """


class XenServerOptions(OptionsModel):
    """ XenServer hosts reached over the network """
    snapshot: bool = False


class VmHost(OptionsModel):
    """ A hypervisor host machine """
    name: str
    address: str
    username: Optional[str] = None
    password: Optional[str] = None


class HostingOptions(OptionsModel):
    environment: HostingEnvironment = HostingEnvironment.MACHINE

    aws: Optional[AwsOptions] = None
    azure: Optional[AzureOptions] = None
    google: Optional[GoogleOptions] = None
    hyperv: Optional[HyperVOptions] = Field(default=None, alias="HyperV")
    hyperv_dev: Optional[LocalHyperVOptions] = Field(default=None, alias="HyperVDev")
    machine: Optional[MachineOptions] = None
    xenserver: Optional[XenServerOptions] = Field(default=None, alias="XenServer")

    vm_hosts: List[VmHost] = Field(default_factory=list)
    vm_host_username: Optional[str] = None
    vm_host_password: Optional[str] = None
    vm_processors: int = 4
    vm_memory: Optional[str] = "4GB"
    vm_minimum_memory: Optional[str] = Field(
        default=None,
        description="Defaults to VmMemory",
    )
    vm_disk: Optional[str] = "64GB"
    vm_drive_folder: Optional[str] = None
    vm_name_prefix: Optional[str] = None

    @property
    def is_cloud(self) -> bool:
        return self.environment.is_cloud

    @property
    def is_on_premise(self) -> bool:
        return not self.environment.is_cloud

    @property
    def is_remote_hypervisor(self) -> bool:
        return self.environment.is_remote_hypervisor

    def provider_field(self) -> str:
        """ Name of the sub-option attribute used by the selected environment """
        return {
            HostingEnvironment.AWS: "aws",
            HostingEnvironment.AZURE: "azure",
            HostingEnvironment.GOOGLE: "google",
            HostingEnvironment.HYPERV: "hyperv",
            HostingEnvironment.HYPERV_DEV: "hyperv_dev",
            HostingEnvironment.MACHINE: "machine",
            HostingEnvironment.XENSERVER: "xenserver",
        }[self.environment]

    def get_vm_name_prefix(self, hive_name: str) -> str:
        if self.vm_name_prefix is None:
            return f"{hive_name}-".lower()
        if not self.vm_name_prefix.strip():
            return ""
        return f"{self.vm_name_prefix}-".lower()


## network


class VpnOptions(OptionsModel):
    enabled: bool = Field(
        default=False,
        description="Forced on for cloud hosting environments",
    )
    cert_country_code: str = "US"
    cert_organization: str = "Unknown"


class NetworkOptions(OptionsModel):
    public_subnet: Optional[str] = "10.249.0.0/16"
    public_attachable: bool = True
    private_subnet: Optional[str] = "10.248.0.0/16"
    private_attachable: bool = True
    nameservers: List[str] = Field(default_factory=lambda: ["8.8.8.8", "8.8.4.4"])

    cloud_subnet: Optional[str] = Field(
        default="10.168.0.0/21",
        description="Cloud only: the /21 block partitioned into the node, VPN and VPN pool subnets",
    )
    cloud_vnet_subnet: Optional[str] = Field(
        default=None, alias="CloudVNetSubnet",
        description="Cloud only, derived: first half of CloudSubnet",
    )
    cloud_vpn_subnet: Optional[str] = Field(
        default=None,
        description="Cloud only, derived: second quarter of CloudSubnet",
    )

    premise_subnet: Optional[str] = Field(
        default=None,
        description="On-premise only: the whole facility network",
    )
    nodes_subnet: Optional[str] = Field(
        default=None,
        description="Derived for cloud, required on-premise",
    )
    gateway: Optional[str] = None
    broadcast: Optional[str] = None
    manager_public_address: Optional[str] = None
    vpn_pool_subnet: Optional[str] = "10.169.0.0/22"

    mtu: int = Field(default=1400, alias="MTU")
    ingress_mtu: int = Field(default=1400, alias="IngressMTU")
    ingress_subnet: Optional[str] = "10.255.0.0/16"
    ingress_gateway: Optional[str] = "10.255.0.1"
    static_ip: bool = Field(default=True, alias="StaticIP")


## node defaults and services


class HiveNodeOptions(OptionsModel):
    upgrade: UpgradeMode = UpgradeMode.FULL
    password_length: int = 20
    swap_files: bool = False


class RegistryCredential(OptionsModel):
    registry: str
    username: Optional[str] = None
    password: Optional[str] = None


class DockerOptions(OptionsModel):
    version: Optional[str] = "latest"
    registries: List[RegistryCredential] = Field(default_factory=list)
    registry_cache: bool = True
    log_driver: Optional[str] = "fluentd"
    restart_delay_seconds: int = 10
    userns_remap: bool = True
    experimental: bool = False
    avoid_ingress_network: Optional[bool] = None


class HiveFSOptions(OptionsModel):
    enabled: bool = True
    release: CephRelease = CephRelease.MIMIC
    osd_drive_size: Optional[str] = Field(default="16GB", alias="OSDDriveSize")
    osd_cache_size: Optional[str] = Field(default="256MB", alias="OSDCacheSize")
    osd_journal_size: Optional[str] = Field(default="1GB", alias="OSDJournalSize")
    osd_object_size_max: Optional[str] = Field(default="5GB", alias="OSDObjectSizeMax")
    osd_replica_count: int = Field(
        default=0, alias="OSDReplicaCount",
        description="0 selects min(3, OSD node count)",
    )
    osd_replica_count_min: int = Field(
        default=0, alias="OSDReplicaCountMin",
        description="0 selects OSDReplicaCount - 1 (or 1 for a single replica)",
    )
    osd_placement_groups: int = Field(default=100, alias="OSDPlacementGroups")
    mds_cache_size: Optional[str] = Field(default="64MB", alias="MDSCacheSize")


class HiveMQOptions(OptionsModel):
    precompile: bool = False
    ram_limit: Optional[str] = Field(
        default=None,
        description="Defaults to 350MB, or 600MB when Precompile is set",
    )
    ram_high_watermark: Optional[str] = "0.50"
    disk_free_limit: Optional[str] = Field(
        default=None,
        description="Defaults to twice RamLimit plus 1GB",
    )
    partition_mode: PartitionMode = PartitionMode.AUTOHEAL
    admin_user: str = "sysadmin"
    admin_password: str = "password"
    app_user: str = "app"
    app_password: str = "password"
    neon_user: str = "neon"
    neon_password: str = "password"
    erlang_cookie: Optional[str] = Field(
        default=None,
        description="Pass-through secret, generated by the provisioner when blank",
    )


class ProxyOptions(OptionsModel):
    enabled: bool = True
    first_public_port: int = 5100
    last_public_port: int = 5299
    first_private_port: int = 5300
    last_private_port: int = 5499


class LogOptions(OptionsModel):
    enabled: bool = True
    es_shards: int = 1
    es_replication: int = 1
    es_memory: Optional[str] = "1.5GB"
    retention_days: int = 14


class DashboardOptions(OptionsModel):
    kibana: bool = True
    ceph: bool = True
    consul: bool = True
    vault: bool = True


## nodes and the root definition


class NodeDefinition(OptionsModel):
    name: Optional[str] = None
    role: NodeRole = NodeRole.WORKER
    private_address: Optional[str] = None
    public_address: Optional[str] = None
    vpn_frontend_port: int = 0
    vm_host: Optional[str] = None
    vm_processors: int = Field(default=0, description="0 selects Hosting.VmProcessors")
    vm_memory: Optional[str] = None
    vm_minimum_memory: Optional[str] = None
    vm_disk: Optional[str] = None
    labels: NodeLabels = Field(default_factory=NodeLabels)
    host_groups: List[str] = Field(default_factory=list)

    @property
    def is_manager(self) -> bool:
        return self.role == NodeRole.MANAGER

    @property
    def is_worker(self) -> bool:
        return self.role == NodeRole.WORKER

    @property
    def is_pet(self) -> bool:
        return self.role == NodeRole.PET

    @property
    def in_swarm(self) -> bool:
        return self.role.is_swarm

    def get_vm_processors(self, hosting: HostingOptions) -> int:
        return self.vm_processors if self.vm_processors > 0 else hosting.vm_processors

    def get_vm_memory(self, hosting: HostingOptions) -> Optional[str]:
        return self.vm_memory or hosting.vm_memory

    def get_vm_minimum_memory(self, hosting: HostingOptions) -> Optional[str]:
        return self.vm_minimum_memory or hosting.vm_minimum_memory or self.get_vm_memory(hosting)

    def get_vm_disk(self, hosting: HostingOptions) -> Optional[str]:
        return self.vm_disk or hosting.vm_disk


class HiveDefinition(OptionsModel):
    name: str
    summary: Optional[str] = None
    provisioner: str = DEFAULT_PROVISIONER
    datacenter: str = DEFAULT_DATACENTER
    environment: EnvironmentType = EnvironmentType.OTHER
    drive_prefix: str = DEFAULT_DRIVE_PREFIX
    time_sources: List[str] = Field(default_factory=lambda: list(DEFAULT_TIME_SOURCES))
    package_proxy: Optional[str] = Field(
        default=None,
        description="Space or comma separated apt proxy URIs, defaults to the managers",
    )
    debug_mode: bool = False
    bare_docker: bool = False

    hosting: HostingOptions = Field(default_factory=HostingOptions)
    vpn: VpnOptions = Field(default_factory=VpnOptions)
    network: NetworkOptions = Field(default_factory=NetworkOptions)
    hive_node: HiveNodeOptions = Field(default_factory=HiveNodeOptions)
    docker: DockerOptions = Field(default_factory=DockerOptions)
    hivefs: HiveFSOptions = Field(default_factory=HiveFSOptions, alias="HiveFS")
    proxy: ProxyOptions = Field(default_factory=ProxyOptions)
    hivemq: HiveMQOptions = Field(default_factory=HiveMQOptions, alias="HiveMQ")
    log: LogOptions = Field(default_factory=LogOptions)
    dashboard: DashboardOptions = Field(default_factory=DashboardOptions)

    nodes: Dict[str, NodeDefinition] = Field(default_factory=dict)
    hash: Optional[str] = None

    @model_validator(mode="after")
    def key_nodes_by_name(self) -> 'HiveDefinition':
        """ Key the node inventory by lowercase node name """
        named = {}
        for key, node in self.nodes.items():
            name = (node.name or key).lower()
            if name != key.lower():
                raise ValueError(f"node [{key}] has a conflicting name [{node.name}]")
            if name in named:
                raise ValueError(f"node name [{name}] is defined more than once")
            node.name = name
            named[name] = node
        self.nodes = named
        return self

    @property
    def sorted_nodes(self) -> List[NodeDefinition]:
        return [self.nodes[name] for name in sorted(self.nodes)]

    @property
    def managers(self) -> List[NodeDefinition]:
        return [n for n in self.sorted_nodes if n.is_manager]

    @property
    def workers(self) -> List[NodeDefinition]:
        return [n for n in self.sorted_nodes if n.is_worker]

    @property
    def pets(self) -> List[NodeDefinition]:
        return [n for n in self.sorted_nodes if n.is_pet]

    @property
    def swarm_nodes(self) -> List[NodeDefinition]:
        return [n for n in self.sorted_nodes if n.in_swarm]

    @property
    def is_cloud(self) -> bool:
        return self.hosting.is_cloud

    @property
    def vpn_enabled(self) -> bool:
        return self.vpn.enabled or self.hosting.is_cloud

    def node(self, name: str) -> Optional[NodeDefinition]:
        return self.nodes.get(name.lower())
