"""Networking (Neutron) tables."""

from stackquery.client.services import ServiceKind
from stackquery.tables.descriptor import column, define_table

NETWORK = define_table(
    resource_kind="openstack_network",
    description="OpenStack Network",
    service=ServiceKind.NETWORK,
    columns=(
        column("id", description="The unique id of the network"),
        column("name", description="Human-readable name of the network"),
        column("description"),
        column("project_id", description="The project owning the network"),
        column("status"),
        column("admin_state_up", type="bool"),
        column("shared", type="bool", description="Whether the network is shared across projects"),
        column("external", type="bool", field="router:external"),
        column("mtu", type="int"),
        column("subnets", type="json"),
        column("availability_zones", type="json"),
        column("tags", type="json"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "project_id": "project_id",
        "status": "status",
        "admin_state_up": "admin_state_up",
        "shared": "shared",
    },
    list_path="/v2.0/networks",
    get_path="/v2.0/networks/{id}",
    collection_key="networks",
    item_key="network",
)

SUBNET = define_table(
    resource_kind="openstack_subnet",
    description="OpenStack Subnet",
    service=ServiceKind.NETWORK,
    columns=(
        column("id", description="The unique id of the subnet"),
        column("name", description="Human-readable name for the subnet"),
        column("description", description="The description of the subnet"),
        column("network", field="network_id", description="The network the subnet belongs to"),
        column("cidr", description="The subnet cidr"),
        column("project_id", description="The project id the subnet belongs to"),
        column("dhcp", type="bool", field="enable_dhcp", description="If DHCP is enabled"),
        column("gateway", field="gateway_ip", description="The gateway of the subnet"),
        column("ip_version", type="int"),
        column("dns_nameservers", type="json", description="DNS name servers used by hosts in this subnet"),
        column("host_routes", type="json", description="Routes that should be used by devices with IPs from this subnet"),
        column("allocation_pools", type="json"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "project_id": "project_id",
        "network": "network_id",
        "cidr": "cidr",
    },
    list_path="/v2.0/subnets",
    get_path="/v2.0/subnets/{id}",
    collection_key="subnets",
    item_key="subnet",
)

PORT = define_table(
    resource_kind="openstack_port",
    description="OpenStack Port",
    service=ServiceKind.NETWORK,
    columns=(
        column("id", description="The unique id of the port"),
        column("name"),
        column("description"),
        column("network_id"),
        column("project_id"),
        column("mac_address"),
        column("status"),
        column("admin_state_up", type="bool"),
        column("device_id", description="The device (e.g. instance) using the port"),
        column("device_owner"),
        column("fixed_ips", type="json"),
        column("security_groups", type="json"),
        column("allowed_address_pairs", type="json"),
        column("binding_host_id", field="binding:host_id"),
        column("tags", type="json"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "network_id": "network_id",
        "project_id": "project_id",
        "mac_address": "mac_address",
        "status": "status",
        "device_id": "device_id",
        "device_owner": "device_owner",
    },
    list_path="/v2.0/ports",
    get_path="/v2.0/ports/{id}",
    collection_key="ports",
    item_key="port",
)

SECURITY_GROUP = define_table(
    resource_kind="openstack_security_group",
    description="OpenStack Security Group",
    service=ServiceKind.NETWORK,
    columns=(
        column("id", description="The unique id of the security group"),
        column("name"),
        column("description"),
        column("project_id"),
        column("stateful", type="bool"),
        column("rules", type="json", field="security_group_rules"),
        column("tags", type="json"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "project_id": "project_id",
    },
    list_path="/v2.0/security-groups",
    get_path="/v2.0/security-groups/{id}",
    collection_key="security_groups",
    item_key="security_group",
)

SECURITY_GROUP_RULE = define_table(
    resource_kind="openstack_security_group_rule",
    description="OpenStack Security Group Rule",
    service=ServiceKind.NETWORK,
    columns=(
        column("id", description="The unique id of the rule"),
        column("security_group_id"),
        column("project_id"),
        column("description"),
        column("direction", description="ingress or egress"),
        column("ethertype", description="IPv4 or IPv6"),
        column("protocol"),
        column("port_range_min", type="int"),
        column("port_range_max", type="int"),
        column("remote_ip_prefix"),
        column("remote_group_id"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "security_group_id": "security_group_id",
        "project_id": "project_id",
        "direction": "direction",
        "ethertype": "ethertype",
        "protocol": "protocol",
        "remote_ip_prefix": "remote_ip_prefix",
    },
    list_path="/v2.0/security-group-rules",
    get_path="/v2.0/security-group-rules/{id}",
    collection_key="security_group_rules",
    item_key="security_group_rule",
)

TABLES = (NETWORK, SUBNET, PORT, SECURITY_GROUP, SECURITY_GROUP_RULE)
