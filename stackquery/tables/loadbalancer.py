"""Load balancing (Octavia) tables."""

from stackquery.client.services import ServiceKind
from stackquery.tables.descriptor import column, define_table

LOADBALANCER = define_table(
    resource_kind="openstack_loadbalancer",
    description="OpenStack Load Balancer",
    service=ServiceKind.LOAD_BALANCING,
    columns=(
        column("id", description="The unique id of the load balancer"),
        column("name", description="Human-readable name of the load balancer"),
        column("description"),
        column("project_id"),
        column("flavor_id"),
        column("vip_network_id"),
        column("vip_subnet_id"),
        column("vip_port_id"),
        column("vip_address"),
        column("provider"),
        column("admin_state_up", type="bool"),
        column("provisioning_status"),
        column("operating_status"),
        column("pools", type="json"),
        column("listeners", type="json"),
        column("tags", type="json"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "project_id": "project_id",
        "operating_status": "operating_status",
    },
    list_path="/v2/lbaas/loadbalancers",
    get_path="/v2/lbaas/loadbalancers/{id}",
    collection_key="loadbalancers",
    item_key="loadbalancer",
)

LISTENER = define_table(
    resource_kind="openstack_listener",
    description="OpenStack Listener",
    service=ServiceKind.LOAD_BALANCING,
    columns=(
        column("id", description="The unique id of the listener"),
        column("name"),
        column("description"),
        column("project_id"),
        column("protocol"),
        column("protocol_port", type="int"),
        column("default_pool_id"),
        column("connection_limit", type="int"),
        column("admin_state_up", type="bool"),
        column("provisioning_status"),
        column("operating_status"),
        column("loadbalancers", type="json"),
        column("tags", type="json"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "project_id": "project_id",
        "operating_status": "operating_status",
    },
    list_path="/v2/lbaas/listeners",
    get_path="/v2/lbaas/listeners/{id}",
    collection_key="listeners",
    item_key="listener",
)

POOL = define_table(
    resource_kind="openstack_pool",
    description="OpenStack Pool",
    service=ServiceKind.LOAD_BALANCING,
    columns=(
        column("id", description="The unique id of the pool"),
        column("name"),
        column("description"),
        column("project_id"),
        column("protocol"),
        column("lb_algorithm"),
        column("subnet_id"),
        column("admin_state_up", type="bool"),
        column("provisioning_status"),
        column("operating_status"),
        column("session_persistence", type="json"),
        column("loadbalancers", type="json"),
        column("listeners", type="json"),
        column("members", type="json"),
        column("tags", type="json"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "project_id": "project_id",
        "operating_status": "operating_status",
    },
    list_path="/v2/lbaas/pools",
    get_path="/v2/lbaas/pools/{id}",
    collection_key="pools",
    item_key="pool",
)

# Members are only reachable through their pool, so pool_id is required
# and there is no get-by-id.
POOL_MEMBER = define_table(
    resource_kind="openstack_pool_member",
    description="OpenStack Pool Member",
    service=ServiceKind.LOAD_BALANCING,
    columns=(
        column("id", description="The unique id of the member"),
        column("pool_id", description="The pool the member belongs to"),
        column("name"),
        column("project_id"),
        column("address"),
        column("protocol_port", type="int"),
        column("subnet_id"),
        column("weight", type="int"),
        column("backup", type="bool"),
        column("admin_state_up", type="bool"),
        column("provisioning_status"),
        column("operating_status"),
        column("tags", type="json"),
    ),
    filterable_columns={
        "id": "id",
        "pool_id": "pool_id",
        "name": "name",
        "project_id": "project_id",
    },
    list_path="/v2/lbaas/pools/{pool_id}/members",
    collection_key="members",
    item_key="member",
    required_columns=("pool_id",),
)

TABLES = (LOADBALANCER, LISTENER, POOL, POOL_MEMBER)
