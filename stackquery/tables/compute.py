"""Compute (Nova) tables."""

from stackquery.client.services import ServiceKind
from stackquery.tables.descriptor import column, define_table

INSTANCE = define_table(
    resource_kind="openstack_instance",
    description="OpenStack Instance",
    service=ServiceKind.COMPUTE,
    columns=(
        column("id", description="The unique id of the instance"),
        column("name", description="Human-readable name of the instance"),
        column("project_id", field="tenant_id", description="The project owning the instance"),
        column("user_id", description="The user who created the instance"),
        column("status", description="The instance status"),
        column("host_id", field="hostId", description="Opaque id of the host running the instance"),
        column("host", field="OS-EXT-SRV-ATTR:host", description="Compute host name"),
        column("availability_zone", field="OS-EXT-AZ:availability_zone"),
        column("vm_state", field="OS-EXT-STS:vm_state"),
        column("power_state", type="int", field="OS-EXT-STS:power_state"),
        column("flavor_id", field="flavor.id", description="The flavor the instance was built from"),
        column("image_id", field="image.id", description="The image the instance was booted from"),
        column("key_name", description="The SSH key pair injected into the instance"),
        column("addresses", type="json", description="Addresses by network"),
        column("metadata", type="json"),
        column("security_groups", type="json"),
        column("volumes_attached", type="json", field="os-extended-volumes:volumes_attached"),
        column("tags", type="json"),
        column("created", type="timestamp"),
        column("updated", type="timestamp"),
    ),
    filterable_columns={
        "id": "uuid",
        "name": "name",
        "status": "status",
        "host": "host",
        "flavor_id": "flavor",
        "image_id": "image",
        "project_id": "project_id",
        "user_id": "user_id",
    },
    list_path="/servers/detail",
    get_path="/servers/{id}",
    collection_key="servers",
    item_key="server",
    fixed_filters={"all_tenants": "true"},
)

FLAVOR = define_table(
    resource_kind="openstack_flavor",
    description="OpenStack Flavor",
    service=ServiceKind.COMPUTE,
    columns=(
        column("id", description="The unique id of the flavor"),
        column("name", description="Human-readable name of the flavor"),
        column("disk", type="int", description="Root disk size in GB"),
        column("ram", type="int", description="Memory in MB"),
        column("vcpus", type="int", description="Number of virtual CPUs"),
        column("swap", type="int"),
        column("ephemeral", type="int", field="OS-FLV-EXT-DATA:ephemeral"),
        column("is_public", type="bool", field="os-flavor-access:is_public"),
        column("rxtx_factor", type="double"),
        column("description"),
        column("extra_specs", type="json"),
    ),
    filterable_columns={"id": "id", "is_public": "is_public"},
    list_path="/flavors/detail",
    get_path="/flavors/{id}",
    collection_key="flavors",
    item_key="flavor",
    # 'None' lists public and private flavors alike
    fixed_filters={"is_public": "None"},
)

HYPERVISOR = define_table(
    resource_kind="openstack_hypervisor",
    description="OpenStack Hypervisor",
    service=ServiceKind.COMPUTE,
    columns=(
        column("id", description="The unique id of the hypervisor"),
        column("hypervisor_hostname", description="The hostname of the hypervisor"),
        column("host_ip", description="The host_ip of the hypervisor"),
        column("state", description="The state of the hypervisor"),
        column("status", description="The status of the hypervisor"),
        column("hypervisor_type", description="The type of hypervisor"),
        column("hypervisor_version", type="int", description="The version of the hypervisor"),
        column("vcpus", type="int", description="The total number of vcpus on the hypervisor"),
        column("vcpus_used", type="int"),
        column("cpu_vendor", field="cpu_info.vendor"),
        column("cpu_arch", field="cpu_info.arch"),
        column("cpu_model", field="cpu_info.model"),
        column("memory_mb", type="int"),
        column("memory_mb_used", type="int"),
        column("free_ram_mb", type="int"),
        column("local_gb", type="int"),
        column("local_gb_used", type="int"),
        column("free_disk_gb", type="int"),
        column("disk_available_least", type="int"),
        column("current_workload", type="int"),
        column("running_vms", type="int"),
        column("service", type="json", description="The compute service on this hypervisor"),
    ),
    filterable_columns={"id": "id"},
    list_path="/os-hypervisors/detail",
    get_path="/os-hypervisors/{id}",
    collection_key="hypervisors",
    item_key="hypervisor",
)

AGGREGATE = define_table(
    resource_kind="openstack_aggregate",
    description="OpenStack Host Aggregate",
    service=ServiceKind.COMPUTE,
    columns=(
        column("id", type="int", description="The unique id of the aggregate"),
        column("name"),
        column("availability_zone"),
        column("hosts", type="json"),
        column("metadata", type="json"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={"id": "id"},
    list_path="/os-aggregates",
    get_path="/os-aggregates/{id}",
    collection_key="aggregates",
    item_key="aggregate",
    pagination="none",
)

TABLES = (INSTANCE, FLAVOR, HYPERVISOR, AGGREGATE)
