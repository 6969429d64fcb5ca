"""Image (Glance) and block storage (Cinder) tables."""

from stackquery.client.services import ServiceKind
from stackquery.tables.descriptor import column, define_table

# Glance returns images unwrapped and links pages through a top-level 'next'
IMAGE = define_table(
    resource_kind="openstack_image",
    description="OpenStack Image",
    service=ServiceKind.IMAGE,
    columns=(
        column("id", description="The unique id of the image"),
        column("name"),
        column("status"),
        column("visibility"),
        column("owner", description="The project owning the image"),
        column("protected", type="bool"),
        column("hidden", type="bool", field="os_hidden"),
        column("disk_format"),
        column("container_format"),
        column("size", type="int", description="Image size in bytes"),
        column("min_disk", type="int"),
        column("min_ram", type="int"),
        column("checksum"),
        column("tags", type="json"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "status": "status",
        "visibility": "visibility",
        "owner": "owner",
        "protected": "protected",
        "hidden": "os_hidden",
    },
    list_path="/v2/images",
    get_path="/v2/images/{id}",
    collection_key="images",
    pagination="next",
)

VOLUME = define_table(
    resource_kind="openstack_volume",
    description="OpenStack Volume",
    service=ServiceKind.BLOCK_STORAGE,
    columns=(
        column("id", description="The unique id of the volume"),
        column("name"),
        column("description"),
        column("status"),
        column("size", type="int", description="Volume size in GB"),
        column("volume_type"),
        column("availability_zone"),
        column("bootable"),
        column("encrypted", type="bool"),
        column("multiattach", type="bool"),
        column("project_id", field="os-vol-tenant-attr:tenant_id"),
        column("user_id"),
        column("snapshot_id"),
        column("source_volid"),
        column("attachments", type="json"),
        column("metadata", type="json"),
        column("created_at", type="timestamp"),
        column("updated_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "status": "status",
        "bootable": "bootable",
        "availability_zone": "availability_zone",
        "project_id": "project_id",
    },
    list_path="/volumes/detail",
    get_path="/volumes/{id}",
    collection_key="volumes",
    item_key="volume",
    fixed_filters={"all_tenants": "true"},
)

ATTACHMENT = define_table(
    resource_kind="openstack_attachment",
    description="OpenStack Volume Attachment",
    service=ServiceKind.BLOCK_STORAGE,
    columns=(
        column("id", description="The unique id of the attachment"),
        column("volume_id"),
        column("instance", description="The instance the volume is attached to"),
        column("status"),
        column("attach_mode"),
        column("attached_at", type="timestamp"),
        column("detached_at", type="timestamp"),
        column("connection_info", type="json"),
    ),
    filterable_columns={
        "id": "id",
        "volume_id": "volume_id",
        "instance": "instance_id",
        "status": "status",
    },
    list_path="/attachments/detail",
    get_path="/attachments/{id}",
    collection_key="attachments",
    item_key="attachment",
    fixed_filters={"all_tenants": "true"},
)

TABLES = (IMAGE, VOLUME, ATTACHMENT)
