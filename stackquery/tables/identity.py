"""Identity (Keystone v3) tables."""

from stackquery.client.services import ServiceKind
from stackquery.tables.descriptor import column, define_table

PROJECT = define_table(
    resource_kind="openstack_project",
    description="OpenStack Project",
    service=ServiceKind.IDENTITY,
    columns=(
        column("id", description="The unique id of the project"),
        column("name"),
        column("description"),
        column("domain_id"),
        column("parent_id"),
        column("enabled", type="bool"),
        column("is_domain", type="bool"),
        column("tags", type="json"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "domain_id": "domain_id",
        "parent_id": "parent_id",
        "enabled": "enabled",
        "is_domain": "is_domain",
    },
    list_path="/projects",
    get_path="/projects/{id}",
    collection_key="projects",
    item_key="project",
    pagination="links",
)

USER = define_table(
    resource_kind="openstack_user",
    description="OpenStack User",
    service=ServiceKind.IDENTITY,
    columns=(
        column("id", description="The unique id of the user"),
        column("name"),
        column("description"),
        column("email"),
        column("domain_id"),
        column("default_project_id"),
        column("enabled", type="bool"),
        column("password_expires_at", type="timestamp"),
    ),
    filterable_columns={
        "id": "id",
        "name": "name",
        "domain_id": "domain_id",
        "enabled": "enabled",
    },
    list_path="/users",
    get_path="/users/{id}",
    collection_key="users",
    item_key="user",
    pagination="links",
)

TABLES = (PROJECT, USER)
