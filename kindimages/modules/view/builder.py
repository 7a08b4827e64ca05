"""
View builder for the "Local Images" page.

Turns an inventory snapshot and the loading flag into the content
response served to the host.
"""

from kindimages.modules.api.models import (
    DELETE_ACTION,
    LOAD_ACTION,
    DockerImageRecord,
    KindImageRecord,
)
from kindimages.modules.inventory import InventoryResult, InventorySnapshot

from .components import (
    Confirmation,
    ContentResponse,
    GridAction,
    GridActionType,
    Table,
    TableRow,
    Text,
)

PAGE_TITLE = "Local Images"
LOADING_MESSAGE = "Started loading image in to kind..."
DOCKER_COLUMNS = ["Repository", "Tag", "Image ID", "Created", "Size"]
KIND_COLUMNS = ["Image", "Image ID", "Size"]


def docker_row(image: DockerImageRecord) -> TableRow:
    row = TableRow(
        cells={
            "Repository": Text(value=image.Repository),
            "Tag": Text(value=image.Tag),
            "Image ID": Text(value=image.ID),
            "Created": Text(value=image.CreatedSince),
            "Size": Text(value=image.Size),
        }
    )
    row.add_action(
        GridAction(
            name="Load into Kind",
            action_path=LOAD_ACTION,
            payload={"action": LOAD_ACTION, "imageID": image.reference},
            type=GridActionType.PRIMARY,
        )
    )
    return row


def kind_row(image: KindImageRecord, repo_tag: str) -> TableRow:
    row = TableRow(
        cells={
            "Image": Text(value=repo_tag),
            "Image ID": Text(value=image.id),
            "Size": Text(value=image.size),
        }
    )
    row.add_action(
        GridAction(
            name="Delete",
            action_path=DELETE_ACTION,
            payload={"action": DELETE_ACTION, "imageID": image.id},
            type=GridActionType.DANGER,
            confirmation=Confirmation(
                title="Are you sure?",
                body=f"Do you want to delete {repo_tag} from your kind images?",
            ),
        )
    )
    return row


def build_docker_table(result: InventoryResult[DockerImageRecord]) -> Table:
    table = Table(title="Docker Images", placeholder="No images found", columns=DOCKER_COLUMNS)
    for image in result.records:
        table.add(docker_row(image))
    return table


def build_kind_table(result: InventoryResult[KindImageRecord], loading: bool = False) -> Table:
    """One row per repo tag; an image without tags produces no rows."""
    table = Table(
        title="Kind Images",
        placeholder="No images found",
        columns=KIND_COLUMNS,
        loading=loading,
    )
    for image in result.records:
        for repo_tag in image.repo_tags:
            table.add(kind_row(image, repo_tag))
    return table


def build_overview(snapshot: InventorySnapshot, loading: bool) -> ContentResponse:
    """
    Build the page: loading notice, error banners, docker and kind tables.

    Args:
        snapshot: Inventories read for this request
        loading: Whether a load is currently in flight
    """
    response = ContentResponse(title=PAGE_TITLE)

    if loading:
        response.add_section(Text(value=LOADING_MESSAGE))

    for source, result in (("docker", snapshot.docker), ("kind", snapshot.kind)):
        if not result.ok:
            response.add_section(Text(value=f"Failed to list {source} images: {result.error}"))

    response.add_section(build_docker_table(snapshot.docker))
    response.add_section(build_kind_table(snapshot.kind, loading=loading))
    return response
