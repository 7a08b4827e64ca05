"""
Image inventory reader.

Reads the local docker image store and the image store of the kind
node's container runtime. Both reads are read-only, blocking and
uncached: every call spawns a fresh process.
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from pydantic import ValidationError

from kindimages.config.provider import ToolsConfig
from kindimages.errors import KindImagesError, ParseFailed
from kindimages.modules.api.models import DockerImageRecord, KindImageList, KindImageRecord
from kindimages.modules.runner import CommandRunner

logger = logging.getLogger("kindimages.inventory")

T = TypeVar("T")


@dataclass
class InventoryResult(Generic[T]):
    """Tagged result of one inventory read: records on success, error on failure."""

    records: List[T] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class InventorySnapshot:
    """Docker and kind inventories read for a single render."""

    docker: InventoryResult[DockerImageRecord]
    kind: InventoryResult[KindImageRecord]


def parse_docker_images(output: str) -> List[DockerImageRecord]:
    """
    Parse JSON-lines output of `docker image ls`.

    Lines that are not a JSON object matching DockerImageRecord are
    skipped, including the blank line left by the trailing newline.
    """
    images = []
    for line in output.split("\n"):
        try:
            images.append(DockerImageRecord.model_validate_json(line))
        except ValidationError:
            if line.strip():
                logger.debug(f"Skipping unparseable docker image line: {line[:200]}")
            continue
    return images


def parse_kind_images(output: str) -> List[KindImageRecord]:
    """
    Parse the single JSON document printed by `crictl images --output=json`.

    Raises:
        ParseFailed: The document is not valid JSON or has the wrong shape
    """
    try:
        return KindImageList.model_validate_json(output).images
    except ValidationError as e:
        raise ParseFailed(f"failed crictl json: {e.error_count()} validation error(s)") from e


class InventoryReader:
    """Queries docker and the kind node for their current images."""

    def __init__(self, runner: CommandRunner, tools: ToolsConfig):
        """
        Initialize inventory reader.

        Args:
            runner: Command runner used for every external call
            tools: Tool names, kind node and timeouts
        """
        self.runner = runner
        self.tools = tools

    def list_docker_images(self) -> List[DockerImageRecord]:
        """
        List images in the local docker image store, in docker's order.

        Raises:
            SpawnFailed, NonZeroExit, TimedOut: docker could not be queried
        """
        cmd = [self.tools.docker_bin, "image", "ls", "--format={{json .}}"]
        result = self.runner.run(cmd, timeout=self.tools.command_timeout).raise_for_status()

        images = parse_docker_images(result.stdout)
        logger.debug(f"Found {len(images)} docker images")
        return images

    def list_kind_images(self) -> List[KindImageRecord]:
        """
        List images known to the container runtime of the kind node.

        Raises:
            SpawnFailed, NonZeroExit, TimedOut: the node could not be queried
            ParseFailed: crictl printed an unexpected document
        """
        cmd = self.tools.node_exec("images", "--output=json")
        result = self.runner.run(cmd, timeout=self.tools.command_timeout).raise_for_status()

        images = parse_kind_images(result.stdout)
        logger.debug(f"Found {len(images)} images on {self.tools.node}")
        return images

    def snapshot(self) -> InventorySnapshot:
        """Read both inventories, turning failures into failed results."""
        return InventorySnapshot(
            docker=self._read("docker", self.list_docker_images),
            kind=self._read("kind", self.list_kind_images),
        )

    def _read(self, source: str, reader) -> InventoryResult:
        try:
            return InventoryResult(records=reader())
        except KindImagesError as e:
            logger.error(f"Failed to list {source} images: {e}")
            return InventoryResult(error=str(e))
