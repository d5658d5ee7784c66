"""
Container inventory extraction from compose files.

Parses compose documents and derives one record per image-based service
and one per build-based service. Services that only override settings
(no image and no build) contribute nothing.
"""

import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional

import yaml
from pydantic import ValidationError

from .exceptions import MalformedDocument, NotFound
from .filesystem import LocalFileSystem, PathLike
from .models import (
    UNKNOWN,
    ComposeDocument,
    ContainerRecord,
    ContainerSource,
    ServiceDefinition,
)

logger = logging.getLogger(__name__)

INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"


class ComposeLoader(yaml.SafeLoader):
    """SafeLoader without YAML 1.1 base-60 numbers, so '22:22' stays a string."""


ComposeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (INT_TAG, FLOAT_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
ComposeLoader.add_implicit_resolver(
    INT_TAG,
    re.compile(
        r"""^(?:[-+]?0b[0-1_]+
        |[-+]?0[0-7_]+
        |[-+]?(?:0|[1-9][0-9_]*)
        |[-+]?0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
ComposeLoader.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+][0-9]+)?
        |\.[0-9][0-9_]*(?:[eE][-+][0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


def split_image_reference(image: str) -> tuple:
    """Split 'repo[:tag]' on the first colon; a missing tag is 'unknown'."""
    repository, _, tag = image.partition(":")
    return repository, tag or UNKNOWN


def records_for_service(name: str, service: ServiceDefinition) -> List[ContainerRecord]:
    """Derive the inventory records for a single service definition."""
    records = []

    if service.has_image:
        repository, version = split_image_reference(service.image)
        records.append(
            ContainerRecord(
                name=name,
                source=ContainerSource.HUB,
                image=repository,
                version=version,
                ports=list(service.ports),
            )
        )

    # Built images have no registry reference, even when an image tag is set
    if service.has_build:
        records.append(
            ContainerRecord(
                name=name,
                source=ContainerSource.BUILD,
                ports=list(service.ports),
            )
        )

    return records


class InventoryExtractor:
    """Builds a container inventory from compose files under a project root."""

    def __init__(self, filesystem: Optional[LocalFileSystem] = None):
        self.filesystem = filesystem or LocalFileSystem()

    def load(self, compose_file: str, root: PathLike) -> ComposeDocument:
        """
        Load and decode a compose file.

        Raises:
            NotFound: If the file does not exist under root
            MalformedDocument: If the content is not YAML with a services mapping
        """
        path = Path(root) / compose_file

        if not self.filesystem.is_file(path):
            raise NotFound(str(path), kind="Compose file")

        try:
            data = yaml.load(self.filesystem.read_text(path), Loader=ComposeLoader)
        except UnicodeDecodeError as e:
            raise MalformedDocument(str(path), f"not valid UTF-8 ({e})")
        except yaml.YAMLError as e:
            raise MalformedDocument(str(path), f"invalid YAML syntax: {e}")

        if not isinstance(data, dict):
            raise MalformedDocument(str(path), "top level is not a mapping")
        if data.get("services") is None:
            raise MalformedDocument(str(path), "no services defined")

        try:
            return ComposeDocument.model_validate(data)
        except ValidationError as e:
            raise MalformedDocument(str(path), str(e))

    def extract(self, compose_file: str, root: PathLike) -> List[ContainerRecord]:
        """Extract container records from one compose file, in service order."""
        document = self.load(compose_file, root)

        containers = []
        for name, service in document.services.items():
            records = records_for_service(name, service)
            if not records:
                logger.debug(f"Skipping override-only service '{name}' in {compose_file}")
            containers.extend(records)

        logger.debug(f"Extracted {len(containers)} containers from {compose_file}")
        return containers

    def extract_all(self, compose_files: Iterable[str], root: PathLike) -> List[ContainerRecord]:
        """
        Extract container records from several compose files.

        Results are concatenated in file order. The first missing or
        malformed file aborts the whole extraction.
        """
        containers = []
        for compose_file in compose_files:
            containers.extend(self.extract(compose_file, root))
        return containers


def inventory_to_json(containers: Iterable[ContainerRecord]) -> str:
    """Serialize container records as a single-line JSON array."""
    return json.dumps([container.to_dict() for container in containers])
