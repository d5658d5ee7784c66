"""
Environment file resolution.

Reads a dotenv-style environment file and determines which compose files
apply to the project.
"""

import io
import logging
from pathlib import Path
from typing import Dict, List, Optional

from dotenv.parser import parse_stream

from .exceptions import NotFound, ParseError
from .filesystem import LocalFileSystem, PathLike

logger = logging.getLogger(__name__)

DEFAULT_COMPOSE_FILE = "docker-compose.server.yml"
COMPOSE_FILES_KEY = "COMPOSE_FILES"


class EnvResolver:
    """Resolves the ordered compose file list from an environment file."""

    def __init__(
        self,
        filesystem: Optional[LocalFileSystem] = None,
        default_compose_file: str = DEFAULT_COMPOSE_FILE,
    ):
        self.filesystem = filesystem or LocalFileSystem()
        self.default_compose_file = default_compose_file

    def read(self, env_path: PathLike) -> Dict[str, Optional[str]]:
        """
        Read an environment file into a key/value mapping.

        Args:
            env_path: Path to the environment file

        Returns:
            Mapping of keys to values; keys declared without a value map to None

        Raises:
            NotFound: If the file does not exist
            ParseError: If the content is not valid KEY=VALUE lines
        """
        if not self.filesystem.is_file(env_path):
            raise NotFound(str(env_path), kind="Environment file")

        content = self.filesystem.read_bytes(env_path)
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(str(env_path), f"not valid UTF-8 ({e})")

        values: Dict[str, Optional[str]] = {}
        for binding in parse_stream(io.StringIO(text)):
            if binding.error:
                raise ParseError(
                    str(env_path),
                    f"invalid statement on line {binding.original.line}: "
                    f"{binding.original.string.strip()!r}",
                )
            if binding.key is not None:
                values[binding.key] = binding.value

        logger.debug(f"Read {len(values)} variables from {env_path}")
        return values

    def resolve(self, env_path: PathLike) -> List[str]:
        """
        Get the ordered compose file list declared by an environment file.

        COMPOSE_FILES is split on commas and used verbatim. When the key is
        absent the default compose file is returned.
        """
        values = self.read(env_path)
        compose_files = values.get(COMPOSE_FILES_KEY)

        if compose_files is None:
            logger.debug(f"{COMPOSE_FILES_KEY} not set in {env_path}, using {self.default_compose_file}")
            return [self.default_compose_file]

        files = compose_files.split(",")
        logger.debug(f"Resolved compose files from {env_path}: {files}")
        return files


def resolve_compose_files(
    env_file: str,
    root: PathLike,
    filesystem: Optional[LocalFileSystem] = None,
    default_compose_file: str = DEFAULT_COMPOSE_FILE,
) -> List[str]:
    """Resolve compose files for an environment file relative to a project root."""
    resolver = EnvResolver(filesystem, default_compose_file)
    return resolver.resolve(Path(root) / env_file)
