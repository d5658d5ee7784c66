"""
Filesystem and process capabilities used by composectl components.

Components receive these objects instead of touching the filesystem or
spawning processes directly, so tests can substitute in-memory and
recording implementations.
"""

import logging
import re
import stat
import subprocess
import time
from pathlib import Path
from typing import List, Union

from .models import ExecResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_SAFE_SHELL_CHARS = re.compile(r"[^%+,\-./:=@_0-9A-Za-z]")


class LocalFileSystem:
    """Stateless access to the local filesystem."""

    def exists(self, source: PathLike) -> bool:
        return Path(source).exists()

    def is_directory(self, source: PathLike) -> bool:
        """Check if source is a directory (symlinks are not followed)."""
        try:
            return stat.S_ISDIR(Path(source).lstat().st_mode)
        except OSError:
            return False

    def is_file(self, source: PathLike) -> bool:
        """Check if source exists and is a regular file or a symbolic link."""
        path = Path(source)
        try:
            return path.exists() and (path.is_file() or path.is_symlink())
        except OSError:
            return False

    def get_directories(self, source: PathLike) -> List[Path]:
        """Get all directories directly under source."""
        return [entry for entry in sorted(Path(source).iterdir()) if self.is_directory(entry)]

    def get_files(self, source: PathLike) -> List[Path]:
        """Get all files (or symlinks) directly under source."""
        return [entry for entry in sorted(Path(source).iterdir()) if self.is_file(entry)]

    def read_bytes(self, source: PathLike) -> bytes:
        return Path(source).read_bytes()

    def read_text(self, source: PathLike, encoding: str = "utf-8") -> str:
        return Path(source).read_text(encoding=encoding)

    @staticmethod
    def shell_escape(value: str) -> str:
        """
        Escape a value for use as a single POSIX shell word.

        Values made only of safe characters are returned unchanged.
        """
        if value == "":
            return "''"
        if not _SAFE_SHELL_CHARS.search(value):
            return value
        return "'" + value.replace("'", "'\"'\"'") + "'"


class SubprocessRunner:
    """Runs a command line through the shell with inherited standard streams."""

    def run(self, command_line: str, cwd: PathLike) -> ExecResult:
        """
        Execute a command line and wait for it to finish.

        Args:
            command_line: Full command line, interpreted by the shell
            cwd: Working directory for the child process

        Returns:
            ExecResult with the exit code, or an error message if the
            process could not be started
        """
        result = ExecResult(command=command_line)
        start_time = time.time()

        try:
            process = subprocess.run(command_line, shell=True, cwd=str(cwd))
            result.exit_code = process.returncode
            if process.returncode != 0:
                result.error_message = f"Command failed: {command_line}"
        except OSError as e:
            result.error_message = str(e)

        result.duration = time.time() - start_time
        logger.debug(f"Command finished: exit_code={result.exit_code}, duration={result.duration:.2f}s")
        return result
