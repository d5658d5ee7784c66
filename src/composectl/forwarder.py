"""
Command forwarding to the orchestration binary.

Builds a compose command line from the files selected by the environment
file and either prints it (dry run) or executes it in the project root.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .environment import DEFAULT_COMPOSE_FILE, EnvResolver
from .exceptions import ChildProcessFailure
from .filesystem import LocalFileSystem, PathLike, SubprocessRunner
from .logging_config import mask_sensitive_data
from .models import ExecResult

logger = logging.getLogger(__name__)


class CommandForwarder:
    """Assembles and runs orchestration commands for a project."""

    def __init__(
        self,
        filesystem: Optional[LocalFileSystem] = None,
        runner: Optional[SubprocessRunner] = None,
        default_compose_file: str = DEFAULT_COMPOSE_FILE,
        echo: Callable[[str], None] = print,
        echo_error: Optional[Callable[[str], None]] = None,
    ):
        self.filesystem = filesystem or LocalFileSystem()
        self.runner = runner or SubprocessRunner()
        self.resolver = EnvResolver(self.filesystem, default_compose_file)
        self.echo = echo
        self.echo_error = echo_error or echo

    def compose_arguments(self, env_file: str, compose_files: List[str]) -> List[str]:
        """Get the --env-file and -f arguments, shell escaped."""
        escape = self.filesystem.shell_escape
        arguments = ["--env-file", escape(env_file)]
        for compose_file in compose_files:
            arguments.extend(["-f", escape(compose_file)])
        return arguments

    def join_arguments(self, arguments: Iterable[str]) -> str:
        """Join command arguments into one shell-escaped string."""
        return " ".join(self.filesystem.shell_escape(argument) for argument in arguments)

    def build(self, env_file: str, root: PathLike, binary: str, sub_command: str) -> str:
        """
        Build the orchestration command line.

        Args:
            env_file: Environment file, relative to root
            root: Project root directory
            binary: Orchestration binary, e.g. 'docker compose'
            sub_command: Free-form command passed through verbatim

        Returns:
            '<binary> --env-file <env> -f <file>... <sub_command>'
        """
        compose_files = self.resolver.resolve(Path(root) / env_file)
        parts = [binary] + self.compose_arguments(env_file, compose_files)
        if sub_command:
            parts.append(sub_command)
        return " ".join(parts)

    def run(self, command_line: str, root: PathLike, dry_run: bool = False) -> Optional[ExecResult]:
        """
        Print or execute a command line in the project root.

        Failures of the child process are reported and absorbed.

        Returns:
            ExecResult on success or dry run, None if the command failed
        """
        if dry_run:
            self.echo(command_line)
            return ExecResult(command=command_line, dry_run=True)

        logger.info(f"Running: {mask_sensitive_data(command_line)} (cwd={root})")
        result = self.runner.run(command_line, root)

        if result.exit_code != 0:
            failure = ChildProcessFailure(
                mask_sensitive_data(command_line),
                exit_code=result.exit_code,
                reason=result.error_message if result.exit_code is None else "",
            )
            logger.error(str(failure))
            self.echo_error(str(failure))
            return None

        logger.info(result.get_summary())
        return result

    def forward(
        self,
        env_file: str,
        root: PathLike,
        binary: str,
        sub_command: str,
        dry_run: bool = False,
    ) -> Optional[ExecResult]:
        """Build and run a command in one step."""
        command_line = self.build(env_file, root, binary, sub_command)
        return self.run(command_line, root, dry_run=dry_run)
