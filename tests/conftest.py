"""
Pytest configuration and fixtures for composectl tests.

Provides common fixtures and test utilities across all test modules.
"""

import os
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest


@pytest.fixture
def isolated_test_env() -> Generator[dict[str, str], None, None]:
    """
    Create isolated test environment with clean environment variables.

    Yields:
        Dictionary of original environment variables
    """
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("COMPOSECTL_"):
            del os.environ[key]

    yield original_env

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def temp_workspace() -> Generator[Path, None, None]:
    """
    Create temporary workspace directory for test files.

    Yields:
        Path to temporary workspace
    """
    temp_dir = tempfile.mkdtemp(prefix="composectl_workspace_")
    workspace = Path(temp_dir)

    yield workspace

    shutil.rmtree(temp_dir)


class ProjectBuilder:
    """Writes env and compose files into a project directory."""

    def __init__(self, root: Path):
        self.root = root

    def env(self, content: str, name: str = ".env") -> Path:
        path = self.root / name
        path.write_text(content)
        return path

    def compose(self, name: str, content: str) -> Path:
        path = self.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path


@pytest.fixture
def project(temp_workspace: Path) -> ProjectBuilder:
    """Provide a builder for project files in the temporary workspace."""
    return ProjectBuilder(temp_workspace)


SERVER_COMPOSE = """\
services:
  web:
    image: nginx:1.25
    ports:
      - "8080:80"
  db:
    image: postgres
  app:
    build: .
    ports:
      - "3000:3000"
"""

OVERRIDE_COMPOSE = """\
services:
  web:
    environment:
      DEBUG: "1"
  worker:
    image: myorg/worker:2.1
    build:
      context: ./worker
"""


@pytest.fixture
def server_compose() -> str:
    return SERVER_COMPOSE


@pytest.fixture
def override_compose() -> str:
    return OVERRIDE_COMPOSE


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
