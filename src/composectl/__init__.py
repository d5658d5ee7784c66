"""
composectl: docker compose dispatcher

Resolves the compose files a project uses from its environment file, forwards
commands to the orchestration binary and reports the containers defined.
"""

__version__ = "0.1.0"
__author__ = "composectl Contributors"
__email__ = "noreply@composectl.dev"

from .config import ComposectlConfig
from .environment import EnvResolver, resolve_compose_files
from .forwarder import CommandForwarder
from .inventory import InventoryExtractor, inventory_to_json
from .logging_config import setup_logging
from .models import ContainerRecord, ContainerSource

__all__ = [
    "ComposectlConfig",
    "EnvResolver",
    "resolve_compose_files",
    "CommandForwarder",
    "InventoryExtractor",
    "inventory_to_json",
    "ContainerRecord",
    "ContainerSource",
    "setup_logging",
]
