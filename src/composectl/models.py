"""
Data models for composectl

Container inventory records, the decoded shape of compose documents and
the outcome of a forwarded orchestration command.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, validator

UNKNOWN = "unknown"


class ContainerSource(Enum):
    """Where a container image comes from."""

    UNKNOWN = "unknown"
    HUB = "hub"
    BUILD = "build"


@dataclass
class ContainerRecord:
    """One inventory entry derived from a compose service."""

    name: str
    source: ContainerSource = ContainerSource.UNKNOWN
    image: str = UNKNOWN
    version: str = UNKNOWN
    ports: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form with keys in output order."""
        data = asdict(self)
        data["source"] = self.source.value
        return data


def _normalize_port(port: Any) -> str:
    if isinstance(port, dict):
        target = port.get("target")
        published = port.get("published")
        protocol = port.get("protocol")
        value = f"{published}:{target}" if published is not None else f"{target}"
        if protocol:
            value += f"/{protocol}"
        return value
    return str(port)


class ServiceDefinition(BaseModel):
    """The fields of a compose service that matter for the inventory."""

    model_config = ConfigDict(extra="ignore")

    image: Optional[str] = Field(None, description="Image reference, repo[:tag]")
    build: Optional[Any] = Field(None, description="Build context; presence marks a local build")
    ports: List[str] = Field(default_factory=list, description="Published ports")

    @validator("image", pre=True)
    def validate_image(cls, v):
        """Accept scalar image references such as numeric tags."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)):
            return str(v)
        raise ValueError("image must be a string")

    @validator("ports", pre=True)
    def validate_ports(cls, v):
        """Normalize short and long port syntax to strings."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("ports must be a list")
        return [_normalize_port(port) for port in v]

    @property
    def has_image(self) -> bool:
        return self.image is not None

    @property
    def has_build(self) -> bool:
        return self.build is not None


class ComposeDocument(BaseModel):
    """Top-level compose document: a mapping of service name to definition."""

    model_config = ConfigDict(extra="ignore")

    services: Dict[str, ServiceDefinition]

    @validator("services", pre=True)
    def validate_services(cls, v):
        """Empty override entries (null values) become empty definitions."""
        if not isinstance(v, dict):
            raise ValueError("services must be a mapping")
        return {str(name): (definition if definition is not None else {}) for name, definition in v.items()}


@dataclass
class ExecResult:
    """Result of forwarding a command to the orchestration binary."""

    command: str
    exit_code: Optional[int] = None
    dry_run: bool = False
    duration: float = 0.0
    error_message: str = ""
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def success(self) -> bool:
        return self.dry_run or self.exit_code == 0

    def get_summary(self) -> str:
        """Get a summary string for the command result."""
        if self.dry_run:
            return f"🔍 DRY RUN: {self.command}"
        status = "✅ SUCCESS" if self.success else "❌ FAILED"
        timing = f" ({self.duration:.1f}s)" if self.duration > 0 else ""
        return f"{status}: {self.command}{timing}"
