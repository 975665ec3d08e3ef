"""Handler and server configuration.

Both are frozen dataclasses: immutable after creation, validated once
at construction.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from snapstatic.errors import ConfigurationError
from snapstatic.file_types import DEFAULT_FILE_TYPES, FileType, validate_file_types
from snapstatic.security_headers import SecurityHeadersConfig


@dataclass(frozen=True, slots=True)
class HandlerConfig:
    """Configuration for one ``StaticHandler`` instance.

    Override what you need::

        config = HandlerConfig(root="./public", prefix="/docs", disallow_shared_cache=True)

    A trailing slash on ``prefix`` is stripped, so ``"/"`` means no prefix.
    """

    root: str | Path = "www"
    prefix: str = ""
    disallow_shared_cache: bool = False
    file_types: Mapping[str, FileType] = field(default_factory=lambda: DEFAULT_FILE_TYPES)
    security_headers: SecurityHeadersConfig = field(default_factory=SecurityHeadersConfig)

    def __post_init__(self) -> None:
        prefix = self.prefix.rstrip("/")
        if prefix and not prefix.startswith("/"):
            msg = f"prefix must start with '/', got {self.prefix!r}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "prefix", prefix)
        validate_file_types(self.file_types)

    @property
    def sync_path(self) -> str:
        """Request path that triggers a rebuild (loopback callers only)."""
        return f"{self.prefix}/sync"


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Process-level settings for ``snapstatic serve``."""

    host: str = "127.0.0.1"
    port: int = 8000

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            msg = f"port out of range: {self.port}"
            raise ConfigurationError(msg)
