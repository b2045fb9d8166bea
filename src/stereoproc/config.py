"""Configuration management for the stereo orchestrator."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .params import APPROXIMATE_SYNC, QUEUE_SIZE

logger = logging.getLogger(__name__)

DEFAULT_NAME = "stereo_image_proc"


class OrchestratorConfig(BaseModel):
    """Top-level configuration for assembling the stereo processing graph.

    Attributes:
        name: Unqualified name of the orchestrator.
        namespace: Namespace the orchestrator runs in; should be the stereo
            camera's namespace, not the root.
        remappings: Caller-side name remappings, as given on the command line.
        queue_size: Input queue depth for the downstream units.
        approximate_sync: Use approximate instead of exact time
            synchronization in the stereo units.
        parameters: Additional private parameters of the orchestrator.
        strict_preflight: Refuse to start when a preflight check fails.
    """

    model_config = ConfigDict(extra="allow")

    name: str = DEFAULT_NAME
    namespace: str = "/"
    remappings: dict[str, str] = Field(default_factory=dict)

    queue_size: int | None = Field(default=None, strict=True)
    approximate_sync: bool | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)

    strict_preflight: bool = False

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that name is a single non-empty path segment."""
        if not v or "/" in v:
            raise ValueError(f"name must be non-empty and contain no '/', got {v!r}")
        return v

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Validate that namespace is absolute."""
        if not v.startswith("/"):
            raise ValueError(f"namespace must start with '/', got {v!r}")
        if v != "/":
            v = v.rstrip("/")
        return v

    @field_validator("queue_size")
    @classmethod
    def validate_queue_size(cls, v: int | None) -> int | None:
        """Validate that queue_size is positive."""
        if v is not None and v <= 0:
            raise ValueError(f"queue_size must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def check_parameters(self) -> "OrchestratorConfig":
        """Reject shared keys hidden in ``parameters`` and warn about extra fields."""
        for key in (QUEUE_SIZE, APPROXIMATE_SYNC):
            if key in self.parameters:
                raise ValueError(
                    f"parameters.{key} is not allowed; set the top-level "
                    f"'{key}' key instead"
                )

        if self.__pydantic_extra__:
            logger.warning(
                "Unknown config keys in OrchestratorConfig (ignored): %s",
                list(self.__pydantic_extra__.keys()),
            )
        return self

    @property
    def resolved_name(self) -> str:
        """Fully qualified orchestrator name, e.g. ``/stereo/stereo_image_proc``."""
        return f"{self.namespace.rstrip('/')}/{self.name}"

    def private_parameters(self) -> dict[str, Any]:
        """Parameters to seed into the orchestrator's private namespace."""
        params = dict(self.parameters)
        if self.queue_size is not None:
            params[QUEUE_SIZE] = self.queue_size
        if self.approximate_sync is not None:
            params[APPROXIMATE_SYNC] = self.approximate_sync
        return params

    @classmethod
    def from_yaml(cls, path: str | Path) -> "OrchestratorConfig":
        """Load configuration from a YAML file.

        Missing fields use their default values.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Loaded configuration with defaults filled in.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            ValueError: If validation fails (with all errors collected).
        """
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            formatted_errors = format_validation_errors(e)
            raise ValueError(
                f"Configuration validation failed:\n{formatted_errors}"
            ) from None

        return config

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file.

        All fields including defaults are written for explicitness.

        Args:
            path: Path to output YAML file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(mode="json")

        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors with YAML-style paths.

    Args:
        error: Pydantic ValidationError.

    Returns:
        Formatted error string with YAML paths and messages.
    """
    lines = []
    for err in error.errors():
        path_parts = []
        for part in err["loc"]:
            if isinstance(part, int) and path_parts:
                path_parts[-1] = f"{path_parts[-1]}[{part}]"
            else:
                path_parts.append(str(part))

        path = ".".join(path_parts)
        msg = err["msg"]
        lines.append(f"  {path}: {msg}" if path else f"  {msg}")

    return "\n".join(lines)
