"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified, via ``Settings.from_yaml``)
  2. Environment variables (INDEXSIFT_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class QuerySettings(BaseModel):
    """Defaults applied by the query compiler."""

    default_size: int = Field(
        default=10000,
        ge=1,
        description="Window size used when a search names no limit or page size",
    )
    fuzziness: int = Field(default=1, ge=0, description="Edit distance tolerated by free-text matches")
    all_field: str = Field(default="_all", description="Catch-all field targeted by free-text matches")
    geo_attribute: str = Field(default="location", description="Default geo-point attribute")
    geo_distance: str = Field(default="3km", description="Default geo-distance radius")
    geo_distance_type: str = Field(default="plane", description="Geo-distance calculation method")


class TransportSettings(BaseModel):
    """Connection settings for the bundled HTTP transport."""

    hosts: list[str] = Field(default_factory=lambda: ["http://localhost:9200"], description="Engine node URLs")
    index: str = Field(default="default", description="Target index name")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_certs: bool = Field(default=True, description="Whether to verify TLS certificates")

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root IndexSift settings.

    Configuration is loaded from environment variables with the INDEXSIFT_ prefix.
    Nested settings use double underscores: INDEXSIFT_QUERY__DEFAULT_SIZE=500

    Example:
        INDEXSIFT_TRANSPORT__HOSTS='["http://es-1:9200", "http://es-2:9200"]'
        INDEXSIFT_TRANSPORT__INDEX=products
        INDEXSIFT_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = {
        "env_prefix": "INDEXSIFT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    query: QuerySettings = Field(default_factory=QuerySettings)
    transport: TransportSettings = Field(default_factory=TransportSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Top-level sections present in the YAML file replace those read from
        the environment; absent sections still come from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
