"""Pydantic configuration model for httpapi."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "Paradaux/FriendlyBot"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.8"
DEFAULT_TIMEOUT = 60.0


class HttpApiConfig(BaseModel):
    """
    Settings for the request builders and the default client handle.

    Example:
        config = HttpApiConfig(timeout=10, user_agent="my-service/1.0")
        api = HttpApi(config=config)

    YAML format:
        user_agent: my-service/1.0
        timeout: 10
        follow_redirects: false
    """

    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent sent with every request")
    accept_language: str = Field(
        DEFAULT_ACCEPT_LANGUAGE,
        min_length=1,
        description="Accept-Language sent with every request",
    )
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds")
    http_version: Literal["1.0", "1.1"] = Field(
        "1.1",
        description="HTTP protocol version used by the async transport",
    )
    follow_redirects: bool = Field(True, description="Follow redirects automatically")
    binary_content_type: Optional[str] = Field(
        None,
        description="Content-Type added to binary POST requests (unset by default)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid", "frozen": True}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "HttpApiConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "HttpApiConfig":
        """Load config from YAML file."""
        return cls.from_yaml(Path(path).read_text())
