"""
Module: settings.py
Description: Sender configuration using pydantic-settings.

Loads the webhook timeout, JSON serialization options, work item
store selection and metrics toggles from environment variables,
with a .env file supported for local development.
"""

import json
import re
from typing import Any, Optional

from pydantic import BaseModel, Field, JsonValue, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class JsonSerializerSettings(BaseModel):
    """
    Options controlling how webhook payloads are decoded and encoded.

    The defaults produce compact JSON with keys in insertion order and
    non-ASCII characters written verbatim.
    """

    indent: Optional[int] = Field(
        default=None,
        ge=0,
        description="Indentation width; None renders compact JSON"
    )
    sort_keys: bool = Field(default=False, description="Sort object keys on output")
    ensure_ascii: bool = Field(default=False, description="Escape non-ASCII characters")
    allow_nan: bool = Field(default=True, description="Allow NaN and Infinity values")
    strict: bool = Field(
        default=True,
        description="Reject control characters inside decoded strings"
    )

    def serialize(self, value: Any) -> str:
        """Encode a value to a JSON string."""
        separators = (",", ":") if self.indent is None else (",", ": ")
        return json.dumps(
            value,
            indent=self.indent,
            sort_keys=self.sort_keys,
            ensure_ascii=self.ensure_ascii,
            allow_nan=self.allow_nan,
            separators=separators,
        )

    def deserialize(self, text: str) -> JsonValue:
        """Decode a JSON string into plain JSON values."""
        return json.loads(text, strict=self.strict)


class Settings(BaseSettings):
    """Sender settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="Webhook Sender", description="Application name")
    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_region: str = Field(default="us-east-1", description="AWS region")

    # Delivery settings
    webhook_timeout: float = Field(
        default=60.0,
        gt=0,
        description="HTTP timeout in seconds for a webhook delivery attempt"
    )
    json_serializer_settings: Optional[JsonSerializerSettings] = Field(
        default=None,
        description="JSON options for decoding Data and encoding the body"
    )

    # Work item store settings
    work_items_table_name: Optional[str] = Field(
        default=None,
        description="DynamoDB table for webhook work items; unset disables tracking"
    )
    require_work_item_store: bool = Field(
        default=False,
        description="Refuse to build a sender without a durable work item store"
    )

    # Metrics settings
    metrics_enabled: bool = Field(default=False, description="Publish CloudWatch metrics")
    metrics_namespace: str = Field(default="WebHooks", description="CloudWatch namespace")

    @field_validator('work_items_table_name')
    @classmethod
    def validate_table_name(cls, v: Optional[str]) -> Optional[str]:
        """Validate the DynamoDB table name when one is configured."""
        if v is None:
            return v

        if not re.match(r'^[a-zA-Z0-9_-]+$', v):
            raise ValueError(
                "Table name must contain only letters, numbers, hyphens, and underscores"
            )

        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @property
    def json_serializer(self) -> JsonSerializerSettings:
        """JSON settings in effect, falling back to the defaults."""
        return self.json_serializer_settings or JsonSerializerSettings()


# Global settings instance
settings = Settings()
