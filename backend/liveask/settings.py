from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .eventsdb.options import DEFAULT_TABLE_NAME, StoreOptions


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="NODE_ENV")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # AWS / data
    aws_region: str = Field(default="eu-west-1", validation_alias="AWS_REGION")
    # Optional: point the client at DynamoDB Local / localstack.
    dynamodb_endpoint_url: str | None = Field(default=None, validation_alias="DYNAMODB_ENDPOINT_URL")

    # Events table
    events_table_name: str = Field(default=DEFAULT_TABLE_NAME, validation_alias="EVENTS_TABLE_NAME")
    # Only enable where the service role may call ListTables/CreateTable.
    events_check_table_exists: bool = Field(default=False, validation_alias="EVENTS_CHECK_TABLE_EXISTS")
    events_table_read_capacity: int = Field(default=5, validation_alias="EVENTS_TABLE_READ_CAPACITY")
    events_table_write_capacity: int = Field(default=5, validation_alias="EVENTS_TABLE_WRITE_CAPACITY")

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    def require_in_production(self) -> None:
        """
        Enforce required settings in production.

        Local runs may use the defaults, production must name its table explicitly
        and must not point at a local endpoint.
        """
        if not self.is_production:
            return

        missing: list[str] = []
        if not (self.events_table_name or "").strip():
            missing.append("EVENTS_TABLE_NAME")
        if not (self.aws_region or "").strip():
            missing.append("AWS_REGION")

        if missing:
            raise RuntimeError(
                "Missing required production environment variables: "
                + ", ".join(missing)
            )

        if self.dynamodb_endpoint_url:
            raise RuntimeError("DYNAMODB_ENDPOINT_URL must not be set in production")

    def store_options(self) -> StoreOptions:
        return StoreOptions(
            table_name=str(self.events_table_name).strip(),
            check_table_exists=bool(self.events_check_table_exists),
            read_capacity=int(self.events_table_read_capacity),
            write_capacity=int(self.events_table_write_capacity),
        )

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A redacted representation safe for structured logs / diagnostics.
        """
        return {
            "environment": self.normalized_environment,
            "log_level": self.log_level,
            "aws": {
                "aws_region": self.aws_region,
                "dynamodb_endpoint_url_configured": bool(self.dynamodb_endpoint_url),
            },
            "events": {
                "table_name": self.events_table_name,
                "check_table_exists": bool(self.events_check_table_exists),
                "read_capacity": self.events_table_read_capacity,
                "write_capacity": self.events_table_write_capacity,
            },
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    s = Settings()
    s.require_in_production()
    return s
