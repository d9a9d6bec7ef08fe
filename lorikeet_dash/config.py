from pathlib import Path
from typing import Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lorikeet_dash.infrastructure.static.bundle import DEFAULT_ROOT


class Settings(BaseSettings):
    APP_NAME: str = "lorikeet-dash"

    LISTEN: str = Field("0.0.0.0:3333", alias="LISTEN")
    TEST_PLAN: Path = Field(Path("test.yml"), alias="TEST_PLAN")
    CONFIG: Optional[Path] = Field(None, alias="CONFIG")
    REFRESH_MS: int = Field(10000, alias="REFRESH_MS", gt=0)

    # unset keeps every sample for the lifetime of the process
    MAX_POINTS: Optional[int] = Field(None, alias="MAX_POINTS", gt=0)
    SMOOTH: bool = Field(False, alias="SMOOTH")

    STATIC_DIR: Path = Field(DEFAULT_ROOT, alias="STATIC_DIR")
    API_PREFIX: str = Field("/api/", alias="API_PREFIX")
    STEP_TIMEOUT_S: float = Field(30.0, alias="STEP_TIMEOUT_S", gt=0)

    ALLOWED_CORS_ORIGINS: str = Field("*", alias="ALLOWED_CORS_ORIGINS")
    LOG_LEVEL: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=".env", populate_by_name=True, extra="ignore")

    @field_validator("LISTEN")
    @classmethod
    def validate_listen(cls, v: str) -> str:
        host, sep, port = v.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise ValueError("LISTEN must look like host:port")
        return v

    @property
    def listen_address(self) -> Tuple[str, int]:
        host, _, port = self.LISTEN.rpartition(":")
        return host.strip("[]"), int(port)

    @property
    def refresh_interval_s(self) -> float:
        return self.REFRESH_MS / 1000.0

    @property
    def cors_origins_list(self) -> list[str]:
        if self.ALLOWED_CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_CORS_ORIGINS.split(",")]
