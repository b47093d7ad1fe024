from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RuntimeConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CODETRACKER_",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    LOG_DIR: Path = Field(default=Path("/var/log/codetracker"))
    LOG_LEVEL: str = Field(default="INFO")

    # Activity collector
    COLLECTOR_URL: str = Field(default="http://64.208.137.22:3000")

    # Supervisor
    POLL_INTERVAL: float = Field(default=1.0, gt=0)
    FORK_GRACE_PERIOD: float = Field(default=3.0, ge=0)
    SUPERUSER: str = Field(default="root")

    @property
    def log_file(self) -> Path:
        return self.LOG_DIR / "codetrackerd.log"

    @property
    def out_file(self) -> Path:
        return self.LOG_DIR / "codetrackerd.out"

    @property
    def err_file(self) -> Path:
        return self.LOG_DIR / "codetrackerd.err"

    @property
    def pid_file(self) -> Path:
        return self.LOG_DIR / "codetrackerd.pid"

    def to_dict(self) -> dict:
        """Возвращает полный конфиг как словарь."""
        return self.model_dump(mode="json")


runtime_config = RuntimeConfig()
