from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    CERT_PATH: str | None = None
    KEY_PATH: str | None = None
    KEY_PASSWORD: str | None = None

    LOG_LEVEL: str = "INFO"

    @property
    def key_password_bytes(self) -> bytes | None:
        if not self.KEY_PASSWORD:
            return None
        return self.KEY_PASSWORD.encode("utf-8")

    model_config = ConfigDict(
        env_prefix="BUS_SIGNER_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
