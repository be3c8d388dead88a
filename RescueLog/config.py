from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- RescueTime Analytic API ---
    api_base_url: str = "https://www.rescuetime.com"

    # --- Timeouts (seconds) ---
    # Bounds connection establishment; urllib3 applies it to the TLS handshake too.
    connect_timeout_s: float = Field(5.0, gt=0)
    # Overall deadline for one request, body read included.
    request_timeout_s: float = Field(10.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="RESCUELOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra='ignore'
    )
