from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "avyforecast"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False, alias="AVYFORECAST_DEBUG")
    log_level: str = Field(default="INFO", alias="AVYFORECAST_LOG_LEVEL")

    # Rose diagram
    rose_size: int = Field(default=100, alias="AVYFORECAST_ROSE_SIZE")
    rose_primary_color: str = Field(default="#d9534f", alias="AVYFORECAST_ROSE_PRIMARY_COLOR")
    rose_secondary_color: str = Field(
        default="#f0ad4e", alias="AVYFORECAST_ROSE_SECONDARY_COLOR"
    )
    rose_base_color: str = "#f3f4f6"
    rose_stroke_color: str = "#cccccc"

    # Danger audit
    audit_output_dir: str = Field(default="data/audit", alias="AVYFORECAST_AUDIT_DIR")

    model_config = {
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }


settings = Settings()
