"""Runtime configuration loaded from the environment."""
import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Engine and HTTP host settings."""
    log_level: str = Field(default="INFO", description="Console log level")
    log_dir: str = Field(default="logs", description="Directory for log files")
    log_to_file: bool = Field(default=True, description="Attach the file handler")
    import_timeout: float = Field(default=10.0, description="Seconds to wait for URL imports")
    strict_validation: bool = Field(default=False, description="Treat advisory errors as blocking")
    css_scope: str = Field(default=".brand-preview-scope", description="Selector for generated CSS")
    css_prefix: str = Field(default="--brand-", description="Custom property namespace")
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8000, description="HTTP port")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")


def load_settings() -> Settings:
    """Build settings from BRANDDNA_* environment variables."""
    origins = os.getenv("BRANDDNA_CORS_ORIGINS", "*")
    return Settings(
        log_level=os.getenv("BRANDDNA_LOG_LEVEL", "INFO").upper(),
        log_dir=os.getenv("BRANDDNA_LOG_DIR", "logs"),
        log_to_file=_env_bool("BRANDDNA_LOG_TO_FILE", True),
        import_timeout=float(os.getenv("BRANDDNA_IMPORT_TIMEOUT", "10")),
        strict_validation=_env_bool("BRANDDNA_STRICT_VALIDATION", False),
        css_scope=os.getenv("BRANDDNA_CSS_SCOPE", ".brand-preview-scope"),
        css_prefix=os.getenv("BRANDDNA_CSS_PREFIX", "--brand-"),
        host=os.getenv("BRANDDNA_HOST", "0.0.0.0"),
        port=int(os.getenv("BRANDDNA_PORT", "8000")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once."""
    return load_settings()
