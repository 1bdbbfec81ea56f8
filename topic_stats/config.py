"""Environment configuration management."""
import os
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    topics_root: Optional[str] = None
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

    def validate_topics_root(self) -> bool:
        """Check if the topics root folder is set and is a directory."""
        return bool(self.topics_root) and os.path.isdir(self.topics_root)


# Global settings instance
settings = Settings()
