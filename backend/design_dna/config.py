"""
Design DNA Configuration
Manages environment variables and defaults for the color pipeline service.
"""
import os
from typing import List, Tuple

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Configuration class for Design DNA services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("DESIGN_DNA_MAX_FILE_MB", "10"))
    FETCH_TIMEOUT_S: float = float(os.environ.get("DESIGN_DNA_FETCH_TIMEOUT_S", "10"))

    # Extraction defaults (caller-overridable per request)
    DEFAULT_MAX_COLORS: int = int(os.environ.get("DESIGN_DNA_DEFAULT_MAX_COLORS", "8"))
    DEFAULT_TOP_K: int = int(os.environ.get("DESIGN_DNA_DEFAULT_TOP_K", "8"))
    CANVAS_EDGE: int = int(os.environ.get("DESIGN_DNA_CANVAS_EDGE", "150"))
    MAX_COLORS_LIMIT: int = 32

    # Logging
    LOG_LEVEL: str = os.environ.get("DESIGN_DNA_LOG_LEVEL", "INFO")

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("DESIGN_DNA_ALLOWED_ORIGINS", "http://localhost:3000")

    # Style guide selection bounds
    STYLE_GUIDE_MIN_SAVES: int = 3
    STYLE_GUIDE_MAX_SAVES: int = 10

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/png", "image/jpeg", "image/webp"]

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (self.CANVAS_EDGE, self.CANVAS_EDGE)

    @property
    def max_file_bytes(self) -> int:
        return self.MAX_FILE_MB * 1024 * 1024

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def validate_mime_type(cls, content_type: str) -> bool:
        """Validate an upload content type against the allow-list."""
        return content_type in cls.SUPPORTED_MIME_TYPES


# Global config instance
config = Config()
