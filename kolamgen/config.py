"""Configuration management for the kolam generator."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """Application-level configuration."""

    # Directories
    output_dir: Path = Field(
        default=Path.cwd() / "output",
        description="Default output directory",
    )

    # Generation defaults
    default_size: int = Field(default=7, ge=2, description="Default grid size")
    cell_spacing: float = Field(default=60.0, gt=0, description="Pixels between grid dots")
    max_size: int = Field(default=101, ge=2, description="Largest size served by the API")

    # Rendering defaults
    stroke_color: str = Field(default="#FFFFFF", description="Default curve color")
    background_color: str = Field(default="#7B3306", description="Default background color")

    @classmethod
    def load(cls) -> "AppConfig":
        """Load configuration from environment and defaults."""
        fields = cls.model_fields
        return cls(
            output_dir=Path(os.environ.get("KOLAMGEN_OUTPUT_DIR", str(fields["output_dir"].default))),
            default_size=int(os.environ.get("KOLAMGEN_DEFAULT_SIZE", fields["default_size"].default)),
            cell_spacing=float(os.environ.get("KOLAMGEN_CELL_SPACING", fields["cell_spacing"].default)),
            max_size=int(os.environ.get("KOLAMGEN_MAX_SIZE", fields["max_size"].default)),
            stroke_color=os.environ.get("KOLAMGEN_STROKE_COLOR", fields["stroke_color"].default),
            background_color=os.environ.get("KOLAMGEN_BACKGROUND_COLOR", fields["background_color"].default),
        )

    def ensure_directories(self) -> None:
        """Create necessary directories."""
        self.output_dir.mkdir(parents=True, exist_ok=True)


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get or create global configuration."""
    global _config
    if _config is None:
        _config = AppConfig.load()
    return _config
