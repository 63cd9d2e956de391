"""Configuration settings for Stackforge."""

from dotenv import load_dotenv

from pydantic_settings import BaseSettings
from pydantic import Field
from pathlib import Path

# Load .env into os.environ so STACKFORGE_* overrides work from a local file
load_dotenv()

REPO_ROOT = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Global settings for Stackforge.

    Settings can be overridden via environment variables with STACKFORGE_ prefix.
    Example: STACKFORGE_DEFAULT_SEED=7
    """

    # Selection
    default_seed: int = Field(
        default=42,
        ge=0,
        description="Seed used for tie-breaking when none is given on the command line"
    )

    # Paths
    rules_path: str = Field(
        default=str(REPO_ROOT / "resources" / "rules.yaml"),
        description="Technology catalog (rules document) used by default"
    )

    # Rules validation
    strict_weights: bool = Field(
        default=False,
        description="Reject rules whose five weights do not sum to 1.0"
    )
    weight_sum_tolerance: float = Field(
        default=1e-6,
        ge=0.0,
        description="Allowed deviation of the weight sum from 1.0"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Root log level for the command line tool"
    )

    model_config = {
        "env_prefix": "STACKFORGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get_rules_path(self) -> Path:
        """Get rules path as Path object."""
        return Path(self.rules_path)


# Create singleton instance
settings = Settings()
