"""
Configuration module for the sample health database builder.

This module centralizes all configuration values and default paths used
throughout the application. Paths can be overridden through environment
variables for deployment-specific settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional

# Base paths
SRC_DIR = Path(__file__).parent
PACKAGED_SAMPLE_DATA_DIR = SRC_DIR / "modules" / "sample_database_module" / "sample_data"

# Relative to the current working directory, resolved when used
SAMPLE_DATA_DIR = Path("assets") / "sample-data"
LOGS_DIR = Path("logs")


class SampleDataPaths:
    """Default locations of the fixture and the generated database."""
    FIXTURE_FILE = PACKAGED_SAMPLE_DATA_DIR / "sarah-chen-data.json"
    OUTPUT_DB = SAMPLE_DATA_DIR / "sample-health-narrative.db"
    STAGING_SUFFIX = ".building"


class Environment:
    """Environment variable configuration."""
    FIXTURE_VAR = "SAMPLE_DB_FIXTURE"
    OUTPUT_VAR = "SAMPLE_DB_OUTPUT"

    @staticmethod
    def get_fixture_path() -> Path:
        """Get the fixture path, honoring SAMPLE_DB_FIXTURE."""
        custom_path = os.environ.get(Environment.FIXTURE_VAR)
        return Path(custom_path) if custom_path else SampleDataPaths.FIXTURE_FILE

    @staticmethod
    def get_output_path() -> Path:
        """Get the output database path, honoring SAMPLE_DB_OUTPUT."""
        custom_path = os.environ.get(Environment.OUTPUT_VAR)
        return Path(custom_path) if custom_path else Path.cwd() / SampleDataPaths.OUTPUT_DB


# Logging configuration
class LogConfig:
    """Logging configuration."""
    LOG_FILE = LOGS_DIR / "process.log"
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_LEVEL = "INFO"
    MAX_BYTES = 10 * 1024 * 1024
    BACKUP_COUNT = 5

    @classmethod
    def get_config(cls) -> Dict[str, Any]:
        """Return logging settings resolved against the environment."""
        return {
            'log_level': os.getenv('LOG_LEVEL', cls.DEFAULT_LEVEL),
            'log_file': Path.cwd() / cls.LOG_FILE,
            'log_format': cls.LOG_FORMAT,
            'date_format': cls.LOG_DATE_FORMAT,
            'structured': os.getenv('LOG_FORMAT') == 'json',
            'enable_console': os.getenv('LOG_DISABLE_CONSOLE', '').lower() != 'true',
            'enable_file': os.getenv('LOG_DISABLE_FILE', '').lower() != 'true',
            'max_bytes': cls.MAX_BYTES,
            'backup_count': cls.BACKUP_COUNT,
        }


@dataclass
class BuildConfig:
    """Inputs for a single database build.

    Attributes:
        fixture_path: JSON fixture to load
        output_path: SQLite file to (re)create
        strict_counts: Abort when inserted rows disagree with the fixture totals
        staged: Build into a staging file and swap it into place when verified
    """
    fixture_path: Path
    output_path: Path
    strict_counts: bool = False
    staged: bool = False

    def __post_init__(self):
        self.fixture_path = Path(self.fixture_path)
        self.output_path = Path(self.output_path)

    @property
    def staging_path(self) -> Path:
        """Sibling file the staged build writes to before the final swap."""
        return self.output_path.with_name(self.output_path.name + SampleDataPaths.STAGING_SUFFIX)

    @classmethod
    def from_env(
        cls,
        fixture_path: Optional[Path] = None,
        output_path: Optional[Path] = None,
        **kwargs
    ) -> "BuildConfig":
        """Create a config, falling back to environment and default paths."""
        return cls(
            fixture_path=fixture_path or Environment.get_fixture_path(),
            output_path=output_path or Environment.get_output_path(),
            **kwargs
        )
