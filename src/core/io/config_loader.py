"""
YAML configuration loader with validation.
"""

from pathlib import Path
import yaml

from ..config.schemas import ConversionConfig
from .job import ConversionJob


class ConfigLoader:
    """Load and validate conversion settings from YAML files."""

    @staticmethod
    def load(filepath: str | Path) -> ConversionConfig:
        """
        Load configuration file.

        Args:
            filepath: Path to YAML config file

        Returns:
            Validated config
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(filepath, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f) or {}

        # Validate with Pydantic
        return ConversionConfig(**raw_config)

    @staticmethod
    def validate(filepath: str | Path) -> bool:
        """
        Validate config file without building a job.

        Returns:
            True if valid, raises ValidationError otherwise
        """
        ConfigLoader.load(filepath)
        return True

    @staticmethod
    def load_job(filepath: str | Path) -> ConversionJob:
        """
        Load a config file and return a ConversionJob.

        A relative input_dir is resolved against the config file's directory.
        """
        filepath = Path(filepath)
        config = ConfigLoader.load(filepath)
        return ConversionJob(config=config, base_dir=filepath.parent)
