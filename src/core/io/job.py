"""
ConversionJob - unified container for one batch run.

Provides clean access to:
- Validated configuration
- Input file discovery
- Derived output paths (output dir, log, merged library)
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List

from ..config.schemas import ConversionConfig
from .formats import PolarFileFormat, LibraryFormat, POLAR_FORMATS, AD15_LIBRARY


@dataclass
class ConversionJob:
    """
    Container for a conversion run.

    Usage:
        from core.io import ConfigLoader

        job = ConfigLoader.load_job('config.yaml')
        print(job.input_dir, job.output_dir)
        for path in job.input_files():
            ...
    """

    config: ConversionConfig
    base_dir: Path = Path(".")

    @classmethod
    def for_directory(cls, input_dir: str | Path, **overrides) -> ConversionJob:
        """Job with default settings for an input directory."""
        config = ConversionConfig(input_dir=str(input_dir), **overrides)
        return cls(config=config)

    # -------------------------------------------------------------------------
    # Inputs
    # -------------------------------------------------------------------------

    @property
    def input_dir(self) -> Path:
        """Input directory, resolved against base_dir when relative."""
        path = Path(self.config.input_dir)
        if not path.is_absolute():
            path = self.base_dir / path
        return path

    @property
    def polar_format(self) -> PolarFileFormat:
        return POLAR_FORMATS[self.config.input_format]

    def input_files(self) -> List[Path]:
        """Input files matching the pattern, in name order."""
        return sorted(p for p in self.input_dir.glob(self.config.input_pattern) if p.is_file())

    # -------------------------------------------------------------------------
    # Outputs
    # -------------------------------------------------------------------------

    @property
    def library_format(self) -> LibraryFormat:
        return AD15_LIBRARY

    @property
    def output_dir(self) -> Path:
        """Output directory (input_dir/output_polars)."""
        return self.input_dir / self.config.output_subdir

    @property
    def log_path(self) -> Path:
        return self.output_dir / self.config.log_filename

    @property
    def merged_path(self) -> Path:
        return self.output_dir / self.config.merged_filename

    def output_path_for(self, input_file: Path) -> Path:
        """Converted file path for an input file (NAME.plr -> NAME_AD15.txt)."""
        return self.output_dir / f"{input_file.stem}{self.config.output_suffix}"

    def __repr__(self) -> str:
        return (
            f"ConversionJob(input_dir='{self.input_dir}', "
            f"pattern='{self.config.input_pattern}')"
        )
