"""
Pydantic schemas for configuration validation.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Literal


class ConversionConfig(BaseModel):
    """Top-level batch conversion configuration."""
    input_dir: str = Field(..., description="Directory holding the input polar files")
    input_pattern: str = Field(
        default="*.plr",
        description="Glob pattern selecting input files inside input_dir"
    )
    input_format: Literal["qblade-plr"] = Field(
        default="qblade-plr",
        description="Layout version of the input files"
    )
    output_subdir: str = Field(
        default="output_polars",
        description="Output subdirectory created inside input_dir"
    )
    output_suffix: str = Field(
        default="_AD15.txt",
        description="Suffix replacing the input extension for converted files"
    )
    log_filename: str = Field(
        default="processing_log.txt",
        description="Processing log file name (inside the output directory)"
    )
    merged_filename: str = Field(
        default="merged_polar.txt",
        description="Merged library file name (inside the output directory)"
    )
    merge: bool = Field(
        default=True,
        description="Merge converted tables into one library after conversion"
    )
    check_filename_reynolds: bool = Field(
        default=False,
        description="Warn when a Re<thousands> token in the file name disagrees with the header"
    )

    class Config:
        """Pydantic config."""
        extra = "forbid"  # Catch typos in YAML
        validate_assignment = True

    @field_validator('input_dir')
    @classmethod
    def validate_input_dir(cls, v):
        """Check path is not blank."""
        if not v or not v.strip():
            raise ValueError("input_dir cannot be empty")
        return v.strip()

    @field_validator('output_subdir', 'log_filename', 'merged_filename')
    @classmethod
    def validate_plain_name(cls, v):
        """Output names are single path components."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"'{v}' must be a plain file or directory name")
        return v

    @field_validator('output_suffix')
    @classmethod
    def validate_suffix(cls, v):
        """Converted files must stay visible to the merge glob."""
        if not v.endswith(".txt"):
            raise ValueError(f"output_suffix must end with '.txt', got '{v}'")
        return v
