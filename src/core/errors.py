"""
Exception hierarchy for polar conversion and library merging.

Per-file problems are absorbed by the orchestrator; only the batch-level
errors below escape a conversion or merge run.
"""


class PolarConversionError(Exception):
    """Base class for all conversion and merge errors."""


class PolarParseError(PolarConversionError):
    """A polar file could not be read or yielded no numeric rows."""


class NoInputFilesError(PolarConversionError):
    """The input directory contains no files matching the input pattern."""


class NoMergeInputError(PolarConversionError):
    """No eligible converted files were found for the merge."""


class MergeError(PolarConversionError):
    """The merged library would be inconsistent (e.g. missing table-count field)."""
