"""
Batch conversion module.

Turns a directory of polar files into AeroDyn15 airfoil tables, one per
input file, with an append-only processing log.

Key classes:
- ConversionOrchestrator: Per-file detect/parse/validate/extract/write loop
- DataValidator: Column count, finiteness and AOA coverage checks
- ProcessingLog: Per-run event log file
- FileResult, BatchSummary: Per-file and per-run results
"""

from .outcomes import ProcessingOutcome, FileStage, FileResult, BatchSummary
from .validator import DataValidator, ValidationResult
from .processing_log import ProcessingLog, LogEntry
from .orchestrator import ConversionOrchestrator, PolarWriter

__all__ = [
    # Results
    "ProcessingOutcome",
    "FileStage",
    "FileResult",
    "BatchSummary",
    # Validation
    "DataValidator",
    "ValidationResult",
    # Log
    "ProcessingLog",
    "LogEntry",
    # Orchestration
    "ConversionOrchestrator",
    "PolarWriter",
]
