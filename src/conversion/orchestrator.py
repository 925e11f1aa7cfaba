"""
Batch conversion of polar files into AeroDyn15 airfoil tables.

Each file goes through:
    DETECTING -> PARSING -> VALIDATING -> EXTRACTING_METADATA -> WRITING -> DONE

A failure at PARSING, VALIDATING or WRITING ends that file in SKIPPED, with
the failing stage kept in FileResult.failed_stage, and the batch moves on to
the next file. Fallbacks at DETECTING and EXTRACTING_METADATA are kept as
stage-tagged warnings. Only directory-level problems abort the run.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from numpy.typing import NDArray

from core.errors import NoInputFilesError, PolarParseError
from core.io.job import ConversionJob
from core.io.metadata import MetadataExtractor, reynolds_from_filename
from core.io.polar_reader import PolarFileParser, detect_delimiter, read_lines
from .outcomes import BatchSummary, FileResult, FileStage, ProcessingOutcome
from .processing_log import ProcessingLog
from .validator import DataValidator

logger = logging.getLogger(__name__)

# writer(table, output_path, label, reynolds_millions) -> coefficients
PolarWriter = Callable[[NDArray, Path, str, float], object]

FILENAME_RE_TOLERANCE = 1e-3  # millions


def _default_writer() -> PolarWriter:
    from writers.ad15 import write_polar_ad15
    return write_polar_ad15


class ConversionOrchestrator:
    """
    Drive per-file processing for one conversion job.

    Usage:
        job = ConversionJob.for_directory('polars/')
        summary = ConversionOrchestrator(job).run()
        print(summary)
    """

    def __init__(self, job: ConversionJob, writer: Optional[PolarWriter] = None):
        self.job = job
        self.writer = writer if writer is not None else _default_writer()
        self.parser = PolarFileParser(job.polar_format)
        self.extractor = MetadataExtractor(job.polar_format)
        self.validator = DataValidator()

    def run(self) -> BatchSummary:
        """
        Convert every input file of the job.

        Returns:
            BatchSummary with one FileResult per input file, in name order

        Raises:
            FileNotFoundError: input directory does not exist
            NoInputFilesError: no file matches the input pattern
            OSError: output directory or log file cannot be created
        """
        input_dir = self.job.input_dir
        if not input_dir.is_dir():
            raise FileNotFoundError(f"Input directory not found: {input_dir}")

        files = self.job.input_files()
        if not files:
            raise NoInputFilesError(
                f"No '{self.job.config.input_pattern}' files found in {input_dir}"
            )

        self.job.output_dir.mkdir(parents=True, exist_ok=True)

        results: List[FileResult] = []
        with ProcessingLog.open(self.job.log_path) as log:
            log.info(f"Input directory: {input_dir} ({len(files)} files)")
            for path in files:
                result = self.process_file(path, log)
                log.record(result)
                results.append(result)

            summary = BatchSummary(
                results=tuple(results),
                output_dir=self.job.output_dir,
                log_path=self.job.log_path
            )
            log.info(
                f"Batch finished: {summary.num_written} of {summary.num_files} files converted"
            )

        return summary

    def process_file(self, path: Path, log: ProcessingLog) -> FileResult:
        """Run one file through all stages. Never raises for per-file problems."""
        name = path.name
        warnings: List[Tuple[FileStage, str]] = []

        def warn(stage: FileStage, message: str) -> None:
            warnings.append((stage, message))
            log.warning(message, name)

        def skipped(stage: FileStage, outcome: ProcessingOutcome, message: str, **extra) -> FileResult:
            return FileResult(
                input_path=path,
                outcome=outcome,
                stage=FileStage.SKIPPED,
                message=message,
                failed_stage=stage,
                warnings=tuple(warnings),
                **extra
            )

        # DETECTING
        delimiter = detect_delimiter(path, self.job.polar_format)
        if delimiter.is_fallback:
            warn(FileStage.DETECTING, f"{delimiter.fallback_reason}, assuming space")
        else:
            log.info(f"{delimiter.value.value}-delimited", name)

        # PARSING
        try:
            lines = read_lines(path)
            raw = self.parser.parse_lines(lines, delimiter.value, source=name)
        except (OSError, UnicodeDecodeError, PolarParseError) as e:
            return skipped(FileStage.PARSING, ProcessingOutcome.SKIPPED_UNREADABLE, str(e))

        # VALIDATING
        validation = self.validator.validate(raw)
        if not validation.accepted:
            return skipped(FileStage.VALIDATING, validation.outcome, validation.message)

        # EXTRACTING_METADATA
        reynolds = self.extractor.reynolds(lines)
        if reynolds.is_fallback:
            warn(
                FileStage.EXTRACTING_METADATA,
                f"{reynolds.fallback_reason}, Re defaults to {reynolds.value} million"
            )

        label = self.extractor.label(lines, default=path.stem)
        if label.is_fallback:
            warn(FileStage.EXTRACTING_METADATA, label.fallback_reason)

        if self.job.config.check_filename_reynolds:
            mismatch = self._check_filename_reynolds(path, reynolds.value)
            if mismatch:
                warn(FileStage.EXTRACTING_METADATA, mismatch)

        # WRITING
        output_path = self.job.output_path_for(path)
        try:
            coefficients = self.writer(validation.table, output_path, label.value, reynolds.value)
        except Exception as e:
            logger.debug("Writer failed for %s", name, exc_info=True)
            return skipped(
                FileStage.WRITING,
                ProcessingOutcome.FAILED_EXTERNAL_WRITE,
                f"{type(e).__name__}: {e}",
                reynolds=reynolds.value,
                label=label.value
            )

        warned = validation.outcome is ProcessingOutcome.WRITTEN_WITH_WARNING
        return FileResult(
            input_path=path,
            outcome=validation.outcome,
            stage=FileStage.DONE,
            message=validation.message,
            warnings=tuple(warnings),
            output_path=output_path,
            aoa_range=validation.aoa_range if warned else None,
            reynolds=reynolds.value,
            label=label.value,
            coefficients=coefficients
        )

    @staticmethod
    def _check_filename_reynolds(path: Path, reynolds: float) -> Optional[str]:
        """Mismatch message if the file name carries a different Reynolds number."""
        from_name = reynolds_from_filename(path.name)
        if from_name is None or abs(reynolds - from_name) <= FILENAME_RE_TOLERANCE:
            return None
        return (
            f"Reynolds mismatch (header: {reynolds:.3f} million, "
            f"file name: {from_name:.3f} million)"
        )
