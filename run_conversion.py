"""
Convert a folder of polar files into AeroDyn15 tables and merge them.

Usage:
    python run_conversion.py <input_dir> [options]
    python run_conversion.py --config conversion.yaml

Examples:
    # Convert and merge
    python run_conversion.py polars/

    # Convert only
    python run_conversion.py polars/ --no-merge

    # Re-merge an existing output_polars folder
    python run_conversion.py polars/ --merge-only
"""

import sys
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from core.errors import PolarConversionError
from core.io import ConfigLoader, ConversionJob
from core.logging_config import setup_logging
from conversion import ConversionOrchestrator
from merging import TableMerger


def build_job(args) -> ConversionJob:
    if args.config:
        job = ConfigLoader.load_job(args.config)
        if args.input_dir:
            job.config.input_dir = args.input_dir
            job.base_dir = Path(".")
    elif args.input_dir:
        job = ConversionJob.for_directory(args.input_dir)
    else:
        raise ValueError("Give an input directory or --config")

    if args.no_merge:
        job.config.merge = False
    if args.check_filename_re:
        job.config.check_filename_reynolds = True
    return job


def main():
    parser = argparse.ArgumentParser(description="Convert polar files to AeroDyn15 airfoil tables")
    parser.add_argument("input_dir", type=str, nargs="?", help="Directory with input polar files")
    parser.add_argument("--config", type=str, help="Path to YAML config file")
    parser.add_argument("--no-merge", action="store_true", help="Skip the merge step")
    parser.add_argument("--merge-only", action="store_true",
                        help="Only merge an existing output directory")
    parser.add_argument("--check-filename-re", action="store_true",
                        help="Cross-check Reynolds number against Re<thousands> in file names")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output")
    args = parser.parse_args()

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        job = build_job(args)
    except Exception as e:
        print(f"Error loading configuration: {e}")
        sys.exit(1)

    if not args.merge_only:
        try:
            summary = ConversionOrchestrator(job).run()
        except (PolarConversionError, OSError) as e:
            print(f"Error: {e}")
            sys.exit(1)

        print(summary)
        print(f"Batch processing finished. Log saved to {summary.log_path}")

        if summary.num_written == 0:
            print("No files were converted, nothing to merge.")
            sys.exit(1)

    if job.config.merge or args.merge_only:
        try:
            result = TableMerger.for_job(job).merge(job.output_dir, job.merged_path)
        except (PolarConversionError, OSError) as e:
            print(f"Merge failed: {e}")
            sys.exit(1)

        print(f"Merged {result.table_count} tables into {result.output_path}")
        if result.skipped_files:
            print(f"Skipped: {', '.join(p.name for p in result.skipped_files)}")
        if not args.merge_only:
            stale = result.stale_files(summary.written_paths)
            if stale:
                print(f"Warning: merged files not written by this run: "
                      f"{', '.join(p.name for p in stale)}")

    print("Done.")


if __name__ == "__main__":
    main()
