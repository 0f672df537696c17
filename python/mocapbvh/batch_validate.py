#!/usr/bin/env python3
"""
Batch BVH Validator

Parses every BVH file under a directory using parallel workers and
reports which files fail and why.

Usage:
    python -m mocapbvh.batch_validate data/cmu
    python -m mocapbvh.batch_validate data/cmu --workers 8 --report report.json --strict
"""

import argparse
import json
import logging
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

from .config import ParserConfig
from .dataset import Dataset
from .errors import BVHError

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of parsing one file."""
    path: Path
    success: bool
    error_type: Optional[str] = None
    error: Optional[str] = None
    duration_seconds: float = 0.0
    joint_count: int = 0
    frame_count: int = 0


@dataclass
class ValidationReport:
    """Summary report of a batch validation."""
    start_time: str
    end_time: str
    duration_seconds: float
    total_files: int
    valid: int
    invalid: int
    total_frames: int
    failed_files: List[Dict] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


class BatchValidator:
    """
    Batch validator for BVH files.

    Each file is parsed independently, so files are spread over a thread
    pool. A file fails when parsing raises a BVHError or the file cannot
    be read.
    """

    def __init__(
        self,
        input_dir: Path,
        config: ParserConfig = None,
        max_workers: int = 4,
        pattern: str = "*.bvh",
    ):
        """
        Initialize the batch validator.

        Args:
            input_dir: Directory searched recursively for BVH files
            config: ParserConfig used for every file
            max_workers: Maximum parallel parse workers
            pattern: Glob pattern for BVH files
        """
        self.input_dir = Path(input_dir)
        self.config = config or ParserConfig()
        self.max_workers = max_workers
        self.pattern = pattern

        logger.info(f"BatchValidator initialized: input={input_dir}, workers={max_workers}")

    def discover_files(self) -> List[Path]:
        """Find all BVH files under the input directory."""
        if not self.input_dir.exists():
            logger.error(f"Input directory does not exist: {self.input_dir}")
            return []

        files = sorted(p for p in self.input_dir.rglob(self.pattern) if p.is_file())
        logger.info(f"Discovered {len(files)} BVH files")
        return files

    def validate_single(self, path: Path) -> ValidationResult:
        """Parse one file and record the outcome."""
        start_time = time.time()

        try:
            dataset = Dataset.from_file(path, self.config)
        except (BVHError, OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to parse {path}: {type(e).__name__}: {e}")
            return ValidationResult(
                path=path,
                success=False,
                error_type=type(e).__name__,
                error=str(e),
                duration_seconds=time.time() - start_time,
            )

        return ValidationResult(
            path=path,
            success=True,
            duration_seconds=time.time() - start_time,
            joint_count=len(dataset.joint_names),
            frame_count=sum(m.frame_count for m in dataset.motions),
        )

    def validate_all(self, files: List[Path], progress: bool = True) -> List[ValidationResult]:
        """Validate all files in parallel."""
        if not files:
            logger.info("No files to validate")
            return []

        results = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self.validate_single, path) for path in files]

            pbar = tqdm(
                total=len(files),
                desc="Validating",
                unit="file",
                ncols=80,
                disable=not progress,
            )
            for future in as_completed(futures):
                results.append(future.result())
                pbar.update(1)
            pbar.close()

        results.sort(key=lambda r: r.path)
        return results

    def generate_report(
        self,
        results: List[ValidationResult],
        start_time: datetime,
        end_time: datetime,
    ) -> ValidationReport:
        """Generate summary report from results."""
        return ValidationReport(
            start_time=start_time.isoformat(),
            end_time=end_time.isoformat(),
            duration_seconds=(end_time - start_time).total_seconds(),
            total_files=len(results),
            valid=sum(1 for r in results if r.success),
            invalid=sum(1 for r in results if not r.success),
            total_frames=sum(r.frame_count for r in results if r.success),
            failed_files=[
                {
                    'path': str(r.path),
                    'error_type': r.error_type,
                    'error': r.error,
                }
                for r in results if not r.success
            ],
        )

    def save_report(self, report: ValidationReport, filepath: Path):
        """Save report to JSON file."""
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(report.to_dict(), f, indent=2)
        logger.info(f"Report saved to {filepath}")

    def run(self, progress: bool = True) -> ValidationReport:
        start_time = datetime.now()
        results = self.validate_all(self.discover_files(), progress=progress)
        report = self.generate_report(results, start_time, datetime.now())

        print(f"\nValidated {report.total_files} files: {report.valid} valid, {report.invalid} invalid")
        for failure in report.failed_files[:10]:
            print(f"  {failure['path']}: {failure['error_type']}")
        if len(report.failed_files) > 10:
            print(f"  ... and {len(report.failed_files) - 10} more")

        return report


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
):
    """Configure logging for the command-line tools."""
    handlers = [logging.StreamHandler()]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Validate every BVH file under a directory',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  # Validate all files with 8 workers
  %(prog)s data/cmu -w 8

  # Reject files with trailing data or a missing header, save a report
  %(prog)s data/cmu --strict --report validation.json
        """
    )

    parser.add_argument('input_dir', help='Directory containing BVH files')
    parser.add_argument('-w', '--workers', type=int, default=4,
                        help='Number of parallel workers (default: 4)')
    parser.add_argument('--report', type=str, default=None,
                        help='Write a JSON report to this path')
    parser.add_argument('--strict', action='store_true',
                        help='Use strict parsing (header required, trailing data rejected)')
    parser.add_argument('--no-progress', action='store_true',
                        help='Hide the progress bar')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')

    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    config = ParserConfig.strict() if args.strict else ParserConfig()
    validator = BatchValidator(Path(args.input_dir), config, max_workers=args.workers)
    report = validator.run(progress=not args.no_progress)

    if args.report:
        validator.save_report(report, Path(args.report))

    return 1 if report.invalid > 0 else 0


if __name__ == '__main__':
    sys.exit(main())
