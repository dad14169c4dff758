"""Main thumbnail extractor orchestration class."""

import json
import logging
import struct
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from rich.console import Console
from rich.table import Table

from .config import ExtractionSettings
from .dimensions import read_dimensions
from .encoder import encode_image
from .errors import InputFileError, Skip, SkipReason
from .file_manager import FileManager
from .payload import PixelBuffer, extract_payload
from .scanner import MarkerScanner
from .stream import ByteStream


@dataclass(frozen=True)
class ExtractedImage:
    """One successfully read record, ready for encoding."""

    pixels: PixelBuffer
    sequence: int
    offset: int


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ThumbnailExtractor:
    """Main orchestrator for thumbnail extraction."""

    def __init__(self, settings: Optional[ExtractionSettings] = None) -> None:
        """
        Initialize thumbnail extractor.

        Args:
            settings: Extraction settings (defaults when omitted)
        """
        self.settings = settings or ExtractionSettings()
        self.scanner = MarkerScanner(self.settings.marker_bytes)
        self.file_manager = FileManager(output_dir=self.settings.output_directory)

        # Setup logging
        self._setup_logging()

        # Track extraction results
        self.extraction_results: List[Dict] = []
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if self.settings.log_file:
            self.settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(self.settings.log_file))

        logging.basicConfig(
            level=getattr(logging, self.settings.log_level),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=handlers,
        )
        self.logger = logging.getLogger(__name__)

    def iter_records(
        self, stream: ByteStream
    ) -> Iterator[Union[ExtractedImage, Skip]]:
        """
        Walk the stream record by record.

        Each marker produces exactly one item: the extracted image, or the
        skip outcome explaining why it was abandoned. Sequence numbers start
        at 1 for every call and are assigned after a successful payload read.

        Args:
            stream: Stream over one input file

        Yields:
            ExtractedImage or Skip per marker found
        """
        sequence = 0

        while True:
            match = self.scanner.find_next(stream)
            if match is None:
                return

            stream.skip(self.settings.delimiter_length)

            dimensions = read_dimensions(stream)
            if isinstance(dimensions, Skip):
                yield Skip(dimensions.reason, dimensions.message, match.offset)
                continue

            pixels = extract_payload(
                stream,
                dimensions,
                max_width=self.settings.max_width,
                max_height=self.settings.max_height,
                channel_order=self.settings.channel_order,
            )
            if isinstance(pixels, Skip):
                yield Skip(pixels.reason, pixels.message, match.offset)
                continue

            sequence += 1
            yield ExtractedImage(pixels=pixels, sequence=sequence, offset=match.offset)

    def save_image(
        self, image: ExtractedImage, input_path: Union[str, Path]
    ) -> Union[Path, Skip]:
        """
        Encode one image and write it to the output directory.

        Returns:
            Path written, or an io_error skip if encoding or writing failed
        """
        output_format = self.settings.output_format
        output_path = self.file_manager.output_path(
            input_path, image.sequence, output_format
        )

        try:
            data = encode_image(image.pixels, output_format)
            self.file_manager.write_atomic(output_path, data)
        except (OSError, ValueError, struct.error) as e:
            return Skip(
                SkipReason.IO_ERROR,
                f"failed to write {output_path}: {e}",
                image.offset,
            )

        return output_path

    def extract_file(self, input_path: Union[str, Path]) -> Dict:
        """
        Extract every embedded image from a single input file.

        Args:
            input_path: File to scan

        Returns:
            Dictionary with extraction results

        Raises:
            InputFileError: If the input file cannot be opened or read
        """
        input_path = Path(input_path)
        self.logger.info(f"Starting extraction: {input_path}")

        extraction_start = time.time()
        result = {
            "input": str(input_path),
            "start_time": _utc_now(),
            "success": False,
            "markers_found": 0,
            "images_extracted": 0,
            "images_written": 0,
            "outputs": [],
            "skipped": [],
            "errors": [],
        }

        try:
            handle = input_path.open("rb")
        except OSError as e:
            message = f"Cannot open input file {input_path}: {e}"
            result["errors"].append(message)
            self.extraction_results.append(result)
            raise InputFileError(message) from e

        try:
            with handle:
                stream = ByteStream(handle, chunk_size=self.settings.chunk_size)
                for record in self.iter_records(stream):
                    result["markers_found"] += 1

                    if isinstance(record, Skip):
                        self.logger.warning(
                            f"Skipped record in {input_path.name}: {record}"
                        )
                        result["skipped"].append(self._skip_entry(record))
                        continue

                    result["images_extracted"] += 1
                    written = self.save_image(record, input_path)
                    if isinstance(written, Skip):
                        self.logger.error(f"Image #{record.sequence} lost: {written}")
                        result["skipped"].append(self._skip_entry(written))
                        result["errors"].append(written.message)
                        continue

                    result["images_written"] += 1
                    result["outputs"].append(
                        {
                            "path": str(written),
                            "sequence": record.sequence,
                            "offset": record.offset,
                            "width": record.pixels.width,
                            "height": record.pixels.height,
                        }
                    )
                    self.logger.info(
                        f"Wrote {written} "
                        f"({record.pixels.width}x{record.pixels.height}, "
                        f"offset {record.offset})"
                    )

            result["success"] = True
            self.logger.info(
                f"Completed extraction: {input_path} - "
                f"{result['images_written']} images written"
            )

        except OSError as e:
            message = f"Error reading input file {input_path}: {e}"
            result["errors"].append(message)
            raise InputFileError(message) from e

        finally:
            extraction_time = time.time() - extraction_start
            result["extraction_time_seconds"] = round(extraction_time, 2)
            result["end_time"] = _utc_now()
            self.extraction_results.append(result)

        return result

    def scan_file(self, input_path: Union[str, Path]) -> List[Dict]:
        """
        List the records of a file without writing anything.

        Raises:
            InputFileError: If the input file cannot be opened or read
        """
        input_path = Path(input_path)
        records = []
        try:
            with input_path.open("rb") as handle:
                stream = ByteStream(handle, chunk_size=self.settings.chunk_size)
                for record in self.iter_records(stream):
                    if isinstance(record, Skip):
                        records.append(self._skip_entry(record))
                    else:
                        records.append(
                            {
                                "offset": record.offset,
                                "sequence": record.sequence,
                                "width": record.pixels.width,
                                "height": record.pixels.height,
                            }
                        )
        except OSError as e:
            raise InputFileError(f"Cannot read input file {input_path}: {e}") from e

        return records

    def extract_all(self, input_paths: List[Union[str, Path]]) -> None:
        """
        Extract images from several input files in turn.

        An input that cannot be opened is recorded as failed and the
        remaining inputs are still processed.
        """
        self.start_time = time.time()
        for input_path in input_paths:
            try:
                self.extract_file(input_path)
            except InputFileError as e:
                self.logger.error(str(e))
        self.end_time = time.time()

    @staticmethod
    def _skip_entry(skip: Skip) -> Dict:
        return {
            "offset": skip.offset,
            "reason": skip.reason.value,
            "message": skip.message,
        }

    def generate_summary_report(self) -> Dict:
        """
        Generate summary report over every file processed.

        Returns:
            Dictionary with complete extraction summary
        """
        if not self.extraction_results:
            return {"error": "No extraction results available"}

        failed_files = [r for r in self.extraction_results if not r.get("success")]

        skip_counts: Dict[str, int] = {}
        for r in self.extraction_results:
            for skipped in r.get("skipped", []):
                reason = skipped["reason"]
                skip_counts[reason] = skip_counts.get(reason, 0) + 1

        total_time = (
            (self.end_time - self.start_time)
            if (self.end_time and self.start_time)
            else sum(
                r.get("extraction_time_seconds", 0) for r in self.extraction_results
            )
        )

        return {
            "extraction_summary": {
                "generated_at": _utc_now(),
                "total_files": len(self.extraction_results),
                "failed_files": len(failed_files),
                "markers_found": sum(
                    r["markers_found"] for r in self.extraction_results
                ),
                "images_extracted": sum(
                    r["images_extracted"] for r in self.extraction_results
                ),
                "images_written": sum(
                    r["images_written"] for r in self.extraction_results
                ),
                "skipped_by_reason": skip_counts,
                "total_extraction_time_seconds": round(total_time, 2),
            },
            "configuration": {
                "markers": self.settings.markers,
                "max_width": self.settings.max_width,
                "max_height": self.settings.max_height,
                "output_format": self.settings.output_format,
                "channel_order": self.settings.channel_order,
                "output_directory": str(self.settings.output_directory),
            },
            "output_summary": self.file_manager.get_output_summary(),
            "extraction_results": self.extraction_results,
        }

    def save_summary_report(self, report_path: Union[str, Path]) -> Path:
        """
        Save summary report to a JSON file.

        Returns:
            Path to saved report
        """
        summary = self.generate_summary_report()
        report_path = Path(report_path)
        report_path.parent.mkdir(parents=True, exist_ok=True)

        with report_path.open("w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2, default=str)

        self.logger.info(f"Summary report saved to: {report_path}")
        return report_path

    def print_summary(self, console: Optional[Console] = None) -> None:
        """Print human-readable summary to the console."""
        console = console or Console()
        if not self.extraction_results:
            console.print("No extraction results available.")
            return

        summary = self.generate_summary_report()["extraction_summary"]

        table = Table(title="Thumbnail Extraction Summary", show_header=False)
        table.add_column("Metric", style="dim")
        table.add_column("Value", style="green")
        table.add_row("Files", str(summary["total_files"]))
        table.add_row("Markers Found", str(summary["markers_found"]))
        table.add_row("Images Written", str(summary["images_written"]))
        for reason, count in sorted(summary["skipped_by_reason"].items()):
            table.add_row(f"Skipped ({reason})", str(count))
        table.add_row("Time", f"{summary['total_extraction_time_seconds']:.2f}s")
        console.print(table)

        for r in self.extraction_results:
            for error in r.get("errors", []):
                console.print(f"[red]✗[/red] {r['input']}: {error}")
