"""Output file operations with pathlib and atomic replacement."""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

from .encoder import FILE_EXTENSIONS


class FileManager:
    """Manages output files for thumbnail extraction."""

    def __init__(self, output_dir: Path) -> None:
        """
        Initialize file manager.

        Args:
            output_dir: Directory extracted images are written to
        """
        self.output_dir = Path(output_dir)
        # Keyed by path so overwrites are counted once
        self.written: Dict[Path, None] = {}

    def output_path(
        self, input_path: Union[str, Path], sequence: int, output_format: str
    ) -> Path:
        """
        Build the output path for one extracted image.

        Args:
            input_path: File the image was extracted from
            sequence: 1-based sequence number within that file
            output_format: Output format name (bmp, png)

        Returns:
            <output_dir>/<input_stem>_extracted_<sequence><ext>
        """
        extension = FILE_EXTENSIONS[output_format]
        name = f"{Path(input_path).stem}_extracted_{sequence}{extension}"
        return self.output_dir / name

    def write_atomic(self, path: Path, data: bytes) -> Path:
        """
        Write data to path, replacing any existing file.

        The data goes to a temporary file in the same directory first, so
        an interrupted write never leaves a partial file under path.

        Raises:
            OSError: If the file cannot be written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            # mkstemp creates owner-only files
            os.chmod(temp_name, 0o644)
            os.replace(temp_name, path)
        except BaseException:
            try:
                os.unlink(temp_name)
            except FileNotFoundError:
                pass
            raise

        self.written[path] = None
        return path

    def get_output_summary(self) -> Dict[str, Any]:
        """
        Summarize files written by this manager.

        Returns:
            Dictionary with count, total size and paths
        """
        total_size = 0
        for path in self.written:
            try:
                total_size += path.stat().st_size
            except OSError:
                pass

        return {
            "output_directory": str(self.output_dir),
            "total_files": len(self.written),
            "total_size_bytes": total_size,
            "files": [str(path) for path in self.written],
        }
