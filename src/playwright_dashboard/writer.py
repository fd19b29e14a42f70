"""
Persistence of the rendered dashboard.
"""

import logging
from pathlib import Path
from typing import Union

from .exceptions import ReportWriteError

logger = logging.getLogger(__name__)

REPORT_FILENAME = "index.html"


def write_report(
    output_dir: Union[str, Path], document: str, filename: str = REPORT_FILENAME
) -> Path:
    """
    Write a rendered document into ``output_dir``.

    Missing parent directories are created.

    Args:
        output_dir: Destination directory
        document: Rendered document
        filename: Name of the file inside ``output_dir``

    Returns:
        Path of the written file

    Raises:
        ReportWriteError: If the directory cannot be created or the file written
    """
    output_dir = Path(output_dir)
    out_path = output_dir / filename
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        out_path.write_text(document, encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(output_dir, e)

    logger.info("Wrote %d bytes to %s", len(document.encode("utf-8")), out_path)
    return out_path
