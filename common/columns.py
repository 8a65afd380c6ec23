"""
Column detection for files added in the import step.
Reads only the header (or the first records) of an uploaded file with pandas
so the labeling setup can offer the data columns as variables.
"""

import io
import json
import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from . import constants

logger = logging.getLogger(__name__)

PathOrBuffer = Union[str, Path, io.BytesIO]


def is_tabular(filename: str) -> bool:
    """Whether a file needs a CSV handling decision before it can be imported."""
    return Path(filename).suffix.lower() in constants.TABULAR_EXTENSIONS


def is_supported(filename: str) -> bool:
    """Whether the import step accepts the file at all."""
    return Path(filename).suffix.lower() in constants.SUPPORTED_IMPORT_EXTENSIONS


def detect_columns(filename: str, source: PathOrBuffer) -> List[str]:
    """
    Detect the data columns of an import file.

    CSV/TSV files contribute their header row. JSON files contribute the keys
    of their records; records wrapped as ``{"data": {...}}`` contribute the
    keys of the wrapped object. Plain text files contribute a single ``text``
    column.

    Args:
        filename: Name of the file, used to pick the reader
        source: Path to the file or an in-memory buffer with its content

    Returns:
        Ordered list of column names, empty when nothing could be detected
    """
    suffix = Path(filename).suffix.lower()

    try:
        if suffix in constants.TABULAR_DELIMITERS:
            header = pd.read_csv(source, sep=constants.TABULAR_DELIMITERS[suffix], nrows=0)
            return [str(column) for column in header.columns]

        if suffix == ".json":
            return _detect_json_columns(source)

        if suffix == ".txt":
            return ["text"]

    except (ValueError, OSError, pd.errors.ParserError) as e:
        logger.warning(f"Could not detect columns of {filename}: {str(e)}")
        return []

    return []


def _detect_json_columns(source: PathOrBuffer) -> List[str]:
    """Collect column names from a JSON task list."""
    if isinstance(source, io.BytesIO):
        source.seek(0)
        payload = json.load(source)
    else:
        with open(source, "r", encoding="utf-8") as handle:
            payload = json.load(handle)

    records = payload if isinstance(payload, list) else [payload]
    records = [record for record in records if isinstance(record, dict)]
    if not records:
        return []

    if all(isinstance(record.get("data"), dict) for record in records):
        records = [record["data"] for record in records]

    frame = pd.json_normalize(records, max_level=0)
    return [str(column) for column in frame.columns]
