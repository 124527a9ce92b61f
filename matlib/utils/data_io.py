# matlib/utils/data_io.py
"""
Newline-delimited numeric series input and output.

The driver exchanges data as plain text files holding one floating-point
literal per line with no header. Reading goes through pandas so that blank
lines are skipped and malformed rows are reported with their position.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

import numpy as np
import pandas as pd

from matlib.core.exceptions import raise_data_error
from matlib.core.types import FilePath, Vector

# Set up module-level logger
logger = logging.getLogger("matlib.utils.data_io")


def read_series(path: FilePath) -> Vector:
    """
    Read a file of one number per line into a 1-D float64 array.

    Args:
        path: Path to the text file

    Returns:
        Vector: The values in file order

    Raises:
        DataError: If the file is missing, empty, or holds a line that is not
                   a single number
    """
    path = Path(path)
    if not path.is_file():
        raise_data_error(
            f"Series file not found: {path}",
            data_name=str(path),
            issue="missing file"
        )

    try:
        frame = pd.read_csv(path, header=None, skip_blank_lines=True,
                            dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        raise_data_error(
            f"Series file is empty: {path}",
            data_name=str(path),
            issue="no values"
        )
    except pd.errors.ParserError as e:
        raise_data_error(
            f"Series file is not one value per line: {path}",
            data_name=str(path),
            issue="malformed row",
            details=str(e)
        )

    if frame.shape[1] != 1:
        raise_data_error(
            f"Series file has {frame.shape[1]} columns, expected one value per line: {path}",
            data_name=str(path),
            issue="multiple columns"
        )

    text = frame.iloc[:, 0].str.strip()
    text = text[text != ""].reset_index(drop=True)
    if text.empty:
        raise_data_error(
            f"Series file is empty: {path}",
            data_name=str(path),
            issue="no values"
        )

    values = pd.to_numeric(text, errors="coerce")
    bad = values.isna()
    if bad.any():
        row = int(np.flatnonzero(bad.to_numpy())[0])
        raise_data_error(
            f"Could not parse {text.iloc[row]!r} as a number in {path}",
            data_name=str(path),
            issue="unparsable value",
            index=row
        )

    logger.debug(f"Read {len(values)} values from {path}")
    return values.to_numpy(dtype=np.float64)


def write_series(values: Iterable[float], stream: Optional[TextIO] = None) -> None:
    """
    Write each value on its own line using the default float ``repr``.

    Args:
        values: Numbers to write
        stream: Destination text stream; defaults to standard output
    """
    if stream is None:
        stream = sys.stdout
    for value in values:
        stream.write(f"{float(value)!r}\n")
