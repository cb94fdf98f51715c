# door_catalog/services/importers/csv_reader.py
"""
Lazy CSV row reader for the import commands.

Rows come back as plain ``{header: value}`` dicts of strings with empty cells
as ``""``. Column names are not validated here; an importer that asks for a
missing column simply gets an empty value.
"""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Union

import pandas as pd

from door_catalog.core.exceptions import CSVReadError, CSVParseError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 500

CSVRow = Dict[str, str]


def _cell_text(value) -> str:
    # short rows come back as NaN even with keep_default_na=False
    return "" if pd.isna(value) else str(value)


def _rows_from_chunks(reader, path: Path) -> Iterator[CSVRow]:
    header = None
    with reader:
        try:
            for chunk in reader:
                for values in chunk.itertuples(index=False, name=None):
                    if header is None:
                        header = [_cell_text(value).strip() for value in values]
                        continue
                    yield {column: _cell_text(value) for column, value in zip(header, values)}
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise CSVParseError(f"Malformed CSV in {path}: {e}") from e


def iter_csv_rows(path: Union[str, Path]) -> Iterator[CSVRow]:
    """
    Open a CSV file and return a lazy iterator over its rows.

    The file is opened immediately so a missing file fails here; parse
    errors surface while iterating. An empty file yields no rows.

    Raises:
        CSVReadError: If the file does not exist or cannot be read.
        CSVParseError: If the file is not well-formed delimited text.
    """
    path = Path(path)
    try:
        # header=None: the header line fixes the field count, so a row with
        # extra fields is a ParserError instead of an implicit index column
        reader = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            chunksize=CHUNK_SIZE,
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"CSV file {path} is empty")
        return iter(())
    except pd.errors.ParserError as e:
        raise CSVParseError(f"Malformed CSV in {path}: {e}") from e
    except OSError as e:
        raise CSVReadError(f"Cannot read CSV file {path}: {e}") from e

    return _rows_from_chunks(reader, path)


def read_csv_rows(path: Union[str, Path]) -> List[CSVRow]:
    """Read every row up front."""
    return list(iter_csv_rows(path))
