"""
Crash CSV loading.
Reads the whole file into memory as normalized CrashRecords, in file order.
"""

from contextlib import suppress
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd
from loguru import logger
from tqdm import tqdm

from config import settings
from src.crash_stats.core import CrashRecord, DecodeError
from src.crash_stats.processing import FieldNormalizer


def _decode_error(err: Exception, phase: str, path: str) -> DecodeError:
    logger.error(f"Failed to load crash data ({phase}): {path} -> {err}")
    return DecodeError(f"{path}: {err}", phase=phase, path=path)


def _open_reader(path: str, chunk_size: int, encoding: str):
    try:
        # dtype=str + no NA filtering: every field arrives as its raw string
        return pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            chunksize=chunk_size,
            encoding=encoding,
        )
    except (OSError, ValueError) as e:
        raise _decode_error(e, DecodeError.STREAM_READ, path) from e


def _iter_chunks(reader, path: str) -> Iterator[pd.DataFrame]:
    chunks = iter(reader)
    while True:
        try:
            chunk = next(chunks)
        except StopIteration:
            return
        except (OSError, ValueError) as e:
            # pandas closes the reader itself once the data runs out
            at_end = isinstance(e.__context__, StopIteration)
            phase = DecodeError.END_OF_STREAM if at_end else DecodeError.ROW_DECODE
            raise _decode_error(e, phase, path) from e
        yield chunk


def _raw_row(row: Dict[str, Any]) -> Dict[str, str]:
    # Short rows are padded by pandas with NaN
    return {header: ("" if pd.isna(value) else str(value)) for header, value in row.items()}


def load_crash_data(
    path: Optional[str] = None,
    chunk_size: Optional[int] = None,
    show_progress: Optional[bool] = None,
    encoding: Optional[str] = None,
) -> List[CrashRecord]:
    """
    CSV -> List[CrashRecord]

    Header names lose all whitespace, values go through FieldNormalizer.
    Any read failure aborts the load with a DecodeError; no partial list is returned.

    :param path: CSV path (default: settings.DATA_FILE)
    :param chunk_size: rows per pandas chunk (default: settings.CHUNK_SIZE)
    """
    path = str(path or settings.DATA_FILE)
    chunk_size = chunk_size or settings.CHUNK_SIZE
    encoding = encoding or settings.CSV_ENCODING
    if show_progress is None:
        show_progress = settings.SHOW_PROGRESS

    logger.info(f"Loading crash data: {path}")
    reader = _open_reader(path, chunk_size, encoding)

    records: List[CrashRecord] = []
    loaded = False
    pbar = tqdm(desc="Loading crash data", unit="row", disable=not show_progress)
    try:
        for chunk in _iter_chunks(reader, path):
            chunk.columns = [FieldNormalizer.normalize_header(c) for c in chunk.columns]
            for row in chunk.to_dict(orient="records"):
                records.append(CrashRecord(FieldNormalizer.normalize_row(_raw_row(row))))
            pbar.update(len(chunk))
        loaded = True
    finally:
        pbar.close()
        if not loaded:
            # The load error is the one reported, not a follow-up close failure
            with suppress(OSError, ValueError):
                reader.close()

    try:
        reader.close()
    except (OSError, ValueError) as e:
        raise _decode_error(e, DecodeError.END_OF_STREAM, path) from e

    logger.info(f"Loaded {len(records)} crash records from {path}")
    return records
