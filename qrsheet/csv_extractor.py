# qrsheet/csv_extractor.py

"""
Candidate extraction from pasted text and uploaded CSV files.

CSV exports come in a few shapes: a plain list of full URLs, a column of
bare referral paths ("referral?code=ABC123"), or wider sheets where the
referral path sits in some other column. `extract` handles all three and
returns one candidate per row, in row order.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import List, Optional, Sequence

from qrsheet.config import REFERRAL_BASE_URL
from qrsheet.errors import CsvFormatError

logger = logging.getLogger("qrsheet.csv_extractor")

REFERRAL_PREFIX = "referral"
HEADER_MARKER = "url"


# ---------------------------------------------------------
# PASTED TEXT
# ---------------------------------------------------------

def split_pasted_text(text: str) -> List[str]:
    """One candidate per non-blank line, trimmed."""
    return [line.strip() for line in text.splitlines() if line.strip()]


# ---------------------------------------------------------
# CSV
# ---------------------------------------------------------

def decode_csv_bytes(data: bytes) -> str:
    # utf-8-sig drops the BOM Excel likes to prepend
    return data.decode("utf-8-sig", errors="replace")


def _parse_rows(raw_text: str) -> List[List[str]]:
    try:
        rows = list(csv.reader(io.StringIO(raw_text)))
    except csv.Error as exc:
        raise CsvFormatError(f"Could not parse CSV file: {exc}") from exc
    return [row for row in rows if any(cell.strip() for cell in row)]


def _is_header(row: Sequence[str]) -> bool:
    return bool(row) and HEADER_MARKER in row[0].lower()


def _referral_url(cell: str) -> str:
    return REFERRAL_BASE_URL + cell.strip()


def _find_referral_cell(row: Sequence[str]) -> Optional[str]:
    for cell in row:
        if cell.strip().lower().startswith(REFERRAL_PREFIX):
            return cell
    return None


def _candidate_from_row(row: Sequence[str]) -> str:
    referral = _find_referral_cell(row)
    if referral is not None:
        return _referral_url(referral)

    first = row[0].strip()
    if first.startswith(("http://", "https://")):
        return first
    if first.lower().startswith(REFERRAL_PREFIX):
        return _referral_url(first)
    # unknown format: let the validator flag it
    return first


def extract(raw_text: str) -> List[str]:
    candidates: List[str] = []

    for index, row in enumerate(_parse_rows(raw_text)):
        if index == 0 and _is_header(row):
            logger.debug("skipping header row %r", row)
            continue

        candidate = _candidate_from_row(row)
        if candidate:
            candidates.append(candidate)

    return candidates
