# qrsheet/records.py

"""
Generation run: candidates in, numbered and flagged QR records out.

Every candidate becomes exactly one record, in input order. Invalid or
suspicious candidates are kept and flagged so the printed numbers match
what the user typed.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from qrsheet.collator import page_count
from qrsheet.config import GRID_COLS, GRID_ROWS, MAX_ITEMS
from qrsheet.sanitizer import check_suspicious, sanitize_for_display
from qrsheet.url_validator import is_valid_url, normalize_url

logger = logging.getLogger("qrsheet.records")


@dataclass(frozen=True)
class QRRecord:
    id: int
    url: str   # normalized; the QR payload
    is_valid: bool
    has_warning: bool
    warning_message: Optional[str] = None

    @property
    def display_url(self) -> str:
        return sanitize_for_display(self.url)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["display_url"] = self.display_url
        return data


@dataclass(frozen=True)
class BatchSummary:
    total: int
    invalid: int
    warnings: int
    pages: int
    truncated: bool = False


@dataclass(frozen=True)
class GenerationBatch:
    records: List[QRRecord]
    summary: BatchSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": [r.to_dict() for r in self.records],
            "summary": asdict(self.summary),
        }


def build_record(index: int, candidate: str) -> QRRecord:
    url = normalize_url(candidate)
    advisory = check_suspicious(url)
    return QRRecord(
        id=index,
        url=url,
        is_valid=is_valid_url(candidate),
        has_warning=advisory.has_warning,
        warning_message=advisory.message,
    )


def summarize(
    records: Sequence[QRRecord],
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    truncated: bool = False,
) -> BatchSummary:
    return BatchSummary(
        total=len(records),
        invalid=sum(1 for r in records if not r.is_valid),
        warnings=sum(1 for r in records if r.has_warning),
        pages=page_count(len(records), rows, cols),
        truncated=truncated,
    )


def generate_records(
    candidates: Sequence[str],
    max_items: int = MAX_ITEMS,
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
) -> GenerationBatch:
    """
    Number `candidates` 1..N. Anything past `max_items` is dropped and the
    summary says so.
    """
    truncated = len(candidates) > max_items
    if truncated:
        logger.info("truncating %d candidates to %d", len(candidates), max_items)

    records = [
        build_record(index, candidate)
        for index, candidate in enumerate(candidates[:max_items], start=1)
    ]
    return GenerationBatch(records=records, summary=summarize(records, rows, cols, truncated))
