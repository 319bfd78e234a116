# main.py

from __future__ import annotations

import json
import logging
import secrets
import time
from dataclasses import asdict
from typing import List

import sentry_sdk
from fastapi import FastAPI, File, Query, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response
from qrcode.exceptions import DataOverflowError

from qrsheet.collator import collate, page_count
from qrsheet.config import (
    CSV_EXTENSIONS,
    CSV_MIME_TYPES,
    GRID_COLS,
    GRID_ROWS,
    LOG_LEVEL,
    MAX_FILE_BYTES,
    MAX_ITEMS,
    SENTRY_DSN,
)
from qrsheet.csv_extractor import decode_csv_bytes, extract, split_pasted_text
from qrsheet.errors import (
    EmptyInputError,
    FileTooLargeError,
    InputRejected,
    NoCandidatesError,
    UnsupportedFileError,
)
from qrsheet.models import CollateResponse, GenerateRequest, GenerateResponse
from qrsheet.qr_render import build_print_sheet, render_qr_png
from qrsheet.records import GenerationBatch, generate_records
from qrsheet.url_validator import is_valid_url, normalize_url

# Init Sentry if configured
if SENTRY_DSN:
    sentry_sdk.init(dsn=SENTRY_DSN, traces_sample_rate=0.2)

logger = logging.getLogger("qrsheet")
logging.basicConfig(level=LOG_LEVEL, format="%(message)s")

app = FastAPI(title="QR Sheet API")


# ---------------------------------------------------------
# Error handlers + middleware
# ---------------------------------------------------------
@app.exception_handler(InputRejected)
async def input_rejected_handler(request: Request, exc: InputRejected):
    logger.info(
        json.dumps(
            {
                "event": "rejected",
                "path": request.url.path,
                "reason": type(exc).__name__,
                "status": exc.status_code,
            }
        )
    )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid request.", "detail": exc.errors()}, status_code=422)


# Return JSON for unexpected errors to avoid empty/HTML responses
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(json.dumps({"event": "error", "path": request.url.path, "error": str(exc)}))
    return JSONResponse({"error": "Internal server error."}, status_code=500)


@app.middleware("http")
async def request_log_and_headers(request: Request, call_next):
    request_id = secrets.token_hex(8)
    request.state.request_id = request_id
    start_time = time.time()
    response = await call_next(request)
    duration = round((time.time() - start_time) * 1000, 2)
    logger.info(
        json.dumps(
            {
                "event": "request",
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method,
                "status": response.status_code,
                "duration_ms": duration,
            }
        )
    )
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Referrer-Policy"] = "no-referrer"
    response.headers["Content-Security-Policy"] = "default-src 'self'; style-src 'self' 'unsafe-inline'; img-src 'self' data:; frame-ancestors 'none';"
    return response


# ---------------------------------------------------------
# Helpers
# ---------------------------------------------------------
def _candidates_from_text(text: str) -> List[str]:
    candidates = split_pasted_text(text or "")
    if not candidates:
        raise EmptyInputError("No links provided. Enter one URL per line.")
    return candidates


def _is_csv_upload(upload: UploadFile) -> bool:
    name = (upload.filename or "").lower()
    mime = (upload.content_type or "").split(";")[0].strip().lower()
    return name.endswith(CSV_EXTENSIONS) or mime in CSV_MIME_TYPES


async def _candidates_from_upload(upload: UploadFile) -> List[str]:
    if not _is_csv_upload(upload):
        raise UnsupportedFileError("Please upload a CSV file.")

    data = await upload.read(MAX_FILE_BYTES + 1)
    if len(data) > MAX_FILE_BYTES:
        raise FileTooLargeError(f"File too large. Max {MAX_FILE_BYTES} bytes.")
    if not data.strip():
        raise EmptyInputError("The uploaded file is empty.")

    candidates = extract(decode_csv_bytes(data))
    if not candidates:
        raise NoCandidatesError("No valid URLs found in the CSV file. Please check the format.")
    return candidates


def _run_generation(candidates: List[str], source: str) -> GenerationBatch:
    batch = generate_records(candidates, max_items=MAX_ITEMS, rows=GRID_ROWS, cols=GRID_COLS)
    logger.info(json.dumps({"event": "generate", "source": source, **asdict(batch.summary)}))
    return batch


def _sheet_response(batch: GenerationBatch) -> HTMLResponse:
    return HTMLResponse(build_print_sheet(batch.records, rows=GRID_ROWS, cols=GRID_COLS))


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/generate", response_model=GenerateResponse)
def generate(body: GenerateRequest):
    batch = _run_generation(_candidates_from_text(body.links), source="text")
    return batch.to_dict()


@app.post("/upload", response_model=GenerateResponse)
async def upload(file: UploadFile = File(...)):
    batch = _run_generation(await _candidates_from_upload(file), source="csv")
    return batch.to_dict()


@app.post("/sheet", response_class=HTMLResponse)
def sheet(body: GenerateRequest):
    batch = _run_generation(_candidates_from_text(body.links), source="text")
    return _sheet_response(batch)


@app.post("/sheet/upload", response_class=HTMLResponse)
async def sheet_upload(file: UploadFile = File(...)):
    batch = _run_generation(await _candidates_from_upload(file), source="csv")
    return _sheet_response(batch)


@app.get("/collate", response_model=CollateResponse)
def collate_grid(
    total: int = Query(..., ge=0, le=MAX_ITEMS),
    rows: int = Query(GRID_ROWS, ge=1, le=20),
    cols: int = Query(GRID_COLS, ge=1, le=20),
):
    return {
        "total": total,
        "rows": rows,
        "cols": cols,
        "pages": page_count(total, rows, cols),
        "layout": collate(total, rows, cols),
    }


@app.get("/qr.png")
def qr_png(data: str = Query(..., min_length=1)):
    if not is_valid_url(data):
        return JSONResponse({"error": "Invalid URL"}, status_code=400)
    try:
        png = render_qr_png(normalize_url(data.strip()))
    except DataOverflowError:
        return JSONResponse({"error": "URL too long for a QR code."}, status_code=413)
    return Response(content=png, media_type="image/png")
