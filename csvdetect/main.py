from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from . import rules
from .errors import CsvError
from .models import ParseResponse, HealthResponse
from .parse import parse_detect_format, parse_with_format
from .rows import Rows, remove_empty_rows, trim_space, uniform_column_rows

app = FastAPI(
    title="csvdetect",
    description="CSV dialect detection and fault tolerant parsing",
    version="0.1.0",
)


def _check_upload(file: UploadFile) -> None:
    if not (file.filename or "").lower().endswith(rules.ACCEPTED_EXTENSIONS):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")


def _parse_response(rows: Rows, fmt, drop_empty: bool, uniform_columns: bool, trim: bool) -> dict:
    if trim:
        trim_space(rows)
    if uniform_columns:
        rows = uniform_column_rows(rows)
    if drop_empty:
        rows = remove_empty_rows(rows)

    non_empty = [row for row in rows if row]
    return {
        "format": fmt,
        "rows": rows,
        "summary": {
            "rows": len(rows),
            "non_empty_rows": len(non_empty),
            "columns": max(len(row) for row in non_empty) if non_empty else None,
        },
    }


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/detect", response_model=ParseResponse)
async def detect_csv(
    file: UploadFile = File(...),
    drop_empty: bool = False,
    uniform_columns: bool = False,
    trim: bool = False,
):
    _check_upload(file)

    raw = await file.read()
    try:
        rows, fmt = parse_detect_format(raw)
    except CsvError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _parse_response(rows, fmt, drop_empty, uniform_columns, trim)


@app.post("/parse", response_model=ParseResponse)
async def parse_csv(
    file: UploadFile = File(...),
    encoding: str = Form("UTF-8"),
    separator: str = Form(rules.DEFAULT_SEPARATOR),
    newline: str = Form("CRLF"),
    drop_empty: bool = False,
    uniform_columns: bool = False,
    trim: bool = False,
):
    _check_upload(file)

    fmt = {
        "encoding": encoding,
        "separator": separator,
        # LF, CRLF, LFCR or the literal sequence
        "newline": rules.NEWLINE_NAMES.get(newline.upper(), newline),
    }
    raw = await file.read()
    try:
        rows = parse_with_format(raw, fmt)
    except CsvError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _parse_response(rows, fmt, drop_empty, uniform_columns, trim)
