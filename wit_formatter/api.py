from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Body, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from wit_formatter.env import env_bool, env_int, env_str
from wit_formatter.formatting.config import FormatConfig
from wit_formatter.formatting.edits import document_formatting_edits
from wit_formatter.formatting.formatter import format_document
from wit_formatter.logging_setup import ensure_file_logging
from wit_formatter.models import (
    EditsResponse,
    ErrorEnvelope,
    FormatOptions,
    FormatRequest,
    FormatResponse,
    PositionOut,
    TextEditOut,
)

logger = logging.getLogger(__name__)

WORKDIR = Path(__file__).resolve().parent.parent
LOG_DIR = Path(env_str("WIT_FORMATTER_LOG_DIR", str(WORKDIR / "logs")))

MAX_UPLOAD_BYTES = 8 * 1024 * 1024


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass
    return data.decode("utf-8", errors="replace")


def _error_code_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code in {400, 413, 422}:
        return "bad_request"
    return "internal_error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": ErrorEnvelope(code=_error_code_for_status(status_code), message=message).model_dump()},
    )


def _default_options() -> FormatOptions:
    return FormatOptions(
        tab_size=max(1, min(16, env_int("WIT_FORMATTER_TAB_SIZE", 4))),
        insert_spaces=env_bool("WIT_FORMATTER_INSERT_SPACES", True),
    )


def _format_from_options(opts: FormatOptions) -> FormatConfig:
    return FormatConfig(tab_size=int(opts.tab_size), insert_spaces=bool(opts.insert_spaces))


def _parse_options_json(options: str | None) -> FormatOptions:
    if not options:
        return _default_options()
    try:
        data = json.loads(options)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"options must be valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="options must be a JSON object")
    try:
        return FormatOptions.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        msg = errors[0].get("msg") if errors else str(e)
        raise HTTPException(status_code=400, detail=f"invalid options: {msg}") from e


async def _read_upload_limited(upload: UploadFile, limit: int) -> bytes:
    total = 0
    parts: list[bytes] = []
    while True:
        chunk = await upload.read(1024 * 1024)
        if not chunk:
            break
        total += len(chunk)
        if total > limit:
            raise HTTPException(status_code=413, detail=f"file too large (> {limit} bytes)")
        parts.append(chunk)
    return b"".join(parts)


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # Read LOG_DIR at startup so it can be pointed elsewhere before the app runs.
    log_file = ensure_file_logging(log_dir=LOG_DIR)
    if log_file is not None:
        logger.info("file logging enabled: %s", log_file)
    yield


app = FastAPI(lifespan=_lifespan)


@app.exception_handler(HTTPException)
async def _http_exception_handler(_request: Request, exc: HTTPException):
    return _error(int(exc.status_code), str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(_request: Request, exc: RequestValidationError):
    msg = "bad request"
    errors = exc.errors()
    if errors:
        msg = errors[0].get("msg") or msg
    return _error(400, msg)


@app.exception_handler(Exception)
async def _unhandled_exception_handler(_request: Request, exc: Exception):
    logger.exception("unhandled error: %s", exc)
    return _error(500, str(exc))


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.post("/api/v1/format", response_model=FormatResponse)
async def format_text(body: FormatRequest = Body(...)):
    result = format_document(body.text, _format_from_options(body.options))
    changed = result.text != body.text
    logger.info("formatted %s lines (changed=%s)", result.stats.get("lines", 0), changed)
    return FormatResponse(text=result.text, changed=changed, stats=result.stats)


@app.post("/api/v1/format/edits", response_model=EditsResponse)
async def format_edits(body: FormatRequest = Body(...)):
    edits = document_formatting_edits(body.text, _format_from_options(body.options))
    return EditsResponse(
        edits=[
            TextEditOut(
                start=PositionOut(line=e.start.line, character=e.start.character),
                end=PositionOut(line=e.end.line, character=e.end.character),
                new_text=e.new_text,
            )
            for e in edits
        ]
    )


@app.post("/api/v1/format/file")
async def format_file(file: UploadFile = File(...), options: str | None = Form(None)):
    opts = _parse_options_json(options)
    data = await _read_upload_limited(file, MAX_UPLOAD_BYTES)
    text = _decode_text(data)
    result = format_document(text, _format_from_options(opts))
    changed = result.text != text
    logger.info("formatted upload %r (changed=%s)", file.filename, changed)
    return PlainTextResponse(
        result.text,
        media_type="text/plain; charset=utf-8",
        headers={"X-Wit-Changed": "true" if changed else "false"},
    )
