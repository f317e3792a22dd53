"""
FastAPI routes for statement upload and cleaning.
Thin transport layer around StatementService.
"""
import uuid
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import get_settings
from core.exceptions import EmptyResultError, ExportError, FormatError
from core.exporters import ARCHIVE_FILENAME, build_archive
from core.logger import setup_logger
from services.statement_service import StatementService

logger = setup_logger(__name__)
settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title="Statement Cleaner",
    description="Split a statement workbook into credits.csv and debits.csv",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["POST"],
)

# Service instance
statement_service = StatementService(settings.layout())


@app.exception_handler(StarletteHTTPException)
async def plain_text_http_error(request: Request, exc: StarletteHTTPException):
    """Return HTTP errors as plain text."""
    message = str(exc.detail)
    if exc.status_code == 405:
        message = "Only POST method is allowed"
    return PlainTextResponse(message, status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def plain_text_validation_error(request: Request, exc: RequestValidationError):
    """Malformed multipart bodies are reported like a missing file."""
    return PlainTextResponse("Unable to read file from form", status_code=400)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "statement_cleaner",
        "version": "1.0.0"
    }


async def save_upload(upload: UploadFile) -> Path:
    """
    Write an uploaded file to the temp storage directory.

    Args:
        upload: Uploaded workbook

    Returns:
        Path of the stored copy

    Raises:
        HTTPException: If the file cannot be written
    """
    path = Path(settings.temp_storage_path) / f"uploaded-{uuid.uuid4().hex}.xlsx"
    try:
        with open(path, "wb") as f:
            f.write(await upload.read())
    except OSError as e:
        logger.error(f"Failed to store upload {upload.filename}: {e}")
        if path.exists():
            path.unlink()
        raise HTTPException(status_code=500, detail=f"Unable to save uploaded file: {e}")
    return path


@app.post("/upload")
async def upload_statement(file: Optional[UploadFile] = File(None)):
    """
    Clean an uploaded statement workbook.

    Args:
        file: Statement workbook (.xlsx)

    Returns:
        Zip archive with credits.csv and debits.csv
    """
    if file is None:
        raise HTTPException(status_code=400, detail="Unable to read file from form")

    logger.info(f"Received statement: {file.filename}")
    upload_path = await save_upload(file)

    try:
        credits_csv, debits_csv = await run_in_threadpool(statement_service.clean_file, str(upload_path))
        archive = build_archive(credits_csv, debits_csv)

    except FormatError as e:
        logger.error(f"Statement {file.filename} failed: {e.message} {e.details}")
        raise HTTPException(status_code=500, detail=f"Error processing file: {e.message}")

    except EmptyResultError as e:
        logger.warning(f"Statement {file.filename} produced no records")
        raise HTTPException(status_code=500, detail=e.message)

    except ExportError as e:
        raise HTTPException(status_code=500, detail=f"Error creating zip file: {e.message}")

    finally:
        try:
            if upload_path.exists():
                upload_path.unlink()
                logger.debug(f"Cleaned up: {upload_path}")
        except OSError as cleanup_error:
            logger.warning(f"Failed to cleanup {upload_path}: {cleanup_error}")

    logger.info(f"Statement {file.filename} cleaned")
    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f"attachment; filename={ARCHIVE_FILENAME}"}
    )
