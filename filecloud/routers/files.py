import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Header, UploadFile, File as FastAPIFile, Form, Query
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.orm import Session

from filecloud.core.config import get_settings
from filecloud.core.errors import PayloadTooLarge
from filecloud.models.database import get_db
from filecloud.schemas import FileRename, FileSummary
from filecloud.services import files as file_service

router = APIRouter()
logger = logging.getLogger(__name__)


# --- helper: resolve the owner from the auth-token header ---
def get_current_owner(
    auth_token: str | None = Header(None, alias="auth-token"),
    db: Session = Depends(get_db),
) -> str:
    return file_service.require_owner(db, auth_token)


def content_disposition(filename: str) -> str:
    try:
        filename.encode("latin-1")
    except UnicodeEncodeError:
        # header values must be latin-1; fall back to RFC 5987 encoding
        return f"attachment; filename*=UTF-8''{quote(filename)}"
    # quoted-string: no CR/LF, escape backslash and quote
    safe = filename.replace("\r", "").replace("\n", "")
    safe = safe.replace("\\", "\\\\").replace('"', '\\"')
    return f'attachment; filename="{safe}"'


# --- list owner's files, smallest first ---
@router.get("/list", response_model=list[FileSummary])
def list_files(
    limit: int | None = None,
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    return file_service.list_files(db, owner, limit)


# --- upload a new file ---
@router.post("/file", response_class=PlainTextResponse)
def upload_file(
    filename: str | None = Form(None),
    file: UploadFile | None = FastAPIFile(None),
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    content = file.file.read() if file is not None else None

    max_size = get_settings().max_upload_size
    if content is not None and len(content) > max_size:
        logger.warning("Upload of %s rejected: %d bytes > %d", filename, len(content), max_size)
        raise PayloadTooLarge()

    file_service.save_file(db, owner, filename, content)
    return "ok"


# --- delete a file ---
@router.delete("/file")
def delete_file(
    filename: str | None = Query(None),
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    file_service.delete_file(db, owner, filename)
    return Response(status_code=200)


# --- rename a file ---
@router.put("/file")
def rename_file(
    body: FileRename,
    filename: str | None = Query(None),
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    file_service.rename_file(db, owner, filename, body.filename)
    return Response(status_code=200)


# --- download a file ---
@router.get("/file")
def download_file(
    filename: str | None = Query(None),
    owner: str = Depends(get_current_owner),
    db: Session = Depends(get_db),
):
    stored = file_service.download_file(db, owner, filename)
    return Response(
        content=stored.data,
        media_type="application/octet-stream",
        headers={"Content-Disposition": content_disposition(stored.filename)},
    )
