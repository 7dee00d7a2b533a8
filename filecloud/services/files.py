"""Business logic for owner-scoped file operations.

Callers resolve the owner first with :func:`require_owner`; every query
below is filtered by that owner so one user can never see or touch
another user's files.
"""

import hashlib
import logging

from sqlalchemy.orm import Session

from filecloud.core.errors import MSG_INVALID_INPUT, InvalidInput, NotFound, Unauthorized
from filecloud.models.file import StoredFile
from filecloud.services import auth

logger = logging.getLogger(__name__)


def require_owner(db: Session, token: str | None) -> str:
    """Resolve the login that owns ``token``.

    Raises:
        Unauthorized: If the token is missing or unknown.
    """
    if not auth.is_valid(db, token):
        raise Unauthorized()
    user = auth.resolve_user(db, token)
    if user is None:
        raise Unauthorized()
    return user.login


def calculate_checksum(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def list_files(db: Session, owner: str, limit: int | None = None) -> list[StoredFile]:
    """List the owner's files, smallest first.

    Args:
        db: Database session.
        owner: Login of the owner.
        limit: Maximum number of files. None, zero and negative values
            all mean no limit.

    Returns:
        Files ordered by ascending size.
    """
    logger.info("Listing files for %s, limit=%s", owner, limit)

    query = (
        db.query(StoredFile)
        .filter(StoredFile.owner == owner)
        .order_by(StoredFile.size.asc(), StoredFile.id.asc())
    )
    if limit is not None and limit > 0:
        query = query.limit(limit)
    return query.all()


def save_file(db: Session, owner: str, filename: str | None, data: bytes | None) -> StoredFile:
    """Store a new file for the owner.

    Same-named files are never overwritten; each upload adds a record.

    Raises:
        InvalidInput: If the filename is blank or the payload is empty.
    """
    logger.info("Saving file %s for %s", filename, owner)

    if filename is None or not filename.strip():
        logger.error("Filename missing or blank")
        raise InvalidInput()
    if not data:
        logger.error("File payload missing or empty")
        raise InvalidInput()

    stored = StoredFile(
        owner=owner,
        filename=filename,
        size=len(data),
        hash=calculate_checksum(data),
        data=data,
    )
    db.add(stored)
    db.commit()
    db.refresh(stored)

    logger.info("File saved: %s (ID: %d, %d bytes)", filename, stored.id, stored.size)
    return stored


def find_file(db: Session, owner: str, filename: str | None) -> StoredFile | None:
    """First file matching (owner, filename), by ascending id."""
    if filename is None:
        return None
    return (
        db.query(StoredFile)
        .filter(StoredFile.owner == owner, StoredFile.filename == filename)
        .order_by(StoredFile.id.asc())
        .first()
    )


def delete_file(db: Session, owner: str, filename: str | None) -> None:
    """Delete one file matching (owner, filename).

    Raises:
        NotFound: If the owner has no such file.
    """
    logger.info("Deleting file %s for %s", filename, owner)

    stored = find_file(db, owner, filename)
    if stored is None:
        logger.warning("File not found for deletion: %s, owner %s", filename, owner)
        raise NotFound(MSG_INVALID_INPUT)

    db.delete(stored)
    db.commit()
    logger.info("File deleted: %s", filename)


def rename_file(db: Session, owner: str, old_filename: str | None, new_filename: str | None) -> StoredFile:
    """Rename one file in place.

    No check is made for an existing file called ``new_filename``.

    Raises:
        NotFound: If the owner has no file called ``old_filename``.
        InvalidInput: If the new name is blank.
    """
    logger.info("Renaming file %s -> %s for %s", old_filename, new_filename, owner)

    stored = find_file(db, owner, old_filename)
    if stored is None:
        logger.warning("File not found for rename: %s, owner %s", old_filename, owner)
        raise NotFound(MSG_INVALID_INPUT)

    if new_filename is None or not new_filename.strip():
        raise InvalidInput()

    stored.filename = new_filename
    db.commit()
    logger.info("File renamed: %s -> %s", old_filename, new_filename)
    return stored


def download_file(db: Session, owner: str, filename: str | None) -> StoredFile:
    """Fetch a file with its full content.

    Raises:
        NotFound: If the owner has no such file.
    """
    logger.info("Download requested: %s, owner %s", filename, owner)

    stored = find_file(db, owner, filename)
    if stored is None:
        logger.warning("File not found for download: %s, owner %s", filename, owner)
        raise NotFound()
    return stored
