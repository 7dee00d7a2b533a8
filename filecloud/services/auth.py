"""Session management: login, logout and token resolution."""

import logging
import secrets
from typing import Final

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash

from filecloud.core.errors import InvalidCredentials, InvalidToken
from filecloud.models.session import AuthSession
from filecloud.models.user import User, login_key_for

logger = logging.getLogger(__name__)

# 24 random bytes -> 32 url-safe base64 chars
_TOKEN_BYTES: Final = 24
_BEARER_PREFIX: Final = "Bearer "


def generate_token() -> str:
    return secrets.token_urlsafe(_TOKEN_BYTES)


def clean_token(token: str | None) -> str:
    """Strip an optional ``Bearer `` prefix.

    Returns:
        The bare token, or an empty string for a missing token.
    """
    if not token:
        return ""
    if token.startswith(_BEARER_PREFIX):
        token = token[len(_BEARER_PREFIX):]
    return token


def find_user_by_login(db: Session, login: str) -> User | None:
    return (
        db.query(User)
        .filter(User.login_key == login_key_for(login))
        .first()
    )


def login(db: Session, login: str, password: str) -> str:
    """Authenticate a user and return their session token.

    A user that already holds a session gets the same token back;
    a new token is only issued after logout.

    Args:
        db: Database session.
        login: Login, matched case-insensitively.
        password: Plain password to check against the stored hash.

    Returns:
        The session token.

    Raises:
        InvalidCredentials: If the user is unknown or the password is wrong.
    """
    logger.info("Login attempt for user %s", login)
    user = find_user_by_login(db, login or "")

    if user is None or not check_password_hash(user.password_hash, password or ""):
        logger.warning("Unknown user or wrong password for %s", login)
        raise InvalidCredentials()

    if user.session is not None:
        return user.session.token

    user_id = user.id
    token = generate_token()
    user.session = AuthSession(token=token)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent first login for this user committed its session first
        db.rollback()
        existing = db.query(AuthSession).filter(AuthSession.user_id == user_id).first()
        if existing is None:
            raise
        logger.info("Reusing concurrently issued session for user %s", login)
        return existing.token
    logger.info("New session token issued for user %s", user.login)
    return token


def logout(db: Session, token: str | None) -> None:
    """End the session holding ``token``.

    Raises:
        InvalidToken: If the token is missing or not held by any session.
    """
    bare = clean_token(token)
    logger.info("Logout attempt with token %s", bare[:8] or "<missing>")

    session = _find_session(db, bare)
    if session is None:
        raise InvalidToken()

    owner_login = session.user.login
    db.delete(session)
    db.commit()
    logger.info("Session ended for user %s", owner_login)


def resolve_user(db: Session, token: str | None) -> User | None:
    """Get the user holding ``token``.

    Returns:
        User if the token is known, None otherwise (including empty tokens).
    """
    session = _find_session(db, clean_token(token))
    if session is None:
        return None
    return session.user


def is_valid(db: Session, token: str | None) -> bool:
    if not clean_token(token):
        logger.warning("Empty auth token")
        return False
    valid = resolve_user(db, token) is not None
    if not valid:
        logger.warning("Unknown auth token: %s", clean_token(token)[:8])
    return valid


def _find_session(db: Session, bare_token: str) -> AuthSession | None:
    if not bare_token:
        return None
    return db.get(AuthSession, bare_token)
