# filecloud/seed.py
import logging

from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from filecloud.models.user import User, login_key_for
from filecloud.services.auth import find_user_by_login

logger = logging.getLogger(__name__)


def seed_users(db: Session, users: dict[str, str]) -> int:
    """Create the given login/password pairs unless the login is taken.

    Returns the number of users created.
    """
    created = 0
    for login, password in users.items():
        if find_user_by_login(db, login):
            continue
        db.add(User(
            login=login,
            login_key=login_key_for(login),
            password_hash=generate_password_hash(password),
        ))
        # flush so a later case-variant of the same login is seen as taken
        db.flush()
        created += 1

    db.commit()
    if created:
        logger.info("Seeded %d user(s)", created)
    return created
