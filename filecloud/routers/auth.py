import logging

from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.orm import Session

from filecloud.models.database import get_db
from filecloud.schemas import Credentials, TokenOut
from filecloud.services import auth as auth_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenOut)
def login(credentials: Credentials, db: Session = Depends(get_db)):
    logger.info("Login request for %s", credentials.login)
    token = auth_service.login(db, credentials.login, credentials.password)
    return TokenOut(auth_token=token)


@router.post("/logout")
def logout(
    auth_token: str | None = Header(None, alias="auth-token"),
    db: Session = Depends(get_db),
):
    auth_service.logout(db, auth_token)
    return Response(status_code=200)
