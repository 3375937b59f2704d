"""Shared dependencies for resolving the current user."""

import logging
from typing import Annotated, Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models
import auth
from database import get_db
from exceptions import UnauthenticatedError
from utils.store import LedgerStore

logger = logging.getLogger(__name__)

# Tokens are issued by the external identity provider; tokenUrl is informational
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def resolve_current_user(token: Optional[str], db: Session) -> Optional[models.User]:
    """Map a bearer token to a User row. Never raises; no session means None."""
    if not token:
        return None
    email = auth.decode_access_token(token)
    if email is None:
        return None
    try:
        return db.query(models.User).filter(models.User.email == email).first()
    except SQLAlchemyError as e:
        logger.warning(f"Failed to resolve current user: {e}")
        return None


async def get_optional_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    db: Session = Depends(get_db)
) -> Optional[models.User]:
    """Current user, or None for anonymous callers."""
    return resolve_current_user(token, db)


async def get_current_user(
    user: Annotated[Optional[models.User], Depends(get_optional_user)]
) -> models.User:
    """Current user; raises UnauthenticatedError when there is no session."""
    if user is None:
        raise UnauthenticatedError()
    return user


def get_store(db: Session = Depends(get_db)) -> LedgerStore:
    return LedgerStore(db)
