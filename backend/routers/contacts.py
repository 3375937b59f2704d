"""Contacts router: people and groups the current user shares expenses with."""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends

import models
import schemas
from dependencies import get_optional_user, get_store
from utils.contacts import get_contacts
from utils.store import LedgerStore


router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("", response_model=schemas.Contacts)
def read_contacts(
    current_user: Annotated[Optional[models.User], Depends(get_optional_user)],
    store: LedgerStore = Depends(get_store)
):
    return get_contacts(store, current_user)
