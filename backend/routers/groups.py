"""Groups router: the current user's groups and a single group's ledger."""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends

import models
import schemas
from dependencies import get_optional_user, get_current_user, get_store
from utils.balances import get_group_balances
from utils.groups import get_group_ledger
from utils.store import LedgerStore


router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("", response_model=list[schemas.GroupBalance])
def read_groups(
    current_user: Annotated[Optional[models.User], Depends(get_optional_user)],
    store: LedgerStore = Depends(get_store)
):
    # Membership filter is the authorization here; non-members simply see nothing
    return get_group_balances(store, current_user)


@router.get("/{group_id}", response_model=schemas.GroupLedger)
def read_group_ledger(
    group_id: int,
    current_user: Annotated[models.User, Depends(get_current_user)],
    store: LedgerStore = Depends(get_store)
):
    return get_group_ledger(store, current_user, group_id)
