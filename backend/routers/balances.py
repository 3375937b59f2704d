"""Balances router: personal balances and per-member balances inside a group."""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends

import models
import schemas
from dependencies import get_optional_user, get_current_user, get_store
from utils.balances import get_balances
from utils.groups import get_group_member_balances
from utils.store import LedgerStore


router = APIRouter(tags=["balances"])


@router.get("/balances", response_model=schemas.BalanceSummary)
def read_balances(
    current_user: Annotated[Optional[models.User], Depends(get_optional_user)],
    store: LedgerStore = Depends(get_store)
):
    """1-to-1 balances. Anonymous callers get an all-zero summary."""
    return get_balances(store, current_user)


@router.get("/groups/{group_id}/balances", response_model=list[schemas.CounterpartyBalance])
def read_group_member_balances(
    group_id: int,
    current_user: Annotated[models.User, Depends(get_current_user)],
    store: LedgerStore = Depends(get_store)
):
    # Amount is positive if that member owes me, negative if I owe them
    return get_group_member_balances(store, current_user, group_id)
