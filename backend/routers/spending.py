"""Spending router: yearly and monthly totals of the current user's share."""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query

import models
import schemas
from dependencies import get_optional_user, get_store
from utils.statistics import get_total_spent, get_monthly_spending, MIN_YEAR, MAX_YEAR
from utils.store import LedgerStore


router = APIRouter(prefix="/spending", tags=["spending"])


@router.get("/total", response_model=int)
def read_total_spent(
    current_user: Annotated[Optional[models.User], Depends(get_optional_user)],
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    store: LedgerStore = Depends(get_store)
):
    return get_total_spent(store, current_user, year)


@router.get("/monthly", response_model=list[schemas.MonthlySpending])
def read_monthly_spending(
    current_user: Annotated[Optional[models.User], Depends(get_optional_user)],
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    store: LedgerStore = Depends(get_store)
):
    return get_monthly_spending(store, current_user, year)
