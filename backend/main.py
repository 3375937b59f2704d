"""
Splitledger Backend API

A FastAPI backend that reconciles shared expenses into balances and spending statistics.
This module sets up the app and mounts routers - all endpoint logic is in routers/ and utils/.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
import models
from database import engine
from exceptions import LedgerError, ledger_exception_handler

# Import routers
from routers import balances, groups, spending, contacts


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Create database tables
models.Base.metadata.create_all(bind=engine)

# Initialize FastAPI app
app = FastAPI(
    title="Splitledger API",
    description="API for shared-expense balances and spending statistics",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to frontend domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(LedgerError, ledger_exception_handler)

# Include routers
app.include_router(balances.router)
app.include_router(groups.router)
app.include_router(spending.router)
app.include_router(contacts.router)


@app.get("/health")
def health():
    return {"status": "ok"}
