# backend/stockroom/api/deps.py

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from stockroom.core.config import Settings
from stockroom.core.database import Database
from stockroom.services.ledger import TransactionLedger
from stockroom.services.registry import SkuRegistry
from stockroom.services.reports import ReportingEngine


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(database: Database = Depends(get_database)):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


def get_registry(db: Session = Depends(get_db)) -> SkuRegistry:
    return SkuRegistry(db)


def get_ledger(db: Session = Depends(get_db)) -> TransactionLedger:
    return TransactionLedger(db)


def get_reports(db: Session = Depends(get_db)) -> ReportingEngine:
    return ReportingEngine(db)
