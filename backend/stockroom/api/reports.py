# backend/stockroom/api/reports.py

import csv
import io

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from stockroom.api.deps import get_reports
from stockroom.schemas.reports import (
    DeadStockResponse,
    ReorderResponse,
    SlowMovingResponse,
    TopSellingResponse,
)
from stockroom.services.reorder import round_currency
from stockroom.services.reports import (
    DEAD_STOCK_DAYS,
    MOVEMENT_DAYS,
    REPORT_LIMIT,
    ReportingEngine,
)

router = APIRouter()

# keeps "now - days" inside the datetime range
MAX_WINDOW_DAYS = 36500


@router.get("/dead-stock", response_model=DeadStockResponse)
def dead_stock(
    days: int = Query(DEAD_STOCK_DAYS, ge=1, le=MAX_WINDOW_DAYS),
    reports: ReportingEngine = Depends(get_reports),
):
    items = reports.dead_stock(window_days=days)
    return {
        "data": items,
        "summary": {
            "count": len(items),
            "total_value": round_currency(sum(i["stock_value"] for i in items)),
        },
    }


@router.get("/reorder", response_model=ReorderResponse)
def reorder(reports: ReportingEngine = Depends(get_reports)):
    items = reports.reorder_list()
    return {
        "data": items,
        "summary": {
            "count": len(items),
            "out_of_stock": sum(1 for i in items if i["current_quantity"] == 0),
        },
    }


@router.get("/reorder.csv")
def reorder_csv(reports: ReportingEngine = Depends(get_reports)):
    items = reports.reorder_list()

    buf = io.StringIO()
    w = csv.writer(buf)
    w.writerow(
        [
            "id",
            "name",
            "category",
            "current_quantity",
            "reorder_level",
            "shortage",
            "suggested_order_qty",
            "unit_price",
        ]
    )

    for r in items:
        w.writerow(
            [
                r["id"],
                r["name"],
                r["category"],
                r["current_quantity"],
                r["reorder_level"],
                r["shortage"],
                r["suggested_order_qty"],
                r["unit_price"],
            ]
        )

    return StreamingResponse(
        io.BytesIO(buf.getvalue().encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="reorder_list.csv"'},
    )


@router.get("/top-selling", response_model=TopSellingResponse)
def top_selling(
    days: int = Query(MOVEMENT_DAYS, ge=1, le=MAX_WINDOW_DAYS),
    limit: int = Query(REPORT_LIMIT, ge=1, le=100),
    reports: ReportingEngine = Depends(get_reports),
):
    return {
        "data": reports.top_selling(window_days=days, limit=limit),
        "period": f"Last {days} days",
    }


@router.get("/slow-moving", response_model=SlowMovingResponse)
def slow_moving(
    days: int = Query(MOVEMENT_DAYS, ge=1, le=MAX_WINDOW_DAYS),
    limit: int = Query(REPORT_LIMIT, ge=1, le=100),
    reports: ReportingEngine = Depends(get_reports),
):
    return {
        "data": reports.slow_moving(window_days=days, limit=limit),
        "period": f"Last {days} days",
    }
