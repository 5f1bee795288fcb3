from typing import Optional

from fastapi import APIRouter, Depends, Query

from carwash import reports, schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data
from carwash.errors import NotFoundError

router = APIRouter(prefix="/reports", tags=["Reports"])


def _inputs(data: DataAccess):
    return (
        data.collection("users"),
        data.collection("appointments"),
        data.collection("shifts"),
    )


@router.get("/daily", response_model=schemas.DailyReport)
def daily_report(
    date: Optional[str] = Query(None),
    data: DataAccess = Depends(get_data),
):
    return reports.build_daily_report(date, *_inputs(data))


@router.get("/weekly", response_model=schemas.WeeklyReport)
def weekly_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    data: DataAccess = Depends(get_data),
):
    return reports.build_weekly_report(start_date, *_inputs(data))


@router.get("/monthly", response_model=schemas.MonthlyReport)
def monthly_report(
    month: Optional[int] = Query(None),
    year: Optional[int] = Query(None),
    data: DataAccess = Depends(get_data),
):
    return reports.build_monthly_report(month, year, *_inputs(data))


@router.get("/employee/{user_id}", response_model=schemas.EmployeeReport)
def employee_report(
    user_id: int,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    data: DataAccess = Depends(get_data),
):
    try:
        user = data.get("users", user_id)
    except NotFoundError:
        raise NotFoundError("Employee not found") from None
    return reports.build_employee_report(
        user,
        start_date,
        end_date,
        data.collection("appointments"),
        data.collection("shifts"),
    )
