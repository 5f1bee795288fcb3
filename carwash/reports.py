"""Revenue and workload reports.

Every function here is a synchronous pass over records already in memory.
Dates are ``YYYY-MM-DD`` strings and are compared as strings.
"""
import calendar
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from carwash.errors import ReportParameterError
from carwash.schemas import (
    DailyReport,
    DaySummary,
    EmployeeDay,
    EmployeeInfo,
    EmployeeReport,
    EmployeeSummary,
    MonthlyReport,
    ShiftOut,
    WeeklyReport,
    is_canonical_date,
)
from carwash.status import AppointmentStatus

DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: Optional[str], name: str = "date"):
    if not value:
        raise ReportParameterError(f"Query parameter '{name}' is required")
    if not is_canonical_date(value):
        raise ReportParameterError(f"'{name}' must be a date in YYYY-MM-DD format")
    return datetime.strptime(value, DATE_FORMAT).date()


def filter_by_date_range(items: Iterable[Any], start: str, end: str) -> List[Any]:
    return [item for item in items if start <= item.date <= end]


def check_date_filters(**filters: Optional[str]) -> None:
    """Reject malformed optional date query parameters, keyed by wire name."""
    for name, value in filters.items():
        if value:
            parse_date(value, name)


def iter_dates(start: str, end: str) -> Iterator[str]:
    first = parse_date(start, "startDate")
    last = parse_date(end, "endDate")
    if first > last:
        raise ReportParameterError("startDate must not be after endDate")
    # Offsets stop at ``last`` so 9999-12-31 never steps past date.max.
    for offset in range((last - first).days + 1):
        yield (first + timedelta(days=offset)).isoformat()


def is_completed(appointment: Any) -> bool:
    return appointment.status == AppointmentStatus.COMPLETED.value


def revenue(appointments: Iterable[Any]) -> float:
    """Sum of totalPrice over completed appointments; nothing else earns."""
    return sum((a.total_price or 0.0) for a in appointments if is_completed(a))


def _by_date(items: Iterable[Any]) -> Dict[str, List[Any]]:
    grouped: Dict[str, List[Any]] = {}
    for item in items:
        grouped.setdefault(item.date, []).append(item)
    return grouped


def aggregate_days(appointments: Sequence[Any], start: str, end: str) -> List[DaySummary]:
    grouped = _by_date(filter_by_date_range(appointments, start, end))
    days = []
    for day in iter_dates(start, end):
        day_appointments = grouped.get(day, [])
        days.append(
            DaySummary(
                date=day,
                total_appointments=len(day_appointments),
                completed_appointments=sum(1 for a in day_appointments if is_completed(a)),
                total_revenue=revenue(day_appointments),
            )
        )
    return days


def aggregate_employees(
    users: Sequence[Any],
    appointments: Sequence[Any],
    shifts: Sequence[Any],
    start: str,
    end: str,
) -> List[EmployeeSummary]:
    in_range = filter_by_date_range(appointments, start, end)
    shifts_in_range = filter_by_date_range(shifts, start, end)

    summaries = []
    for user in sorted(users, key=lambda u: u.id):
        if user.role != "employee":
            continue
        own = [a for a in in_range if a.user_id == user.id]
        summaries.append(
            EmployeeSummary(
                user_id=user.id,
                name=f"{user.name} {user.surname}",
                total_appointments=len(own),
                completed_appointments=sum(1 for a in own if is_completed(a)),
                earnings=sum((s.earnings or 0.0) for s in shifts_in_range if s.user_id == user.id),
            )
        )
    return summaries


def _range_totals(days: Sequence[DaySummary]) -> Dict[str, Any]:
    return {
        "total_appointments": sum(d.total_appointments for d in days),
        "completed_appointments": sum(d.completed_appointments for d in days),
        "total_revenue": sum(d.total_revenue for d in days),
    }


def build_daily_report(day: Optional[str], users, appointments, shifts) -> DailyReport:
    parse_date(day, "date")
    days = aggregate_days(appointments, day, day)
    return DailyReport(
        date=day,
        employees=aggregate_employees(users, appointments, shifts, day, day),
        **_range_totals(days),
    )


def build_weekly_report(start_date: Optional[str], users, appointments, shifts) -> WeeklyReport:
    start = parse_date(start_date, "startDate")
    try:
        end_date = (start + timedelta(days=6)).isoformat()
    except OverflowError:
        raise ReportParameterError("'startDate' leaves no room for a full week") from None
    days = aggregate_days(appointments, start_date, end_date)
    return WeeklyReport(
        start_date=start_date,
        end_date=end_date,
        employees=aggregate_employees(users, appointments, shifts, start_date, end_date),
        daily_reports=days,
        **_range_totals(days),
    )


def build_monthly_report(month: Optional[int], year: Optional[int], users, appointments, shifts) -> MonthlyReport:
    if month is None or year is None:
        raise ReportParameterError("Query parameters 'month' and 'year' are required")
    if not 1 <= month <= 12:
        raise ReportParameterError("'month' must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ReportParameterError("'year' must be between 1 and 9999")

    days_in_month = calendar.monthrange(year, month)[1]
    start_date = f"{year:04d}-{month:02d}-01"
    end_date = f"{year:04d}-{month:02d}-{days_in_month:02d}"
    days = aggregate_days(appointments, start_date, end_date)
    return MonthlyReport(
        month=month,
        year=year,
        employees=aggregate_employees(users, appointments, shifts, start_date, end_date),
        daily_reports=days,
        **_range_totals(days),
    )


def build_employee_report(user, start_date: Optional[str], end_date: Optional[str], appointments, shifts) -> EmployeeReport:
    """Day-by-day workload of one employee.

    A day's earnings are that employee's shift earnings for the day, 0 when
    no shift was recorded.
    """
    dates = list(iter_dates(start_date, end_date))
    own_appointments = _by_date(
        a for a in filter_by_date_range(appointments, start_date, end_date) if a.user_id == user.id
    )
    own_shifts = _by_date(
        s for s in filter_by_date_range(shifts, start_date, end_date) if s.user_id == user.id
    )

    daily_data = []
    for day in dates:
        day_appointments = own_appointments.get(day, [])
        day_shifts = own_shifts.get(day, [])
        daily_data.append(
            EmployeeDay(
                date=day,
                appointments=len(day_appointments),
                completed_appointments=sum(1 for a in day_appointments if is_completed(a)),
                revenue=revenue(day_appointments),
                earnings=sum((s.earnings or 0.0) for s in day_shifts),
                shift=ShiftOut.model_validate(day_shifts[0]) if day_shifts else None,
            )
        )

    return EmployeeReport(
        employee=EmployeeInfo(
            id=user.id,
            name=f"{user.name} {user.surname}",
            email=user.email,
            role=user.role,
        ),
        start_date=start_date,
        end_date=end_date,
        total_appointments=sum(d.appointments for d in daily_data),
        total_completed_appointments=sum(d.completed_appointments for d in daily_data),
        total_revenue=sum(d.revenue for d in daily_data),
        total_earnings=sum(d.earnings for d in daily_data),
        daily_data=daily_data,
    )
