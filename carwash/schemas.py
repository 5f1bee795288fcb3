from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from carwash.status import AppointmentStatus, ShiftStatus


def is_canonical_date(value: str) -> bool:
    """True only for zero-padded ``YYYY-MM-DD``; reports compare dates as strings."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date().isoformat() == value
    except ValueError:
        return False


def _check_date(value: str) -> str:
    if not is_canonical_date(value):
        raise ValueError("date must be YYYY-MM-DD")
    return value


def _check_time(value: str) -> str:
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            if datetime.strptime(value, fmt).strftime(fmt) == value:
                return value
        except ValueError:
            continue
    raise ValueError("time must be HH:MM or HH:MM:SS")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    message: str


# Users

class UserBase(CamelModel):
    email: EmailStr
    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    role: Literal["admin", "employee"] = "employee"
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class UserCreate(UserBase):
    password: str = Field(min_length=6)


class UserOut(UserBase):
    id: int
    created_at: Optional[datetime] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class LoginResponse(CamelModel):
    user: UserOut


# Clients and vehicles

class ClientCreate(CamelModel):
    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: Optional[EmailStr] = None


class ClientOut(ClientCreate):
    id: int
    created_at: Optional[datetime] = None


class VehicleCreate(CamelModel):
    client_id: int
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    color: Optional[str] = None
    license_plate: str = Field(min_length=1)


class VehicleOut(VehicleCreate):
    id: int
    created_at: Optional[datetime] = None


# Services

class ServiceCreate(CamelModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    duration_minutes: int = Field(gt=0)
    active: bool = True


class ServiceOut(ServiceCreate):
    id: int


# Shifts

class ShiftCreate(CamelModel):
    user_id: int
    date: str
    start_time: str
    end_time: str
    status: ShiftStatus = ShiftStatus.SCHEDULED
    earnings: float = Field(default=0.0, ge=0)

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return _check_date(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, value: str) -> str:
        return _check_time(value)


class ShiftOut(ShiftCreate):
    id: int


# Appointments

class AppointmentBase(CamelModel):
    client_id: int
    vehicle_id: int
    user_id: Optional[int] = None
    date: str
    start_time: str
    end_time: Optional[str] = None
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return _check_date(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_times(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return _check_time(value)


class AppointmentCreate(AppointmentBase):
    # Omitted total is derived from the booked services' prices.
    total_price: Optional[float] = Field(default=None, ge=0)
    service_ids: Optional[List[int]] = None


class AppointmentUpdate(AppointmentBase):
    total_price: float = Field(ge=0)


class AppointmentOut(AppointmentBase):
    id: int
    total_price: float
    created_at: Optional[datetime] = None


class AppointmentServiceCreate(CamelModel):
    appointment_id: int
    service_id: int
    price: float = Field(ge=0)


class AppointmentServiceOut(AppointmentServiceCreate):
    id: int


# Notifications

class NotificationCreate(CamelModel):
    user_id: Optional[int] = None
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    type: str = "info"
    read: bool = False


class NotificationOut(NotificationCreate):
    id: int
    created_at: Optional[datetime] = None


class ReadAllRequest(CamelModel):
    user_id: Optional[int] = None


# Cache / sync

class SyncStatusOut(CamelModel):
    status: str
    online: bool
    keys: List[str]


class SyncOnlineRequest(CamelModel):
    online: bool


# Reports

class DaySummary(CamelModel):
    date: str
    total_appointments: int = 0
    completed_appointments: int = 0
    total_revenue: float = 0.0


class EmployeeSummary(CamelModel):
    user_id: int
    name: str
    total_appointments: int = 0
    completed_appointments: int = 0
    earnings: float = 0.0


class DailyReport(CamelModel):
    date: str
    total_appointments: int
    completed_appointments: int
    total_revenue: float
    employees: List[EmployeeSummary]


class WeeklyReport(CamelModel):
    start_date: str
    end_date: str
    total_appointments: int
    completed_appointments: int
    total_revenue: float
    employees: List[EmployeeSummary]
    daily_reports: List[DaySummary]


class MonthlyReport(CamelModel):
    month: int
    year: int
    total_appointments: int
    completed_appointments: int
    total_revenue: float
    employees: List[EmployeeSummary]
    daily_reports: List[DaySummary]


class EmployeeInfo(CamelModel):
    id: int
    name: str
    email: str
    role: str


class EmployeeDay(CamelModel):
    date: str
    appointments: int = 0
    completed_appointments: int = 0
    revenue: float = 0.0
    earnings: float = 0.0
    shift: Optional[ShiftOut] = None


class EmployeeReport(CamelModel):
    employee: EmployeeInfo
    start_date: str
    end_date: str
    total_appointments: int
    total_completed_appointments: int
    total_revenue: float
    total_earnings: float
    daily_data: List[EmployeeDay]
