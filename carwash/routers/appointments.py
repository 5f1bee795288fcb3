import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data
from carwash.reports import check_date_filters, filter_by_date_range
from carwash.status import AppointmentStatus, check_transition

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.get("", response_model=List[schemas.AppointmentOut])
def list_appointments(
    date: Optional[str] = Query(None),
    client_id: Optional[int] = Query(None, alias="clientId"),
    user_id: Optional[int] = Query(None, alias="userId"),
    status: Optional[AppointmentStatus] = Query(None),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    data: DataAccess = Depends(get_data),
):
    check_date_filters(date=date, startDate=start_date, endDate=end_date)
    appointments = data.collection("appointments")
    if date:
        appointments = [a for a in appointments if a.date == date]
    if client_id is not None:
        appointments = [a for a in appointments if a.client_id == client_id]
    if user_id is not None:
        appointments = [a for a in appointments if a.user_id == user_id]
    if status is not None:
        appointments = [a for a in appointments if a.status == status.value]
    if start_date and end_date:
        appointments = filter_by_date_range(appointments, start_date, end_date)
    return appointments


@router.get("/{appointment_id}", response_model=schemas.AppointmentOut)
def get_appointment(appointment_id: int, data: DataAccess = Depends(get_data)):
    return data.get("appointments", appointment_id)


@router.get("/{appointment_id}/services", response_model=List[schemas.AppointmentServiceOut])
def list_appointment_services(appointment_id: int, data: DataAccess = Depends(get_data)):
    return [
        s for s in data.collection("appointment_services") if s.appointment_id == appointment_id
    ]


@router.post("", response_model=schemas.AppointmentOut, status_code=201)
def create_appointment(payload: schemas.AppointmentCreate, data: DataAccess = Depends(get_data)):
    booked = [data.get("services", service_id) for service_id in payload.service_ids or []]

    values = payload.model_dump(mode="json", exclude={"service_ids"})
    if values["total_price"] is None:
        values["total_price"] = sum(service.price for service in booked)

    appointment = data.create("appointments", values)
    # Prices are copied so later catalogue changes do not rewrite history.
    for service in booked:
        data.create(
            "appointment_services",
            {"appointment_id": appointment.id, "service_id": service.id, "price": service.price},
        )
    if booked:
        logger.info("Appointment %s booked with %d services", appointment.id, len(booked))
    return appointment


@router.put("/{appointment_id}", response_model=schemas.AppointmentOut)
def update_appointment(
    appointment_id: int,
    payload: schemas.AppointmentUpdate,
    data: DataAccess = Depends(get_data),
):
    current = data.get("appointments", appointment_id)
    check_transition(AppointmentStatus, current.status, payload.status.value)
    return data.update("appointments", appointment_id, payload.model_dump(mode="json"))


@router.delete("/{appointment_id}", response_model=schemas.MessageResponse)
def delete_appointment(appointment_id: int, data: DataAccess = Depends(get_data)):
    data.delete("appointments", appointment_id)
    return {"message": "Appointment deleted"}
