from fastapi import APIRouter

from carwash.routers import (
    appointment_services,
    appointments,
    auth,
    clients,
    notifications,
    reports,
    services,
    shifts,
    sync,
    users,
    vehicles,
)

router = APIRouter(prefix="/api")
router.include_router(auth.router)
router.include_router(users.router)
router.include_router(clients.router)
router.include_router(vehicles.router)
router.include_router(services.router)
router.include_router(shifts.router)
router.include_router(appointments.router)
router.include_router(appointment_services.router)
router.include_router(notifications.router)
router.include_router(reports.router)
router.include_router(sync.router)
