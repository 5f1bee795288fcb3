import logging
from datetime import date
from typing import Optional

from carwash.security import hash_password
from carwash.storage import Storage

logger = logging.getLogger(__name__)

EMPLOYEES = [
    ("employee1@autowash.by", "Sergei", "Kozlov", "+375 29 111-22-33", 8500.0),
    ("employee2@autowash.by", "Alexander", "Popov", "+375 29 222-33-44", 12300.0),
    ("employee3@autowash.by", "Victoria", "Sokolova", "+375 29 333-44-55", 9200.0),
    ("employee4@autowash.by", "Denis", "Novikov", "+375 29 444-55-66", 6500.0),
]

SERVICES = [
    ("Standard wash", "Body wash, interior vacuum, window wipe", 900.0, 30),
    ("Complex wash", "Standard wash plus mats and trunk cleaning", 1500.0, 45),
    ("Interior detailing", "Full interior dry cleaning, plastic, leather and fabric care", 2500.0, 120),
    ("Body polishing", "Polishing with removal of light scratches", 3500.0, 180),
    ("Express wash", "Quick body wash without drying", 500.0, 15),
]

CLIENTS = [
    (("Alexey", "Smirnov", "+375 25 123-45-67", "alexey@gmail.com"), ("Toyota", "Camry", 2020, "White", "1234 AB-7")),
    (("Maria", "Ivanova", "+375 33 987-65-43", "maria@gmail.com"), ("Kia", "Rio", 2019, "Blue", "5678 BC-7")),
    (("Dmitry", "Petrov", "+375 44 111-22-33", "dmitry@gmail.com"), ("BMW", "X5", 2021, "Black", "2345 EH-7")),
]

NOTIFICATIONS = [
    ("New appointment", "New appointment at 16:30 - Igor Belov (VW Tiguan)", False),
    ("Service finished", "Victoria Sokolova finished servicing BMW X5", False),
    ("Appointment changed", "Client A. Smirnov moved the appointment to tomorrow", True),
    ("Daily report", "Yesterday's daily report has been generated", True),
]


def seed_sample_data(storage: Storage, today: Optional[str] = None) -> bool:
    """Load the demo car wash into an empty store. Returns False if users exist."""
    if storage.all("users"):
        return False

    today = today or date.today().isoformat()
    admin = storage.create(
        "users",
        {
            "email": "admin@autowash.by",
            "name": "Ivan",
            "surname": "Petrov",
            "role": "admin",
            "password": hash_password("admin123"),
            "phone": "+375 29 123-45-67",
        },
    )

    employees = []
    for email, name, surname, phone, earnings in EMPLOYEES:
        employee = storage.create(
            "users",
            {
                "email": email,
                "name": name,
                "surname": surname,
                "role": "employee",
                "password": hash_password("employee1"),
                "phone": phone,
            },
        )
        employees.append(employee)
        storage.create(
            "shifts",
            {
                "user_id": employee.id,
                "date": today,
                "start_time": "08:00:00",
                "end_time": "20:00:00",
                "status": "active",
                "earnings": earnings,
            },
        )

    services = [
        storage.create(
            "services",
            {
                "name": name,
                "description": description,
                "price": price,
                "duration_minutes": minutes,
                "active": True,
            },
        )
        for name, description, price, minutes in SERVICES
    ]

    bookings = [
        ("10:00:00", "10:30:00", "scheduled"),
        ("11:30:00", "12:15:00", "confirmed"),
        ("13:00:00", "15:00:00", "in_progress"),
    ]
    for index, ((name, surname, phone, email), vehicle) in enumerate(CLIENTS):
        client = storage.create(
            "clients",
            {"name": name, "surname": surname, "phone": phone, "email": email},
        )
        make, model, year, color, plate = vehicle
        car = storage.create(
            "vehicles",
            {
                "client_id": client.id,
                "make": make,
                "model": model,
                "year": year,
                "color": color,
                "license_plate": plate,
            },
        )
        start_time, end_time, status = bookings[index]
        service = services[index]
        appointment = storage.create(
            "appointments",
            {
                "client_id": client.id,
                "vehicle_id": car.id,
                "user_id": employees[index].id,
                "date": today,
                "start_time": start_time,
                "end_time": end_time,
                "status": status,
                "total_price": service.price,
                "notes": "",
            },
        )
        storage.create(
            "appointment_services",
            {"appointment_id": appointment.id, "service_id": service.id, "price": service.price},
        )

    for title, message, read in NOTIFICATIONS:
        storage.create(
            "notifications",
            {"user_id": admin.id, "title": title, "message": message, "type": "info", "read": read},
        )

    logger.info("Seeded sample data for %s", today)
    return True


def ensure_admin_user(storage: Storage, email: str, password: str) -> None:
    if not email or not password:
        return

    admin = storage.find_user_by_email(email)
    if admin:
        if admin.role != "admin":
            storage.update("users", admin.id, {"role": "admin"})
            logger.info("Promoted %s to admin", email)
        return

    storage.create(
        "users",
        {
            "email": email,
            "name": "Admin",
            "surname": "Admin",
            "role": "admin",
            "password": hash_password(password),
        },
    )
    logger.info("Admin user created from environment configuration: %s", email)
