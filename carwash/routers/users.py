from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from carwash import schemas
from carwash.data import DataAccess
from carwash.dependencies import get_data
from carwash.errors import DuplicateError
from carwash.security import hash_password

router = APIRouter(prefix="/users", tags=["Users"])


def _user_values(payload: schemas.UserCreate) -> dict:
    values = payload.model_dump(mode="json")
    values["password"] = hash_password(payload.password)
    return values


def _ensure_email_free(data: DataAccess, email: str, user_id: Optional[int] = None) -> None:
    existing = data.storage.find_user_by_email(email)
    if existing and existing.id != user_id:
        raise DuplicateError("Email already registered")


@router.get("", response_model=List[schemas.UserOut])
def list_users(
    role: Optional[str] = Query(None),
    data: DataAccess = Depends(get_data),
):
    users = data.collection("users")
    if role:
        users = [u for u in users if u.role == role]
    return users


@router.get("/{user_id}", response_model=schemas.UserOut)
def get_user(user_id: int, data: DataAccess = Depends(get_data)):
    return data.get("users", user_id)


@router.post("", response_model=schemas.UserOut, status_code=201)
def create_user(payload: schemas.UserCreate, data: DataAccess = Depends(get_data)):
    _ensure_email_free(data, payload.email)
    return data.create("users", _user_values(payload))


@router.put("/{user_id}", response_model=schemas.UserOut)
def update_user(user_id: int, payload: schemas.UserCreate, data: DataAccess = Depends(get_data)):
    data.get("users", user_id)
    _ensure_email_free(data, payload.email, user_id=user_id)
    return data.update("users", user_id, _user_values(payload))


@router.delete("/{user_id}", response_model=schemas.MessageResponse)
def delete_user(user_id: int, data: DataAccess = Depends(get_data)):
    data.delete("users", user_id)
    return {"message": "User deleted"}
