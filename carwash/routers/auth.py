import logging

from fastapi import APIRouter, Depends, HTTPException

from carwash import schemas
from carwash.dependencies import get_data
from carwash.data import DataAccess
from carwash.security import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=schemas.LoginResponse)
def login(payload: schemas.LoginRequest, data: DataAccess = Depends(get_data)):
    user = data.storage.find_user_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password):
        logger.info("Failed login for %s", payload.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return {"user": schemas.UserOut.model_validate(user)}
