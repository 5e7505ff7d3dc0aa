from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_user_service
from app.services.user_service import UserService
from app.domain.schemas import UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/", response_model=UserRead)
def create_user(payload: UserCreate, svc: UserService = Depends(get_user_service)):
    """
    Registers a customer. Returns the existing record when the id is already known.
    """
    try:
        return svc.create_user(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: str, svc: UserService = Depends(get_user_service)):
    try:
        return svc.get_user(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
