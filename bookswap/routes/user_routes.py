from fastapi import APIRouter, Body, Depends
from typing import Any, Dict

from ..models import User
from ..services import BookSwapService
from .dependencies import call, get_caller, get_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=User, status_code=201)
async def create_user_profile(
    payload: Dict[str, Any] = Body(...),
    caller: str = Depends(get_caller),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.create_user_profile, caller, payload)


@router.get("/me", response_model=User)
async def get_user_profile_by_owner(
    caller: str = Depends(get_caller),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.get_user_profile_by_owner, caller)


@router.get("/count")
async def get_total_users(service: BookSwapService = Depends(get_service)):
    return {"count": await call(service.get_total_users)}


@router.get("/{user_id}", response_model=User)
async def get_user_profile(user_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_user_profile, user_id)


@router.put("/{user_id}", response_model=User)
async def update_user_profile(
    user_id: str,
    payload: Dict[str, Any] = Body(...),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.update_user_profile, user_id, payload)
