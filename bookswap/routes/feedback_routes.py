from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from ..models import Feedback
from ..results import Message, MessageKind
from ..services import BookSwapService
from .dependencies import call, get_service

router = APIRouter(tags=["feedback"])


@router.post("/feedbacks", response_model=Feedback, status_code=201)
async def create_feedback(
    payload: Dict[str, Any] = Body(...),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.create_feedback, payload)


@router.put("/feedbacks", response_model=Feedback)
async def update_feedback(
    payload: Dict[str, Any] = Body(...),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.update_feedback, payload)


@router.get("/feedbacks", response_model=List[Feedback])
async def get_all_feedbacks(service: BookSwapService = Depends(get_service)):
    return await call(service.get_all_feedbacks)


@router.get("/feedbacks/{feedback_id}", response_model=Feedback)
async def get_feedback(feedback_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_feedback, feedback_id)


@router.delete("/feedbacks/{feedback_id}")
async def delete_feedback(feedback_id: str, service: BookSwapService = Depends(get_service)):
    await call(service.delete_feedback, feedback_id)
    return Message(MessageKind.SUCCESS, "Feedback deleted successfully").to_response()


@router.get("/users/{user_id}/feedbacks", response_model=List[Feedback])
async def get_feedbacks_by_user(user_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_feedbacks_by_user, user_id)


@router.get("/swap-requests/{swap_request_id}/feedbacks", response_model=List[Feedback])
async def get_feedbacks_by_swap_request(swap_request_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_feedbacks_by_swap_request, swap_request_id)
