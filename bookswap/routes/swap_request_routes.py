from fastapi import APIRouter, Body, Depends
from typing import Any, Dict, List

from ..models import SwapRequest
from ..results import Message, MessageKind
from ..services import BookSwapService
from .dependencies import call, get_service

router = APIRouter(tags=["swap requests"])


@router.post("/swap-requests", response_model=SwapRequest, status_code=201)
async def create_swap_request(
    payload: Dict[str, Any] = Body(...),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.create_swap_request, payload)


@router.get("/swap-requests", response_model=List[SwapRequest])
async def get_all_swap_requests(service: BookSwapService = Depends(get_service)):
    return await call(service.get_all_swap_requests)


@router.get("/swap-requests/completed/count")
async def get_total_completed_swap_requests(service: BookSwapService = Depends(get_service)):
    return {"count": await call(service.get_total_completed_swap_requests)}


@router.get("/swap-requests/{swap_request_id}", response_model=SwapRequest)
async def get_swap_request(swap_request_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_swap_request, swap_request_id)


@router.put("/swap-requests/{swap_request_id}", response_model=SwapRequest)
async def update_swap_request(
    swap_request_id: str,
    payload: Dict[str, Any] = Body(...),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.update_swap_request, swap_request_id, payload)


@router.post("/swap-requests/{swap_request_id}/accept", response_model=SwapRequest)
async def accept_swap_request(swap_request_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.accept_swap_request, swap_request_id)


@router.post("/swap-requests/{swap_request_id}/reject", response_model=SwapRequest)
async def reject_swap_request(swap_request_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.reject_swap_request, swap_request_id)


@router.delete("/swap-requests/{swap_request_id}")
async def delete_swap_request(swap_request_id: str, service: BookSwapService = Depends(get_service)):
    await call(service.delete_swap_request, swap_request_id)
    return Message(MessageKind.SUCCESS, "Swap request deleted successfully").to_response()


@router.get("/users/{user_id}/swap-requests", response_model=List[SwapRequest])
async def get_swap_requests_by_user(user_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_swap_requests_by_user, user_id)


@router.get("/users/{user_id}/swap-requests/incoming", response_model=List[SwapRequest])
async def get_swap_requests_for_user(user_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_swap_requests_for_user, user_id)


@router.get("/users/{user_id}/swap-requests/pending/count")
async def get_number_of_pending_swap_requests(user_id: str, service: BookSwapService = Depends(get_service)):
    return {"count": await call(service.get_number_of_pending_swap_requests, user_id)}


@router.get("/users/{user_id}/swap-requests/completed/count")
async def get_number_of_completed_swap_requests(user_id: str, service: BookSwapService = Depends(get_service)):
    return {"count": await call(service.get_number_of_completed_swap_requests, user_id)}


@router.get("/users/{user_id}/swaps/count")
async def get_swaps_by_user(user_id: str, service: BookSwapService = Depends(get_service)):
    return {"count": await call(service.get_swaps_by_user, user_id)}
