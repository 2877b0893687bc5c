from fastapi import APIRouter, Depends
from typing import List

from ..models import SwapperSummary
from ..services import BookSwapService
from .dependencies import call, get_service

router = APIRouter(prefix="/swappers", tags=["statistics"])


@router.get("/top", response_model=List[SwapperSummary])
async def get_top_swappers(service: BookSwapService = Depends(get_service)):
    return await call(service.get_top_swappers)


@router.get("/featured", response_model=List[SwapperSummary])
async def get_featured_swappers(service: BookSwapService = Depends(get_service)):
    return await call(service.get_featured_swappers)
