from fastapi import APIRouter, Body, Depends, Query
from typing import Any, Dict, List

from ..models import Book
from ..results import Message, MessageKind
from ..services import BookSwapService
from .dependencies import call, get_service

router = APIRouter(tags=["books"])


@router.post("/books", response_model=Book, status_code=201)
async def list_book(
    payload: Dict[str, Any] = Body(...),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.list_book, payload)


@router.get("/books", response_model=List[Book])
async def get_all_books(service: BookSwapService = Depends(get_service)):
    return await call(service.get_all_books)


@router.get("/books/search", response_model=List[Book])
async def search_books(term: str = Query(...), service: BookSwapService = Depends(get_service)):
    return await call(service.search_books, term)


@router.get("/books/recent", response_model=List[Book])
async def get_recent_books(service: BookSwapService = Depends(get_service)):
    return await call(service.get_recent_books)


@router.get("/books/count")
async def get_total_books(service: BookSwapService = Depends(get_service)):
    return {"count": await call(service.get_total_books)}


@router.get("/books/genre/{genre}", response_model=List[Book])
async def get_books_by_genre(genre: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_books_by_genre, genre)


@router.get("/books/{book_id}", response_model=Book)
async def get_book(book_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_book, book_id)


@router.put("/books/{book_id}", response_model=Book)
async def update_book(
    book_id: str,
    payload: Dict[str, Any] = Body(...),
    service: BookSwapService = Depends(get_service),
):
    return await call(service.update_book, book_id, payload)


@router.delete("/books/{book_id}")
async def delete_book(book_id: str, service: BookSwapService = Depends(get_service)):
    await call(service.delete_book, book_id)
    return Message(MessageKind.SUCCESS, "Book deleted successfully").to_response()


@router.get("/users/{user_id}/books", response_model=List[Book])
async def get_books_by_user(user_id: str, service: BookSwapService = Depends(get_service)):
    return await call(service.get_books_by_user, user_id)


@router.get("/users/{user_id}/books/count")
async def get_number_of_books(user_id: str, service: BookSwapService = Depends(get_service)):
    return {"count": await call(service.get_number_of_books, user_id)}
