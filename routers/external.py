import logging

from fastapi import APIRouter, Depends, Path

import schemas
from routers.books import ERROR_RESPONSES, get_book_service
from services.book_service import BookService

# Read/lend/return surface for partner systems; ISBN-10 keys are accepted here.
router = APIRouter(prefix="/api/v1", tags=["External"])
logger = logging.getLogger(__name__)


@router.get("/get", response_model=list[schemas.BookResponse])
def external_get_all(service: BookService = Depends(get_book_service)):
    logger.info("Fetching all books from the database.")
    books = service.get_all()
    logger.debug(f"Successfully retrieved {len(books)} books.")
    return books


@router.post("/lend/{isbn}", response_model=schemas.LendResponse, responses=ERROR_RESPONSES)
def external_lend_book(
    isbn: str = Path(min_length=10, max_length=17),
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Processing lend request for ISBN: {isbn}")
    return service.decrease_available_book_amount(isbn)


@router.post("/return/{isbn}", response_model=schemas.LendResponse, responses=ERROR_RESPONSES)
def external_return_book(
    isbn: str = Path(min_length=10, max_length=17),
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Processing return request for ISBN: {isbn}")
    return service.increase_available_book_amount(isbn)
