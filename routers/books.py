import logging

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

import models, schemas
from config import settings
from database import get_db
from db_service import DbService
from services.book_service import BookService

router = APIRouter(prefix="/books", tags=["Books"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": schemas.ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": schemas.ErrorResponse},
}


def get_book_service(db: Session = Depends(get_db)) -> BookService:
    return BookService(DbService(db, models.Book))


# Get Books
@router.get("", response_model=list[schemas.BookResponse] | schemas.PagedResult[schemas.BookResponse])
def get_all(
    response: Response,
    page: int | None = Query(default=None, ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1),
    service: BookService = Depends(get_book_service),
):
    if page is None and page_size is None:
        logger.info("Fetching all books")
        return service.get_all()

    page = page or 1
    page_size = min(page_size or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    logger.info(f"Fetching books page={page} page_size={page_size}")
    result = service.get_paged(page, page_size)
    response.headers["X-Total-Count"] = str(result.total_count)
    return result


@router.get("/name/{name}", response_model=list[schemas.BookResponse])
def get_by_name(
    name: str = Path(min_length=2),
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Searching books by name: {name}")
    return service.get_by_name(name)


@router.get("/author/{author}", response_model=list[schemas.BookResponse])
def get_by_author(
    author: str = Path(min_length=2),
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Searching books by author: {author}")
    return service.get_all_by_author(author)


@router.get("/isbn/{isbn}", response_model=schemas.BookResponse, responses=ERROR_RESPONSES)
def get_by_isbn(
    isbn: str = Path(min_length=14, max_length=17),
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Searching book by ISBN: {isbn}")
    book = service.get_by_isbn(isbn)
    if book is None:
        logger.warning(f"Book with ISBN {isbn} was not found.")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"Book with ISBN '{isbn}' was not found."},
        )
    return book


# Add Book
@router.post(
    "/create",
    response_model=schemas.BookResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": schemas.ErrorResponse}},
)
def create_book(
    request: Request,
    response: Response,
    book: schemas.CreateBookRequest,
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Creating a new book with ISBN: {book.isbn}")
    created = service.create_book(book)
    response.headers["Location"] = str(request.url_for("get_by_isbn", isbn=created.isbn))
    return created


@router.post("/lend/{isbn}", response_model=schemas.LendResponse, responses=ERROR_RESPONSES)
def lend_book(
    isbn: str = Path(min_length=14, max_length=17),
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Request to lend a book: {isbn}")
    return service.decrease_available_book_amount(isbn)


@router.post("/return/{isbn}", response_model=schemas.LendResponse, responses=ERROR_RESPONSES)
def return_book(
    isbn: str = Path(min_length=14, max_length=17),
    service: BookService = Depends(get_book_service),
):
    logger.info(f"Request to return a book: {isbn}")
    return service.increase_available_book_amount(isbn)
