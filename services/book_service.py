import logging
import math

from sqlalchemy.exc import SQLAlchemyError

import models, schemas
from db_service import DbService
from exceptions import FailedToCreateError, FailedToLendError, NotFoundError

logger = logging.getLogger(__name__)


class BookService:
    """Book rules on top of the generic data access: ISBN uniqueness, lending, paging."""

    def __init__(self, db_service: DbService[models.Book]):
        self.db_service = db_service

    @staticmethod
    def _to_response(book: models.Book) -> schemas.BookResponse:
        return schemas.BookResponse.model_validate(book)

    def get_by_isbn(self, isbn: str) -> schemas.BookResponse | None:
        book = self.db_service.get(models.Book.isbn == isbn)
        if book is None:
            return None
        return self._to_response(book)

    def get_by_name(self, name: str) -> list[schemas.BookResponse]:
        books = self.db_service.get_all(models.Book.title == name, order_by=models.Book.id.asc())
        return [self._to_response(book) for book in books]

    def get_all_by_author(self, author: str) -> list[schemas.BookResponse]:
        books = self.db_service.get_all(models.Book.author == author, order_by=models.Book.id.asc())
        return [self._to_response(book) for book in books]

    def get_all(self) -> list[schemas.BookResponse]:
        books = self.db_service.get_all(order_by=models.Book.id.asc())
        return [self._to_response(book) for book in books]

    def get_paged(self, page: int, page_size: int) -> schemas.PagedResult[schemas.BookResponse]:
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be at least 1")

        total = self.db_service.count()
        offset = (page - 1) * page_size
        books = []
        # a page past the end is empty; huge offsets overflow the driver's integer type
        if offset < total:
            books = self.db_service.get_all(
                order_by=models.Book.id.asc(),
                offset=offset,
                limit=page_size,
            )
        return schemas.PagedResult[schemas.BookResponse](
            items=[self._to_response(book) for book in books],
            total_count=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size),
        )

    def create_book(self, request: schemas.CreateBookRequest) -> schemas.BookResponse:
        existing = self.db_service.get(models.Book.isbn == request.isbn)
        if existing is not None:
            raise FailedToCreateError(
                models.Book, f"A book with ISBN '{request.isbn}' already exists."
            )

        book = models.Book(
            title=request.title,
            author=request.author,
            isbn=request.isbn,
            publication_year=request.publication_year,
            amount_available=request.amount_available,
        )
        created = self.db_service.create(book)
        logger.info(f"Created book {created.isbn} with {created.amount_available} copies")
        return self._to_response(created)

    def decrease_available_book_amount(self, isbn: str) -> schemas.LendResponse:
        book = self.db_service.get(models.Book.isbn == isbn)
        if book is None:
            raise NotFoundError(models.Book, isbn)

        if book.amount_available <= 0:
            raise FailedToLendError(models.Book, "book is not available for lending")

        # Read-modify-write without a lock: concurrent lends of one ISBN can race.
        return self._store_amount(book, book.amount_available - 1)

    def increase_available_book_amount(self, isbn: str) -> schemas.LendResponse:
        book = self.db_service.get(models.Book.isbn == isbn)
        if book is None:
            raise NotFoundError(models.Book, isbn)

        return self._store_amount(book, book.amount_available + 1)

    def _store_amount(self, book: models.Book, new_amount: int) -> schemas.LendResponse:
        isbn = book.isbn
        try:
            updated = self.db_service.update(models.Book.isbn == isbn, amount_available=new_amount)
        except (NotFoundError, SQLAlchemyError) as exc:
            logger.error(f"Failed to store amount {new_amount} for {isbn}: {exc}")
            raise FailedToLendError(models.Book, str(exc)) from exc

        logger.info(f"Book {isbn} now has {updated.amount_available} copies available")
        return schemas.LendResponse(new_amount=updated.amount_available, name_of_the_book=updated.title)
