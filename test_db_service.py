import pytest
from sqlalchemy.exc import OperationalError

import models
from exceptions import FailedToCreateError, NotFoundError


def _book(**overrides):
    values = {
        "title": "Dune",
        "author": "Frank Herbert",
        "isbn": "97812345678901",
        "publication_year": 1965,
        "amount_available": 2,
    }
    values.update(overrides)
    return models.Book(**values)


def test_create_assigns_id(book_db):
    book = book_db.create(_book())
    assert book.id is not None


def test_create_constraint_violation(book_db):
    book_db.create(_book())

    with pytest.raises(FailedToCreateError) as excinfo:
        book_db.create(_book(title="Duplicate"))

    assert excinfo.value.reason == "Database constraint violation"
    assert excinfo.value.__cause__ is not None
    # session is usable again after the rollback
    assert book_db.count() == 1


def test_create_unexpected_error(book_db, monkeypatch):
    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(book_db.db, "commit", broken_commit)

    with pytest.raises(FailedToCreateError) as excinfo:
        book_db.create(_book())

    assert excinfo.value.reason == "Unexpected error during creation"


def test_get_and_get_all_with_predicates(book_db, make_book):
    make_book(author="A. Writer", title="One")
    make_book(author="A. Writer", title="Two")
    make_book(author="B. Writer", title="Three")

    assert book_db.get(models.Book.title == "Two").title == "Two"
    assert book_db.get(models.Book.title == "Missing") is None
    assert len(book_db.get_all(models.Book.author == "A. Writer")) == 2
    assert len(book_db.get_all()) == 3
    assert book_db.count(models.Book.author == "B. Writer") == 1


def test_get_all_offset_and_limit(book_db, make_book):
    books = [make_book() for _ in range(5)]

    page = book_db.get_all(order_by=models.Book.id.asc(), offset=2, limit=2)

    assert [b.id for b in page] == [books[2].id, books[3].id]


def test_update_applies_values(book_db, make_book):
    make_book(isbn="97812345678901", amount_available=2)

    updated = book_db.update(models.Book.isbn == "97812345678901", amount_available=7)

    assert updated.amount_available == 7


def test_update_missing_row_raises_not_found(book_db):
    with pytest.raises(NotFoundError):
        book_db.update(models.Book.isbn == "nope", amount_available=1)


def test_delete(book_db, make_book):
    make_book(isbn="97812345678901")

    deleted = book_db.delete(models.Book.isbn == "97812345678901")

    assert deleted.isbn == "97812345678901"
    assert book_db.count() == 0


def test_delete_missing_row_raises_not_found(book_db):
    with pytest.raises(NotFoundError):
        book_db.delete(models.Book.isbn == "nope")
