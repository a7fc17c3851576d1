from sqlalchemy import Column, Integer, String

from database import Base


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    author = Column(String(100), nullable=False, index=True)
    isbn = Column(String(17), nullable=False, unique=True, index=True)
    publication_year = Column(Integer, nullable=False, default=0)
    amount_available = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Book id={self.id} isbn={self.isbn!r} available={self.amount_available}>"
