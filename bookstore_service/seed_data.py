"""
Sample book fixture and loader.

Seeding is a separate step: the query sequence itself never inserts
documents, it expects the collection to be populated beforehand.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pymongo.collection import Collection

from logger import logger


class Book(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = Field(min_length=1)
    author: str
    genre: str
    published_year: int
    price: float = Field(ge=0)
    in_stock: bool
    pages: Optional[int] = None
    publisher: Optional[str] = None


SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "genre": "Fiction",
     "published_year": 1960, "price": 12.99, "in_stock": True, "pages": 336,
     "publisher": "J. B. Lippincott & Co."},
    {"title": "1984", "author": "George Orwell", "genre": "Dystopian",
     "published_year": 1949, "price": 10.99, "in_stock": True, "pages": 328,
     "publisher": "Secker & Warburg"},
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "genre": "Fiction",
     "published_year": 1925, "price": 9.99, "in_stock": True, "pages": 180,
     "publisher": "Charles Scribner's Sons"},
    {"title": "Brave New World", "author": "Aldous Huxley", "genre": "Dystopian",
     "published_year": 1932, "price": 11.50, "in_stock": False, "pages": 311,
     "publisher": "Chatto & Windus"},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1937, "price": 14.99, "in_stock": True, "pages": 310,
     "publisher": "George Allen & Unwin"},
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger", "genre": "Fiction",
     "published_year": 1951, "price": 8.99, "in_stock": True, "pages": 224,
     "publisher": "Little, Brown and Company"},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Romance",
     "published_year": 1813, "price": 7.99, "in_stock": True, "pages": 432,
     "publisher": "T. Egerton, Whitehall"},
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1954, "price": 19.99, "in_stock": True, "pages": 1178,
     "publisher": "Allen & Unwin"},
    {"title": "Animal Farm", "author": "George Orwell", "genre": "Political Satire",
     "published_year": 1945, "price": 8.50, "in_stock": False, "pages": 112,
     "publisher": "Secker & Warburg"},
    {"title": "The Alchemist", "author": "Paulo Coelho", "genre": "Fiction",
     "published_year": 1988, "price": 10.99, "in_stock": True, "pages": 197,
     "publisher": "HarperOne"},
    {"title": "Moby Dick", "author": "Herman Melville", "genre": "Adventure",
     "published_year": 1851, "price": 12.50, "in_stock": False, "pages": 635,
     "publisher": "Harper & Brothers"},
    {"title": "Wuthering Heights", "author": "Emily Brontë", "genre": "Gothic Fiction",
     "published_year": 1847, "price": 9.99, "in_stock": True, "pages": 342,
     "publisher": "Thomas Cautley Newby"},
]


def validate_books(books: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Validate raw records with :class:`Book`; raises ``pydantic.ValidationError``."""
    return [Book(**raw).model_dump(exclude_none=True) for raw in books]


def load_books(
    collection: Collection,
    books: Optional[List[Dict[str, Any]]] = None,
    drop: bool = False,
) -> int:
    """Insert *books* (the sample fixture by default); returns the inserted count.

    With ``drop=True`` the existing documents are removed first.
    """
    docs = validate_books(SAMPLE_BOOKS if books is None else books)

    if drop:
        removed = collection.delete_many({}).deleted_count
        logger.info("Seed: removed %d existing documents", removed)

    if not docs:
        return 0

    result = collection.insert_many(docs)
    logger.info("Seed: inserted %d books into %s", len(result.inserted_ids), collection.name)
    return len(result.inserted_ids)
