"""
Book queries: filters, single-record update/delete, projection, sorting
and pagination against the ``books`` collection.

Every function takes the collection handle explicitly; nothing here opens
or closes a connection.
"""

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from config import DEFAULT_PAGE_SIZE
from logger import logger

# ---------------------- CONSTANTS ----------------------

SUMMARY_FIELDS = ["title", "author", "price"]


# ---------------------- HELPERS ----------------------

def _build_projection(fields: Optional[List[str]]) -> Optional[Dict[str, int]]:
    """Convert a list of field names into a MongoDB projection dict without ``_id``."""
    if not fields:
        return None
    projection = {f: 1 for f in fields}
    projection["_id"] = 0
    return projection


def page_offset(page: int, page_size: int) -> int:
    """Number of documents to skip for a 1-based *page*."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return (page - 1) * page_size


# ---------------------- FILTERS ----------------------

def find_by_genre(collection: Collection, genre: str) -> List[Dict[str, Any]]:
    """Books whose genre is exactly *genre* (case-sensitive)."""
    return list(collection.find({"genre": genre}))


def find_published_after(collection: Collection, year: int) -> List[Dict[str, Any]]:
    return list(collection.find({"published_year": {"$gt": year}}))


def find_by_author(collection: Collection, author: str) -> List[Dict[str, Any]]:
    return list(collection.find({"author": author}))


def find_in_stock_after(collection: Collection, year: int) -> List[Dict[str, Any]]:
    """Books that are in stock AND published strictly after *year*."""
    return list(collection.find({
        "in_stock": True,
        "published_year": {"$gt": year},
    }))


def find_by_title(collection: Collection, title: str) -> Optional[Dict[str, Any]]:
    """First book matching *title*, or ``None``."""
    return collection.find_one({"title": title})


# ---------------------- WRITES ----------------------

def update_price(collection: Collection, title: str, price: float) -> int:
    """Set the price of the first book titled *title*.

    Returns the modified count (0 or 1). A missing title is not an error.
    """
    result = collection.update_one({"title": title}, {"$set": {"price": price}})
    logger.info(
        "update_price '%s' -> %s: matched=%d modified=%d",
        title, price, result.matched_count, result.modified_count,
    )
    return result.modified_count


def delete_by_title(collection: Collection, title: str) -> int:
    """Delete the first book titled *title*; returns the deleted count (0 or 1)."""
    result = collection.delete_one({"title": title})
    logger.info("delete_by_title '%s': deleted=%d", title, result.deleted_count)
    return result.deleted_count


# ---------------------- PROJECTION / SORT / PAGINATION ----------------------

def find_summaries(
    collection: Collection,
    fields: Optional[List[str]] = None,
) -> List[Dict[str, Any]]:
    """All books restricted to *fields* (title, author and price by default)."""
    projection = _build_projection(fields or SUMMARY_FIELDS)
    return list(collection.find({}, projection))


def sort_by_price(collection: Collection, descending: bool = False) -> List[Dict[str, Any]]:
    direction = DESCENDING if descending else ASCENDING
    return list(collection.find({}).sort("price", direction))


def paginate_by_title(
    collection: Collection,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """One page of books ordered by title.

    ``page`` is 1-based; a page past the end is an empty list.
    """
    skip = page_offset(page, page_size)
    cursor = (
        collection.find({})
        .sort("title", ASCENDING)
        .skip(skip)
        .limit(page_size)
    )
    return list(cursor)
