"""
Index utilities: declaring the title and author/year indexes, listing the
collection's indexes, and explaining a title lookup.
"""

from typing import Any, Dict, List

from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from logger import logger

TITLE_INDEX_KEYS = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX_KEYS = [("author", ASCENDING), ("published_year", DESCENDING)]

EXPLAIN_VERBOSITY = "executionStats"


# ---------------------- INDEX CREATION ----------------------

def create_title_index(collection: Collection) -> str:
    """Declare an ascending index on ``title``; returns the index name."""
    name = collection.create_index(TITLE_INDEX_KEYS)
    logger.info("Index created on title field: %s", name)
    return name


def create_author_year_index(collection: Collection) -> str:
    """Declare the compound ``(author asc, published_year desc)`` index."""
    name = collection.create_index(AUTHOR_YEAR_INDEX_KEYS)
    logger.info("Compound index created on author + published_year: %s", name)
    return name


# ---------------------- INDEX INSPECTION ----------------------

def get_collection_indexes(collection: Collection) -> List[Dict[str, Any]]:
    """Return a list of index descriptions for the collection.

    Each entry contains:
    - ``name``: index name
    - ``keys``: list of ``(field, direction)`` pairs
    - ``unique``: whether the index enforces uniqueness
    """
    indexes: List[Dict[str, Any]] = []
    for name, info in collection.index_information().items():
        indexes.append({
            "name": name,
            "keys": [list(pair) for pair in info.get("key", [])],
            "unique": info.get("unique", False),
        })
    return indexes


# ---------------------- EXPLAIN ----------------------

def explain_title_lookup(collection: Collection, title: str) -> Dict[str, Any]:
    """Run ``explain`` on ``find({"title": title})`` and return its executionStats."""
    plan = collection.database.command(
        "explain",
        {"find": collection.name, "filter": {"title": title}},
        verbosity=EXPLAIN_VERBOSITY,
    )
    stats = plan.get("executionStats", {})
    logger.info(
        "Explain title='%s': docsExamined=%s keysExamined=%s",
        title, stats.get("totalDocsExamined"), stats.get("totalKeysExamined"),
    )
    return stats
