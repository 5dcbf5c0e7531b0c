"""
Aggregation pipelines over the ``books`` collection.

Each report has a pipeline builder (pure, returns the stage list) and a
runner that executes it against an explicitly passed collection:

  - average price per genre, highest first
  - the author with the most books
  - books grouped by publication decade, oldest first
"""

from typing import Any, Dict, List

from pymongo.collection import Collection

from logger import logger

Pipeline = List[Dict[str, Any]]


# ---------------------- PIPELINE BUILDERS ----------------------

def avg_price_by_genre_pipeline() -> Pipeline:
    return [
        {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}}},
        {"$sort": {"avgPrice": -1}},
    ]


def top_author_pipeline() -> Pipeline:
    # ties fall back to the engine's order
    return [
        {"$group": {"_id": "$author", "totalBooks": {"$sum": 1}}},
        {"$sort": {"totalBooks": -1}},
        {"$limit": 1},
    ]


def books_by_decade_pipeline() -> Pipeline:
    """decade = floor(published_year / 10) * 10"""
    return [
        {
            "$project": {
                "decade": {
                    "$multiply": [
                        {"$floor": {"$divide": ["$published_year", 10]}},
                        10,
                    ]
                },
                "title": 1,
            }
        },
        {
            "$group": {
                "_id": "$decade",
                "totalBooks": {"$sum": 1},
                "titles": {"$push": "$title"},
            }
        },
        {"$sort": {"_id": 1}},
    ]


# ---------------------- RUNNERS ----------------------

def _run(collection: Collection, name: str, pipeline: Pipeline) -> List[Dict[str, Any]]:
    logger.debug("Aggregation %s: %s", name, pipeline)
    results = list(collection.aggregate(pipeline))
    logger.info("Aggregation %s returned %d rows", name, len(results))
    return results


def avg_price_by_genre(collection: Collection) -> List[Dict[str, Any]]:
    return _run(collection, "avg_price_by_genre", avg_price_by_genre_pipeline())


def top_author(collection: Collection) -> List[Dict[str, Any]]:
    """At most one row: ``{"_id": author, "totalBooks": n}``."""
    return _run(collection, "top_author", top_author_pipeline())


def books_by_decade(collection: Collection) -> List[Dict[str, Any]]:
    return _run(collection, "books_by_decade", books_by_decade_pipeline())
