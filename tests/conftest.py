import mongomock
import pytest

import cluster_manager
from seed_data import SAMPLE_BOOKS, validate_books

DB_NAME = "plp_bookstore"
COLLECTION_NAME = "books"


def _make_book(title, author="Anon", genre="Fiction", year=2000, price=10.0, in_stock=True):
    return {
        "title": title,
        "author": author,
        "genre": genre,
        "published_year": year,
        "price": price,
        "in_stock": in_stock,
    }


@pytest.fixture()
def make_book():
    return _make_book


@pytest.fixture()
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture()
def collection(mongo_client):
    return mongo_client[DB_NAME][COLLECTION_NAME]


@pytest.fixture()
def books(collection):
    """The sample books, already loaded."""
    collection.insert_many(validate_books(SAMPLE_BOOKS))
    return collection


@pytest.fixture()
def patched_client(monkeypatch, mongo_client):
    """Route every MongoClient created by cluster_manager to the mock client."""
    monkeypatch.setattr(cluster_manager, "MongoClient", lambda *args, **kwargs: mongo_client)
    return mongo_client
