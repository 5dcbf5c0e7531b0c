from contextlib import contextmanager
from typing import Iterator, Tuple

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from config import SERVER_TIMEOUT_MS
from logger import logger


def connect_to_cluster(mongo_uri: str) -> MongoClient:
    """Create and test a MongoClient connection."""
    client = MongoClient(mongo_uri, serverSelectionTimeoutMS=SERVER_TIMEOUT_MS)
    try:
        client.server_info()  # force connection test
    except ServerSelectionTimeoutError as e:
        client.close()
        raise ConnectionError(
            "Connection timed out. Check your MongoDB URI and network."
        ) from e
    except ConnectionFailure as e:
        client.close()
        raise ConnectionError("Failed to connect to MongoDB cluster") from e
    except Exception:
        client.close()
        raise
    logger.info("Connected to MongoDB")
    return client


@contextmanager
def open_collection(
    mongo_uri: str,
    database_name: str,
    collection_name: str,
) -> Iterator[Tuple[MongoClient, Collection]]:
    """Yield ``(client, collection)`` and always close the client afterwards."""
    client = connect_to_cluster(mongo_uri)
    try:
        yield client, client[database_name][collection_name]
    finally:
        client.close()
        logger.info("Connection closed")

