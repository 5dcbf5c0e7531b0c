"""
FastAPI bookstore service: HTTP surface for the query runner.

Features:
- Full query sequence run with per-step results
- Sample data seeding
- Index inspection
"""

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from cluster_manager import open_collection
from config import COLLECTION_NAME, DATABASE_NAME, MONGO_URI
from index_manager import get_collection_indexes
from query_runner import QueryParams, RunReport, run_queries
from seed_data import load_books
from logger import logger


app = FastAPI(title="Bookstore Query Runner", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------- REQUEST MODELS ----------------------


class CollectionTarget(BaseModel):
    mongo_uri: str = MONGO_URI
    database_name: str = DATABASE_NAME
    collection_name: str = COLLECTION_NAME


class RunRequest(CollectionTarget):
    params: QueryParams = QueryParams()
    only: Optional[List[str]] = None


class SeedRequest(CollectionTarget):
    drop: bool = False


# ---------------------- RESPONSE MODELS ----------------------


class RunResponse(RunReport):
    output: List[str] = []


# ---------------------- ENDPOINTS ----------------------


@app.post("/run-queries", response_model=RunResponse)
def run_all_queries(request: RunRequest):
    """Run the query sequence. A failed step is reported in the body, not as an HTTP error."""
    lines: List[str] = []
    try:
        report = run_queries(
            request.mongo_uri,
            request.database_name,
            request.collection_name,
            params=request.params,
            sink=lines.append,
            only=request.only,
        )
    except ValueError as e:
        logger.error("run-queries error: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("run-queries produced %d output blocks", len(lines))
    return RunResponse(**report.model_dump(), output=lines)


@app.post("/seed-books")
def seed_books(request: SeedRequest):
    """Load the sample books into the target collection."""
    try:
        with open_collection(
            request.mongo_uri,
            request.database_name,
            request.collection_name,
        ) as (_, collection):
            inserted = load_books(collection, drop=request.drop)
    except (ConnectionError, PyMongoError, ValueError) as e:
        logger.error("seed-books error: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"inserted": inserted}


@app.get("/indexes")
def get_indexes(
    mongo_uri: str = MONGO_URI,
    database_name: str = DATABASE_NAME,
    collection_name: str = COLLECTION_NAME,
):
    """Return index information for a collection."""
    try:
        with open_collection(mongo_uri, database_name, collection_name) as (_, collection):
            indexes = get_collection_indexes(collection)
    except (ConnectionError, PyMongoError) as e:
        logger.error("get-indexes error: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    return {"indexes": indexes}


@app.get("/health")
def health_check():
    return {"status": "ok", "version": "1.0.0"}
