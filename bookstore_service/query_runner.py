"""
Query runner: executes the fixed, ordered sequence of book operations over
one scoped connection and reports each result to an output sink.

Failure semantics:
  - the first step that raises is recorded as ``failed``
  - every later step is recorded as ``skipped``
  - the error is logged once and written once to the sink
  - the connection is closed on every path
"""

from typing import Any, Callable, List, NamedTuple, Optional, Sequence

from pydantic import BaseModel, Field
from pymongo.collection import Collection

from aggregations import avg_price_by_genre, books_by_decade, top_author
from book_queries import (
    delete_by_title,
    find_by_author,
    find_by_genre,
    find_by_title,
    find_in_stock_after,
    find_published_after,
    find_summaries,
    paginate_by_title,
    sort_by_price,
    update_price,
)
from cluster_manager import open_collection
from config import COLLECTION_NAME, DATABASE_NAME, DEFAULT_PAGE_SIZE, MONGO_URI
from index_manager import (
    create_author_year_index,
    create_title_index,
    explain_title_lookup,
)
from response_formatter import Sink, emit, to_json_safe
from logger import logger

STATUS_OK = "ok"
STATUS_FAILED = "failed"
STATUS_SKIPPED = "skipped"

CONNECT_STEP = "connect"
DISCONNECT_STEP = "disconnect"
CONNECT_HEADING = "Connected to MongoDB"
DISCONNECT_HEADING = "Connection closed"


# ---------------------- MODELS ----------------------


class QueryParams(BaseModel):
    """Inputs for the query sequence; defaults reproduce the classic run."""

    genre: str = "Fantasy"
    published_after: int = 1950
    author: str = "George Orwell"
    update_title: str = "1984"
    new_price: float = 15.99
    delete_title: str = "Moby Dick"
    in_stock_after: int = 2010
    page: int = Field(default=1, ge=1, description="Page number (1-based)")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    explain_title: str = "1984"


class StepResult(BaseModel):
    name: str
    heading: str
    status: str
    result: Any = None
    error: Optional[str] = None


class RunReport(BaseModel):
    database: str
    collection: str
    steps: List[StepResult] = []
    succeeded: bool = True
    error: Optional[str] = None

    def step(self, name: str) -> Optional[StepResult]:
        for s in self.steps:
            if s.name == name:
                return s
        return None


class Step(NamedTuple):
    name: str
    heading: str
    operation: Callable[[Collection], Any]


# ---------------------- STEP TABLE ----------------------


def build_steps(params: QueryParams) -> List[Step]:
    """The operations in execution order. Later steps may observe earlier writes."""
    p = params
    return [
        Step("genre", f'Books in genre "{p.genre}":',
             lambda c: find_by_genre(c, p.genre)),
        Step("published_after", f"Books published after {p.published_after}:",
             lambda c: find_published_after(c, p.published_after)),
        Step("author", f"Books by {p.author}:",
             lambda c: find_by_author(c, p.author)),
        Step("update_price", f'Update result for "{p.update_title}" (documents modified):',
             lambda c: update_price(c, p.update_title, p.new_price)),
        Step("read_back", "Updated book:",
             lambda c: find_by_title(c, p.update_title)),
        Step("delete", f'Delete result for "{p.delete_title}" (documents deleted):',
             lambda c: delete_by_title(c, p.delete_title)),
        Step("verify_delete", "Check if deleted:",
             lambda c: find_by_title(c, p.delete_title)),
        Step("in_stock_after", f"Books in stock & published after {p.in_stock_after}:",
             lambda c: find_in_stock_after(c, p.in_stock_after)),
        Step("projection", "Books with only title, author, and price:",
             find_summaries),
        Step("price_ascending", "Books sorted by price (ascending):",
             lambda c: sort_by_price(c)),
        Step("price_descending", "Books sorted by price (descending):",
             lambda c: sort_by_price(c, descending=True)),
        Step("page", f"Page {p.page} ({p.page_size} books per page):",
             lambda c: paginate_by_title(c, p.page, p.page_size)),
        Step("avg_price_by_genre", "Average price of books by genre:",
             avg_price_by_genre),
        Step("top_author", "Author with the most books:",
             top_author),
        Step("books_by_decade", "Books grouped by publication decade:",
             books_by_decade),
        Step("title_index", "Index created on title field:",
             create_title_index),
        Step("author_year_index", "Compound index created on author + published_year:",
             create_author_year_index),
        Step("explain", f'Explain plan for query on title "{p.explain_title}":',
             lambda c: explain_title_lookup(c, p.explain_title)),
    ]


STEP_NAMES = [s.name for s in build_steps(QueryParams())]


def select_steps(steps: List[Step], only: Optional[Sequence[str]]) -> List[Step]:
    """Keep the steps named in *only*, in execution order."""
    if not only:
        return steps
    unknown = sorted(set(only) - {s.name for s in steps})
    if unknown:
        raise ValueError(f"Unknown step(s): {unknown}. Valid steps: {STEP_NAMES}")
    wanted = set(only)
    return [s for s in steps if s.name in wanted]


# ---------------------- RUNNER ----------------------


def execute_steps(
    collection: Collection,
    steps: List[Step],
    sink: Sink,
    report: RunReport,
) -> None:
    """Run *steps* in order against *collection*, appending to *report*.

    Raises the first step error after recording it; the remaining steps are
    left for the caller to mark as skipped.
    """
    for index, step in enumerate(steps, start=1):
        logger.info("[RUN] Step %d: %s", index, step.name)
        try:
            value = to_json_safe(step.operation(collection))
        except Exception as e:
            report.steps.append(StepResult(
                name=step.name, heading=step.heading,
                status=STATUS_FAILED, error=str(e),
            ))
            raise
        report.steps.append(StepResult(
            name=step.name, heading=step.heading,
            status=STATUS_OK, result=value,
        ))
        emit(sink, step.heading, value)


def run_queries(
    mongo_uri: str = MONGO_URI,
    database_name: str = DATABASE_NAME,
    collection_name: str = COLLECTION_NAME,
    params: Optional[QueryParams] = None,
    sink: Sink = print,
    only: Optional[Sequence[str]] = None,
) -> RunReport:
    """Connect, run every selected step, and always disconnect.

    Never raises for database errors: a failure is reported in the returned
    :class:`RunReport` (``succeeded=False``). Unknown step names in *only*
    raise ``ValueError`` before any connection is made.
    """
    steps = select_steps(build_steps(params or QueryParams()), only)
    report = RunReport(database=database_name, collection=collection_name)
    connected = False

    try:
        with open_collection(mongo_uri, database_name, collection_name) as (_, collection):
            connected = True
            report.steps.append(StepResult(
                name=CONNECT_STEP, heading=CONNECT_HEADING, status=STATUS_OK,
            ))
            sink(CONNECT_HEADING)
            execute_steps(collection, steps, sink, report)
    except Exception as e:
        report.succeeded = False
        report.error = str(e)
        logger.error("[RUN] Aborted: %s", e)
        sink(f"Error: {e}")
        if not connected:
            report.steps.append(StepResult(
                name=CONNECT_STEP, heading=CONNECT_HEADING,
                status=STATUS_FAILED, error=str(e),
            ))

    done = {s.name for s in report.steps}
    for step in steps:
        if step.name not in done:
            report.steps.append(StepResult(
                name=step.name, heading=step.heading, status=STATUS_SKIPPED,
            ))

    # the client is closed on every path, including a failed connect
    report.steps.append(StepResult(
        name=DISCONNECT_STEP, heading=DISCONNECT_HEADING, status=STATUS_OK,
    ))
    sink(DISCONNECT_HEADING)

    logger.info(
        "[RUN] Finished %s.%s, succeeded=%s", database_name, collection_name, report.succeeded,
    )
    return report
