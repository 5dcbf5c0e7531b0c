#!/usr/bin/env python3
"""
Bookstore Query Runner: command line
====================================

Usage:
    python run_queries.py [--uri URI] [--database DB] [--collection NAME]
                          [--page N] [--page-size N] [--only STEP ...] [--seed [--drop]]

Example:
    python run_queries.py --seed --drop --page 2
    python run_queries.py --only genre --only top_author

Runs the fixed sequence of book queries, updates, deletes, aggregations and
index operations, printing one block per step. Exits with status 1 when a
step failed.
"""

import argparse
import sys
from typing import List, Optional

from cluster_manager import open_collection
from config import COLLECTION_NAME, DATABASE_NAME, DEFAULT_PAGE_SIZE, MONGO_URI
from query_runner import STEP_NAMES, QueryParams, run_queries
from seed_data import load_books


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bookstore Query Runner")
    parser.add_argument("--uri", default=MONGO_URI, help="MongoDB connection URI")
    parser.add_argument("--database", default=DATABASE_NAME, help="Database name")
    parser.add_argument("--collection", default=COLLECTION_NAME, help="Collection name")
    parser.add_argument("--page", type=int, default=1, help="Page number for the pagination step (1-based)")
    parser.add_argument("--page-size", type=int, default=DEFAULT_PAGE_SIZE, help="Books per page")
    parser.add_argument(
        "--only", action="append", choices=STEP_NAMES, metavar="STEP",
        help=f"Run only this step (repeatable). Choices: {', '.join(STEP_NAMES)}",
    )
    parser.add_argument("--seed", action="store_true", help="Load the sample books before running")
    parser.add_argument("--drop", action="store_true", help="With --seed, delete existing documents first")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.page < 1 or args.page_size < 1:
        print("Error: --page and --page-size must be >= 1", file=sys.stderr)
        return 2

    if args.seed:
        try:
            with open_collection(args.uri, args.database, args.collection) as (_, collection):
                inserted = load_books(collection, drop=args.drop)
        except Exception as e:
            print(f"Error: seeding failed: {e}", file=sys.stderr)
            return 1
        print(f"Seeded {inserted} books into {args.database}.{args.collection}")

    params = QueryParams(page=args.page, page_size=args.page_size)
    report = run_queries(
        args.uri,
        args.database,
        args.collection,
        params=params,
        only=args.only,
    )
    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
