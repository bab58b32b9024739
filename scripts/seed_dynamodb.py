"""Create the QuoteDesk DynamoDB tables and optionally load a sample census.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566 --sample
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

from quotedesk.core.config import AppSettings
from quotedesk.core.logging import configure_logging
from quotedesk.core.protocols import ICensusStore
from quotedesk.models.census import CensusUpload
from quotedesk.persistence.dynamodb_backend import TABLE_NAMES, DynamoDBCensusStore
from quotedesk.services.census_service import CensusService

SAMPLE_CLIENT_ID = "sample-client"
SAMPLE_COLUMNS = [
    "Employee Name", "DOB", "Zip", "Annual Salary", "Coverage Tier",
    "Gender", "Hours Per Week", "Hire Date",
]
SAMPLE_ROWS: list[dict[str, Any]] = [
    {"Employee Name": "Ada Park", "DOB": "1985-04-12", "Zip": "30301",
     "Annual Salary": "$72,000", "Coverage Tier": "EE", "Gender": "F",
     "Hours Per Week": "40", "Hire Date": "03/01/2019"},
    {"Employee Name": "Luis Ortega", "DOB": "07/23/1990", "Zip": "30305",
     "Annual Salary": "58000", "Coverage Tier": "FAM", "Gender": "M",
     "Hours Per Week": "38", "Hire Date": "2021-06-14"},
    {"Employee Name": "Sam Reyes", "DOB": "not a date", "Zip": "3030",
     "Annual Salary": "0", "Coverage Tier": "", "Gender": "",
     "Hours Per Week": "200", "Hire Date": ""},
]


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create all QuoteDesk tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for name in TABLE_NAMES:
        table_name = f"{name}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def seed_sample_census(store: ICensusStore, client_id: str = SAMPLE_CLIENT_ID) -> CensusUpload:
    """Save and validate a small sample census for ``client_id``."""
    service = CensusService(settings=AppSettings(), store=store)
    upload, result = service.save_census(client_id, "sample_census.csv", SAMPLE_COLUMNS, SAMPLE_ROWS)
    print(
        f"  Seeded census {upload.id}: {result.total_rows} rows, "
        f"PEO {result.peo_score}%, ACA {result.aca_score}%"
    )
    return upload


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--endpoint-url", default=None)
    parser.add_argument("--region", default="us-east-1")
    parser.add_argument("--suffix", default="")
    parser.add_argument("--sample", action="store_true", help="Also load a sample census")
    args = parser.parse_args()

    configure_logging("INFO")
    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url
    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, suffix=args.suffix)
    if args.sample:
        print("Seeding sample census...")
        store = DynamoDBCensusStore(
            table_suffix=args.suffix, region=args.region, endpoint_url=args.endpoint_url,
        )
        seed_sample_census(store)
    print("Done.")


if __name__ == "__main__":
    main()
