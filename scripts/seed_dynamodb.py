"""Create the TaskDesk DynamoDB tables and seed sample lookup data.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

TABLES: list[str] = ["projects", "employees", "tasks", "profiles", "user_roles"]

SAMPLE_PROJECTS: list[dict[str, Any]] = [
    {"id": "proj-website", "name": "Website Redesign"},
    {"id": "proj-mobile", "name": "Ứng dụng di động"},
    {"id": "proj-warehouse", "name": "Kho vận"},
]

SAMPLE_EMPLOYEES: list[dict[str, Any]] = [
    {"id": "emp-001", "full_name": "Nguyễn Văn An"},
    {"id": "emp-002", "full_name": "Trần Thị Bình"},
    {"id": "emp-003", "full_name": "Lê Minh Châu"},
]


def table_name(table: str, prefix: str = "taskdesk-", suffix: str = "") -> str:
    return f"{prefix}{table}{suffix}"


def create_tables(ddb: Any, prefix: str = "taskdesk-", suffix: str = "") -> None:
    """Create all row-store tables. Skips if table already exists."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for table in TABLES:
        name = table_name(table, prefix, suffix)
        if name in existing:
            print(f"  Table {name} already exists, skipping")
            continue
        client.create_table(
            TableName=name,
            KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
            AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {name}")


def seed_lookup_data(ddb: Any, prefix: str = "taskdesk-", suffix: str = "") -> None:
    """Seed sample projects and employees for import testing."""
    for table, rows in (("projects", SAMPLE_PROJECTS), ("employees", SAMPLE_EMPLOYEES)):
        tbl = ddb.Table(table_name(table, prefix, suffix))
        with tbl.batch_writer() as batch:
            for row in rows:
                batch.put_item(Item=row)
        print(f"  Seeded {len(rows)} {table}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for TaskDesk")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-prefix", default="taskdesk-", help="Table name prefix")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--no-sample-data", action="store_true", help="Only create tables")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating tables...")
    create_tables(ddb, prefix=args.table_prefix, suffix=args.table_suffix)

    if not args.no_sample_data:
        print("Seeding data...")
        seed_lookup_data(ddb, prefix=args.table_prefix, suffix=args.table_suffix)

    print("Done!")


if __name__ == "__main__":
    main()
