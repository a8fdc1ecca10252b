"""DynamoDB backend implementing IDataStore."""

from __future__ import annotations

import uuid
from decimal import Decimal
from functools import reduce
from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from taskdesk.core.exceptions import DataStoreError


def _decode_decimals(item: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values in a DynamoDB item to int/float."""
    out: dict[str, Any] = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            out[k] = int(v) if v == int(v) else float(v)
        elif isinstance(v, dict):
            out[k] = _decode_decimals(v)
        else:
            out[k] = v
    return out


def _encode_item(row: dict[str, Any]) -> dict[str, Any]:
    """Drop None attributes and convert floats to Decimal for DynamoDB."""
    out: dict[str, Any] = {}
    for k, v in row.items():
        if v is None:
            continue
        out[k] = Decimal(str(v)) if isinstance(v, float) else v
    return out


class DynamoDBDataStore:
    """Production IDataStore: one DynamoDB table per logical table, hash key ``id``."""

    def __init__(self, table_prefix: str = "taskdesk-", table_suffix: str = "",
                 region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._table_prefix = table_prefix
        self._table_suffix = table_suffix
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._ddb = boto3.resource("dynamodb", **kwargs)

    def table_name(self, table: str) -> str:
        return f"{self._table_prefix}{table}{self._table_suffix}"

    def _table(self, table: str):
        return self._ddb.Table(self.table_name(table))

    def select(
        self, table: str, filters: dict[str, Any] | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]:
        # Scan's Limit applies before filtering, so page until enough rows match.
        tbl = self._table(table)
        kwargs: dict[str, Any] = {}
        if filters:
            kwargs["FilterExpression"] = reduce(
                lambda acc, cond: acc & cond,
                (Attr(k).eq(v) for k, v in filters.items()),
            )
        items: list[dict[str, Any]] = []
        try:
            while True:
                resp = tbl.scan(**kwargs)
                items.extend(_decode_decimals(i) for i in resp.get("Items", []))
                if limit is not None and len(items) >= limit:
                    return items[:limit]
                last_key = resp.get("LastEvaluatedKey")
                if not last_key:
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except ClientError as exc:
            raise DataStoreError(f"select from {table!r} failed: {exc}") from exc

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        item = _encode_item({**row, "id": row.get("id") or str(uuid.uuid4())})
        try:
            self._table(table).put_item(
                Item=item, ConditionExpression=Attr("id").not_exists(),
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise DataStoreError(
                    f"duplicate key value violates unique constraint on {table}.id"
                ) from exc
            raise DataStoreError(f"insert into {table!r} failed: {exc}") from exc
        return _decode_decimals(item)

    def upsert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        item = _encode_item({**row, "id": row.get("id") or str(uuid.uuid4())})
        try:
            self._table(table).put_item(Item=item)
        except ClientError as exc:
            raise DataStoreError(f"upsert into {table!r} failed: {exc}") from exc
        return _decode_decimals(item)
