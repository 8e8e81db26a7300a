"""
Subgraph holder queries.

Fetches snxholders rows (id, initialDebtOwnership, debtEntryAtIndex) for a set
of addresses at a block. One page only: at most 1000 holders per query, the
rest are dropped.

Sources:
- SubgraphHolderSource: live GraphQL endpoint
- StaticHolderSource: holder rows exported to a JSON file
- FallbackHolderSource: live source, static rows when the live one is down
"""

import json
import logging
from typing import Dict, Any, Iterable, List, Optional

import requests

from ..core.exceptions import QueryError, MalformedResponseError
from ..core.models import BlockTag, HolderRecord

logger = logging.getLogger(__name__)

MAX_FIRST = 1000

HOLDERS_QUERY = """
query SnxHolders($ids: [String!], $first: Int!) {
    snxholders(
        where: { id_in: $ids }
        first: $first
    ) {
        id
        initialDebtOwnership
        debtEntryAtIndex
    }
}
"""

HOLDERS_QUERY_AT_BLOCK = """
query SnxHolders($ids: [String!], $first: Int!, $block: Int!) {
    snxholders(
        where: { id_in: $ids }
        first: $first
        block: { number: $block }
    ) {
        id
        initialDebtOwnership
        debtEntryAtIndex
    }
}
"""


def _lowercase_unique(addresses: Iterable[str]) -> List[str]:
    seen = set()
    ids = []
    for address in addresses:
        lowered = address.lower()
        if lowered not in seen:
            seen.add(lowered)
            ids.append(lowered)
    return ids


def build_holders_query(addresses: Iterable[str], block: BlockTag, first: int = MAX_FIRST) -> Dict[str, Any]:
    """
    Build the GraphQL request body for a holder query.

    Args:
        addresses: Addresses in any letter case
        block: Block number, or "latest" to query the indexed head
        first: Result cap (clamped to 1000)

    Returns:
        Dict with "query" and "variables"
    """
    variables: Dict[str, Any] = {
        "ids": _lowercase_unique(addresses),
        "first": min(first, MAX_FIRST),
    }
    if isinstance(block, int) and not isinstance(block, bool):
        variables["block"] = block
        return {"query": HOLDERS_QUERY_AT_BLOCK, "variables": variables}
    return {"query": HOLDERS_QUERY, "variables": variables}


def _malformed(message: str, endpoint: str, strict: bool, context: Optional[Dict[str, Any]] = None) -> List[HolderRecord]:
    if strict:
        raise MalformedResponseError(message, endpoint=endpoint, context=context)
    logger.warning("%s (%s); treating as no holders", message, endpoint)
    return []


def parse_holders(payload: Any, endpoint: str = "", strict: bool = False) -> List[HolderRecord]:
    """
    Turn a GraphQL response body into holder records.

    Bodies with GraphQL errors or no holder list give an empty list. Unreadable
    rows are skipped one by one; the rest of the page is kept. Both raise
    MalformedResponseError when strict. Null debt fields read as 0.
    """
    if not isinstance(payload, dict):
        return _malformed("Subgraph response is not a JSON object", endpoint, strict)

    if payload.get("errors"):
        return _malformed(
            f"GraphQL errors: {payload['errors']}", endpoint, strict,
            context={"errors": payload["errors"]}
        )

    data = payload.get("data") or {}
    rows = data.get("snxholders") if isinstance(data, dict) else None
    if rows is None:
        return _malformed("No snxholders in subgraph response", endpoint, strict)
    if not isinstance(rows, list):
        return _malformed("snxholders is not a list", endpoint, strict)

    holders = []
    for row in rows:
        try:
            holders.append(HolderRecord.from_dict(row))
        except (KeyError, TypeError, ValueError) as e:
            if strict:
                raise MalformedResponseError(
                    f"Unreadable holder row: {e}",
                    endpoint=endpoint,
                    context={"row": row},
                    original_error=e,
                ) from e
            logger.warning("Unreadable holder row from %s skipped: %r (%s)", endpoint, row, e)
    return holders


def query_holders(
    endpoint: str,
    block: BlockTag,
    addresses: Iterable[str],
    first: int = MAX_FIRST,
    timeout: int = 30,
    strict: bool = False
) -> List[HolderRecord]:
    """
    Query holder records for addresses at a block.

    Args:
        endpoint: Subgraph GraphQL URL
        block: Block number or "latest"
        addresses: Addresses to look up (case-insensitive)
        first: Result cap, at most 1000
        timeout: HTTP timeout in seconds
        strict: Raise MalformedResponseError instead of returning []

    Returns:
        List of HolderRecord, at most `first` long

    Raises:
        QueryError: transport failure or non-200 response
    """
    body = build_holders_query(addresses, block, first)
    if not body["variables"]["ids"]:
        return []

    try:
        response = requests.post(endpoint, json=body, timeout=timeout)
    except requests.RequestException as e:
        raise QueryError(
            "Subgraph request failed", endpoint=endpoint, original_error=e
        ) from e

    if response.status_code != 200:
        raise QueryError(
            f"HTTP {response.status_code}: {response.text[:200]}",
            endpoint=endpoint,
            status_code=response.status_code,
        )

    try:
        payload = response.json()
    except ValueError:
        return _malformed("Subgraph response is not JSON", endpoint, strict)

    holders = parse_holders(payload, endpoint=endpoint, strict=strict)
    cap = body["variables"]["first"]
    if len(holders) > cap:
        logger.warning("Subgraph returned %d holders, keeping first %d", len(holders), cap)
        holders = holders[:cap]

    logger.info("Fetched %d holders from %s at block %s", len(holders), endpoint, block)
    return holders


# =============================================================================
# HOLDER SOURCES
# =============================================================================

class SubgraphHolderSource:
    """Live holder lookups against one subgraph endpoint."""

    def __init__(self, endpoint: str, first: int = MAX_FIRST, timeout: int = 30, strict: bool = False):
        if not endpoint:
            raise ValueError("Subgraph endpoint is required")
        self.endpoint = endpoint
        self.first = first
        self.timeout = timeout
        self.strict = strict

    def fetch(self, block: BlockTag, addresses: Iterable[str]) -> List[HolderRecord]:
        return query_holders(
            self.endpoint, block, addresses,
            first=self.first, timeout=self.timeout, strict=self.strict
        )

    def __repr__(self) -> str:
        return f"SubgraphHolderSource({self.endpoint!r})"


class StaticHolderSource:
    """
    Holder rows exported ahead of time, e.g. a subgraph dump taken at the
    secondary snapshot block. The block argument is ignored.
    """

    def __init__(self, records: Iterable[HolderRecord], first: int = MAX_FIRST):
        self.records = {record.id: record for record in records}
        self.first = first

    @classmethod
    def from_dict(cls, data: Any, first: int = MAX_FIRST) -> "StaticHolderSource":
        """Accepts {"snxholders": [...]}, {"data": {"snxholders": [...]}} or a bare list."""
        if isinstance(data, dict):
            data = (data.get("data") or data).get("snxholders") or []
        return cls([HolderRecord.from_dict(row) for row in data], first=first)

    @classmethod
    def from_json_file(cls, file_path: str, first: int = MAX_FIRST) -> "StaticHolderSource":
        with open(file_path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data, first=first)

    def fetch(self, block: BlockTag, addresses: Iterable[str]) -> List[HolderRecord]:
        holders = [
            self.records[address]
            for address in _lowercase_unique(addresses)
            if address in self.records
        ]
        return holders[:self.first]

    def __repr__(self) -> str:
        return f"StaticHolderSource({len(self.records)} holders)"


class FallbackHolderSource:
    """Use `primary`; when it raises QueryError, log and use `fallback`."""

    def __init__(self, primary, fallback):
        self.primary = primary
        self.fallback = fallback

    def fetch(self, block: BlockTag, addresses: Iterable[str]) -> List[HolderRecord]:
        addresses = list(addresses)
        try:
            return self.primary.fetch(block, addresses)
        except QueryError as e:
            logger.warning("Holder query failed (%s); using fallback %r", e, self.fallback)
            return self.fallback.fetch(block, addresses)

    def __repr__(self) -> str:
        return f"FallbackHolderSource({self.primary!r}, {self.fallback!r})"
