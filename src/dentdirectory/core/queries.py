from __future__ import annotations

from typing import Any, List

from .datastore import DataAccessError, DatastoreClient
from .schema import Entry, Region, SubRegion

ENTRY_WITH_PARENTS = "*,cities(name,slug),states(name,slug)"


def list_regions(client: DatastoreClient) -> List[Region]:
    """All states, biggest first."""
    rows = client.select(client.tables["regions"], order=("store_count", False))
    return [Region.from_row(r) for r in rows]


def list_sub_regions(client: DatastoreClient, region_id: Any) -> List[SubRegion]:
    rows = client.select(
        client.tables["sub_regions"],
        eq={"state_id": region_id},
        order=("store_count", False),
    )
    return [SubRegion.from_row(r) for r in rows]


def list_entries(client: DatastoreClient, sub_region_id: Any) -> List[Entry]:
    rows = client.select(
        client.tables["entries"],
        eq={"city_id": sub_region_id},
        order=("name", True),
    )
    return [Entry.from_row(r) for r in rows]


def list_all_entries(client: DatastoreClient) -> List[Entry]:
    """Every store with its city/state name+slug embedded, ordered by id."""
    rows = client.select(
        client.tables["entries"],
        columns=ENTRY_WITH_PARENTS,
        order=("id", True),
    )
    return [Entry.from_row(r) for r in rows]


def get_entry(client: DatastoreClient, entry_id: Any) -> Entry:
    rows = client.select(
        client.tables["entries"],
        columns=ENTRY_WITH_PARENTS,
        eq={"id": entry_id},
    )
    if len(rows) != 1:
        raise DataAccessError(f"expected exactly one store with id={entry_id}, got {len(rows)}")
    return Entry.from_row(rows[0])
