from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from dentdirectory.core.datastore import DEFAULT_TABLES, DataAccessError
from dentdirectory.output.static_site import SiteSettings

ROOT = Path(__file__).resolve().parents[1]


class FakeDatastore:
    """In-memory stand-in for DatastoreClient.select."""

    def __init__(self, rows: Dict[str, List[Dict[str, Any]]], fail_on: str = "") -> None:
        self.rows = rows
        self.tables = dict(DEFAULT_TABLES)
        self.fail_on = fail_on
        self.calls: List[Tuple[str, str, Dict[str, Any], Optional[Tuple[str, bool]]]] = []

    def select(
        self,
        table: str,
        *,
        columns: str = "*",
        eq: Optional[Dict[str, Any]] = None,
        order: Optional[Tuple[str, bool]] = None,
    ) -> List[Dict[str, Any]]:
        self.calls.append((table, columns, dict(eq or {}), order))
        if table == self.fail_on:
            raise DataAccessError(f"{table}: permission denied for table {table}")
        out = [copy.deepcopy(r) for r in self.rows.get(table, [])]
        for col, value in (eq or {}).items():
            out = [r for r in out if str(r.get(col)) == str(value)]
        if order:
            col, ascending = order
            out.sort(key=lambda r: r.get(col) or 0, reverse=not ascending)
        if columns == "*":
            for r in out:
                r.pop("cities", None)
                r.pop("states", None)
        return out


def sample_rows() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "states": [
            {"id": 1, "name": "California", "slug": "california", "emoji": None,
             "store_count": 12, "city_count": 2},
            {"id": 2, "name": "Texas", "slug": "texas", "emoji": "🤠",
             "store_count": 7, "city_count": 1},
            {"id": 3, "name": "Vermont", "slug": "vermont", "emoji": "🍁",
             "store_count": 3, "city_count": 0},
        ],
        "cities": [
            {"id": 10, "name": "Los Angeles", "slug": "los-angeles", "state_id": 1,
             "store_count": 2},
            {"id": 11, "name": "Fresno", "slug": "fresno", "state_id": 1, "store_count": 1},
            {"id": 20, "name": "Austin", "slug": "austin", "state_id": 2, "store_count": 1},
        ],
        "stores": [
            {"id": 100, "name": "Dent Depot", "address": "1 Main St", "phone": "555-0100",
             "website": "https://dentdepot.example", "email": "hi@dentdepot.example",
             "description": "Big outlet.", "city_id": 10, "state_id": 1,
             "cities": {"name": "Los Angeles", "slug": "los-angeles"},
             "states": {"name": "California", "slug": "california"}},
            {"id": 101, "name": "Appliance Barn", "address": None, "phone": None,
             "website": None, "email": None, "description": None, "city_id": 10,
             "state_id": 1,
             "cities": {"name": "Los Angeles", "slug": "los-angeles"},
             "states": {"name": "California", "slug": "california"}},
            {"id": 102, "name": "Fresno Scratch", "address": "9 Elm Ave", "phone": "555-0102",
             "website": None, "email": None, "description": None, "city_id": 11,
             "state_id": 1, "cities": None, "states": None},
            {"id": 103, "name": "Lone Star Outlet", "address": "77 Congress Ave",
             "phone": None, "website": "https://lonestar.example", "email": None,
             "description": None, "city_id": 20, "state_id": 2,
             "cities": {"name": "Austin", "slug": "austin"},
             "states": {"name": "Texas", "slug": "texas"}},
        ],
    }


@pytest.fixture
def fake_store() -> FakeDatastore:
    return FakeDatastore(sample_rows())


@pytest.fixture
def site(tmp_path: Path) -> SiteSettings:
    return SiteSettings(
        output_dir=tmp_path / "public",
        template_dir=ROOT / "site" / "templates",
        stylesheet=ROOT / "site" / "styles" / "main.css",
    )


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)
