from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from jsonschema import ValidationError
from jsonschema import validate as js_validate

from .datastore import DataAccessError
from .utils import safe_int

# Slugs and ids become directory names under the output root.
_SAFE = "^[A-Za-z0-9_-]+$"
_ID = {"anyOf": [{"type": "integer"}, {"type": "string", "pattern": _SAFE}]}
_SLUG = {"type": "string", "pattern": _SAFE}
_TEXT = {"type": "string"}
_OPT_TEXT = {"type": ["string", "null"]}
_OPT_COUNT = {"type": ["integer", "null"]}
_OPT_SLUG = {"type": ["string", "null"], "pattern": "^[A-Za-z0-9_-]*$"}
_PARENT = {
    "type": ["object", "null"],
    "properties": {"name": _OPT_TEXT, "slug": _OPT_SLUG},
}

REGION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "name", "slug"],
    "properties": {
        "id": _ID,
        "name": _TEXT,
        "slug": _SLUG,
        "emoji": _OPT_TEXT,
        "store_count": _OPT_COUNT,
        "city_count": _OPT_COUNT,
    },
}

SUB_REGION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "name", "slug"],
    "properties": {
        "id": _ID,
        "name": _TEXT,
        "slug": _SLUG,
        "state_id": {"type": ["integer", "string", "null"]},
        "store_count": _OPT_COUNT,
    },
}

ENTRY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["id", "name"],
    "properties": {
        "id": _ID,
        "name": _TEXT,
        "address": _OPT_TEXT,
        "phone": _OPT_TEXT,
        "website": _OPT_TEXT,
        "email": _OPT_TEXT,
        "description": _OPT_TEXT,
        "cities": _PARENT,
        "states": _PARENT,
    },
}


def check_row(row: Any, schema: Dict[str, Any], kind: str) -> Dict[str, Any]:
    try:
        js_validate(instance=row, schema=schema)
    except ValidationError as ex:
        raise DataAccessError(f"malformed {kind} row: {ex.message}") from ex
    return row


@dataclass(frozen=True)
class Region:
    id: Any
    name: str
    slug: str
    emoji: str = ""
    store_count: int = 0
    city_count: int = 0

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Region":
        check_row(row, REGION_SCHEMA, "region")
        return cls(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            emoji=row.get("emoji") or "",
            store_count=safe_int(row.get("store_count")),
            city_count=safe_int(row.get("city_count")),
        )


@dataclass(frozen=True)
class SubRegion:
    id: Any
    name: str
    slug: str
    region_id: Any = None
    store_count: int = 0

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SubRegion":
        check_row(row, SUB_REGION_SCHEMA, "sub-region")
        return cls(
            id=row["id"],
            name=row["name"],
            slug=row["slug"],
            region_id=row.get("state_id"),
            store_count=safe_int(row.get("store_count")),
        )


@dataclass(frozen=True)
class ParentRef:
    """Denormalized name + slug of an entry's city or state."""

    name: str = ""
    slug: str = ""

    @classmethod
    def from_embed(cls, embed: Optional[Dict[str, Any]]) -> Optional["ParentRef"]:
        if not embed:
            return None
        return cls(name=embed.get("name") or "", slug=embed.get("slug") or "")


@dataclass(frozen=True)
class Entry:
    id: Any
    name: str
    address: str = ""
    phone: str = ""
    website: str = ""
    email: str = ""
    description: str = ""
    sub_region_id: Any = None
    region_id: Any = None
    sub_region: Optional[ParentRef] = None
    region: Optional[ParentRef] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Entry":
        check_row(row, ENTRY_SCHEMA, "entry")
        return cls(
            id=row["id"],
            name=row["name"],
            address=row.get("address") or "",
            phone=row.get("phone") or "",
            website=row.get("website") or "",
            email=row.get("email") or "",
            description=row.get("description") or "",
            sub_region_id=row.get("city_id"),
            region_id=row.get("state_id"),
            sub_region=ParentRef.from_embed(row.get("cities")),
            region=ParentRef.from_embed(row.get("states")),
        )
