from __future__ import annotations

from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..core.schema import Entry, Region, SubRegion

DEFAULT_EMOJI = "📍"


def _jinja_env() -> Environment:
    template_dir = Path(__file__).parent / "templates"
    # Record values go in verbatim, the same as the page-level placeholders.
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


_ENV = _jinja_env()


def region_link(base_path: str, section: str, region: Region) -> str:
    return f"{base_path}/{section}/{region.slug}"


def sub_region_link(base_path: str, section: str, region: Region, sub_region: SubRegion) -> str:
    return f"{base_path}/{section}/{region.slug}/{sub_region.slug}"


def entry_link(base_path: str, entry: Entry) -> str:
    return f"{base_path}/stores/{entry.id}"


def render_region_cards(regions: Iterable[Region], *, base_path: str, section: str) -> str:
    tpl = _ENV.get_template("region_card.html.j2")
    return "".join(
        tpl.render(
            region=r,
            emoji=r.emoji or DEFAULT_EMOJI,
            link=region_link(base_path, section, r),
        )
        for r in regions
    )


def render_sub_region_cards(
    region: Region, sub_regions: Iterable[SubRegion], *, base_path: str, section: str
) -> str:
    tpl = _ENV.get_template("city_card.html.j2")
    return "".join(
        tpl.render(city=c, link=sub_region_link(base_path, section, region, c))
        for c in sub_regions
    )


def render_entry_cards(entries: Iterable[Entry], *, base_path: str) -> str:
    tpl = _ENV.get_template("store_card.html.j2")
    return "".join(
        tpl.render(store=e, address=e.address or "N/A", link=entry_link(base_path, e))
        for e in entries
    )
