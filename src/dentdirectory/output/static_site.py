from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.datastore import DatastoreClient
from ..core.logging import log_event
from ..core.queries import (
    get_entry,
    list_all_entries,
    list_entries,
    list_regions,
    list_sub_regions,
)
from ..core.schema import Entry, Region, SubRegion
from ..core.utils import format_count
from .files import copy_asset, ensure_dir, read_template, write_page
from .fragments import (
    DEFAULT_EMOJI,
    render_entry_cards,
    render_region_cards,
    render_sub_region_cards,
)
from .render import Sub, every, first, render

STORES_DIR = "stores"
# Both also appear literally in the links of site/templates/*.html.
BASE_PATH = "/directory2"
SECTION = "scratch-and-dent-appliances"


@dataclass
class SiteSettings:
    output_dir: Path
    template_dir: Path
    stylesheet: Path

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], *, output_dir: Optional[str] = None) -> "SiteSettings":
        site = cfg["site"]
        return cls(
            output_dir=Path(output_dir or site["output_dir"]),
            template_dir=Path(site["template_dir"]),
            stylesheet=Path(site["stylesheet"]),
        )

    def region_dir(self, region: Region) -> Path:
        return self.output_dir / SECTION / region.slug

    def sub_region_dir(self, region: Region, sub_region: SubRegion) -> Path:
        return self.region_dir(region) / sub_region.slug

    def entry_dir(self, entry: Entry) -> Path:
        return self.output_dir / STORES_DIR / str(entry.id)


@dataclass
class BuildReport:
    output_dir: str
    regions: int = 0
    sub_regions: int = 0
    entries: int = 0
    pages: int = 0


# --- bindings: one ordered mapping per page kind ---------------------------


def home_bindings(regions: List[Region], site: SiteSettings) -> Dict[str, Sub]:
    total = sum(r.store_count for r in regions)
    return {
        "STATES_LIST": first(
            render_region_cards(regions, base_path=BASE_PATH, section=SECTION)
        ),
        "TOTAL_STORES": every(format_count(total)),
    }


def state_bindings(
    region: Region, sub_regions: List[SubRegion], site: SiteSettings
) -> Dict[str, Sub]:
    return {
        "STATE_NAME": every(region.name),
        "CITIES_LIST": first(
            render_sub_region_cards(
                region, sub_regions, base_path=BASE_PATH, section=SECTION
            )
        ),
        "STORE_COUNT": first(region.store_count),
        "CITY_COUNT": first(region.city_count),
        "STATE_EMOJI": first(region.emoji or DEFAULT_EMOJI),
    }


def city_bindings(
    region: Region, sub_region: SubRegion, entries: List[Entry], site: SiteSettings
) -> Dict[str, Sub]:
    return {
        "STATE_NAME": every(region.name),
        "CITY_NAME": every(sub_region.name),
        "STORES_LIST": first(render_entry_cards(entries, base_path=BASE_PATH)),
        "STORE_COUNT": first(sub_region.store_count),
        "STATE_SLUG": first(region.slug),
    }


def store_bindings(entry: Entry) -> Dict[str, Sub]:
    city = entry.sub_region
    state = entry.region
    return {
        "STORE_NAME": every(entry.name),
        "STORE_ADDRESS": first(entry.address or "Address not available"),
        "STORE_PHONE": first(entry.phone or "N/A"),
        "STORE_WEBSITE": first(entry.website or "#"),
        "STORE_EMAIL": first(entry.email or "N/A"),
        "STORE_DESCRIPTION": first(entry.description or "No description available."),
        "CITY_NAME": first((city and city.name) or "Unknown"),
        "STATE_NAME": first((state and state.name) or "Unknown"),
        "CITY_SLUG": first((city and city.slug) or ""),
        "STATE_SLUG": first((state and state.slug) or ""),
    }


# --- page generators ---------------------------------------------------------


def copy_static_assets(site: SiteSettings) -> Path:
    target = copy_asset(site.stylesheet, site.output_dir / "main.css")
    log_event("assets_copied", target=str(target))
    return target


def generate_homepage(client: DatastoreClient, site: SiteSettings, report: BuildReport) -> Path:
    log_event("homepage_started")
    regions = list_regions(client)
    template = read_template(site.template_dir, "home.html")
    html = render(template, home_bindings(regions, site))
    path = write_page(site.output_dir, html)
    report.pages += 1
    log_event("homepage_generated", regions=len(regions), path=str(path))
    return path


def generate_state_pages(client: DatastoreClient, site: SiteSettings, report: BuildReport) -> None:
    """One page per state, each followed by the pages of its cities."""
    log_event("state_pages_started")
    regions = list_regions(client)
    template = read_template(site.template_dir, "state.html")
    for region in regions:
        sub_regions = list_sub_regions(client, region.id)
        html = render(template, state_bindings(region, sub_regions, site))
        write_page(site.region_dir(region), html)
        report.regions += 1
        report.pages += 1
        log_event("state_page_generated", state=region.slug, cities=len(sub_regions))

        generate_city_pages(client, site, region, sub_regions, report)


def generate_city_pages(
    client: DatastoreClient,
    site: SiteSettings,
    region: Region,
    sub_regions: List[SubRegion],
    report: BuildReport,
) -> None:
    template = read_template(site.template_dir, "city.html")
    for sub_region in sub_regions:
        entries = list_entries(client, sub_region.id)
        html = render(template, city_bindings(region, sub_region, entries, site))
        write_page(site.sub_region_dir(region, sub_region), html)
        report.sub_regions += 1
        report.pages += 1
        log_event(
            "city_page_generated",
            state=region.slug,
            city=sub_region.slug,
            stores=len(entries),
        )


def generate_store_pages(client: DatastoreClient, site: SiteSettings, report: BuildReport) -> None:
    log_event("store_pages_started")
    entries = list_all_entries(client)
    template = read_template(site.template_dir, "store.html")
    for entry in entries:
        write_page(site.entry_dir(entry), render(template, store_bindings(entry)))
        report.entries += 1
        report.pages += 1
    log_event("store_pages_generated", stores=len(entries))


def generate_store_page(client: DatastoreClient, site: SiteSettings, entry_id: Any) -> Path:
    """Rebuild a single store detail page in place."""
    entry = get_entry(client, entry_id)
    template = read_template(site.template_dir, "store.html")
    path = write_page(site.entry_dir(entry), render(template, store_bindings(entry)))
    log_event("store_page_generated", store=str(entry.id), path=str(path))
    return path


def build_site(client: DatastoreClient, site: SiteSettings) -> BuildReport:
    report = BuildReport(output_dir=str(site.output_dir))
    log_event("build_started", output_dir=str(site.output_dir))

    ensure_dir(site.output_dir)
    copy_static_assets(site)
    generate_homepage(client, site, report)
    generate_state_pages(client, site, report)
    generate_store_pages(client, site, report)
    return report
