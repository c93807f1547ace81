from __future__ import annotations

import argparse
import sys
import time
import traceback
from typing import List, Optional

from .core.config import ConfigError, load_config, resolve_credentials
from .core.datastore import DatastoreClient
from .core.http import HttpClient
from .core.logging import log_error, log_event, setup_logging
from .core.utils import format_duration, make_run_id
from .output.static_site import SiteSettings, build_site, generate_store_page

DEFAULT_CONFIG = "config.yaml"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="dentdirectory",
        description="Generate the scratch-and-dent appliance store directory as static HTML.",
    )
    ap.add_argument(
        "--config",
        default="",
        help=f"YAML config file (default: {DEFAULT_CONFIG} if present, else built-in defaults)",
    )
    ap.add_argument("--output-dir", default="", help="Override site.output_dir for this run")
    ap.add_argument(
        "--store",
        default="",
        metavar="ID",
        help="Regenerate only the detail page of this store",
    )
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        cfg = load_config(args.config or DEFAULT_CONFIG, required=bool(args.config))
    except ConfigError as e:
        print(f"Failed to load config: {e}", file=sys.stderr)
        return 2

    runtime = cfg["runtime"]
    run_id = make_run_id()
    setup_logging(run_id, log_dir=runtime["log_dir"], level=runtime["log_level"])
    start_time = time.perf_counter()

    url, key = resolve_credentials(cfg)
    http = HttpClient(
        user_agent=runtime["user_agent"],
        timeout_sec=int(runtime["http_timeout_sec"]),
        retries=int(runtime["http_retries"]),
    )
    client = DatastoreClient(url=url, key=key, http=http, tables=dict(cfg["datastore"]["tables"]))
    site = SiteSettings.from_config(cfg, output_dir=args.output_dir or None)

    try:
        if args.store:
            generate_store_page(client, site, args.store)
            summary = {"pages": 1}
        else:
            report = build_site(client, site)
            summary = {
                "states": report.regions,
                "cities": report.sub_regions,
                "stores": report.entries,
                "pages": report.pages,
            }
    except Exception as ex:
        log_error(
            "build_failed",
            error_type=type(ex).__name__,
            error=str(ex),
            traceback=traceback.format_exc(),
        )
        print(f"Build failed: {ex}", file=sys.stderr)
        return 1
    finally:
        http.close()

    duration = time.perf_counter() - start_time
    log_event(
        "run_summary",
        output_dir=str(site.output_dir),
        duration_sec=round(duration, 3),
        duration_str=format_duration(duration),
        **summary,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
