# ingestion/cli.py
"""
Entry point: ingest -> (open browser) -> serve.

Usage:
    python -m ingestion.cli all --config config/gallery.yml
    python -m ingestion.cli ingest --pages 2
    python -m ingestion.cli serve --port 8000
"""

from __future__ import annotations

import argparse
import logging
import webbrowser
from dataclasses import replace

import uvicorn

from gallery.config import PLACEHOLDER_API_KEY, Settings, load_settings, setup_logging
from gallery.models import IngestReport
from gallery.store import RecordStore
from ingestion.pipeline import IngestionService

logger = logging.getLogger("ingestion")


def run_ingest(settings: Settings, store: RecordStore) -> IngestReport:
    if settings.api_key == PLACEHOLDER_API_KEY:
        logger.warning("Using the placeholder API key; set BEHANCE_API_KEY or api_key in the config")
    service = IngestionService(settings, store)
    try:
        return service.run()
    finally:
        service.client.close()


def open_urls(urls) -> None:
    for url in urls:
        try:
            if not webbrowser.open(url):
                logger.warning("No browser available to open %s", url)
        except webbrowser.Error as e:
            logger.warning("Could not open %s: %s", url, e)


def run_serve(settings: Settings, store: RecordStore) -> None:
    from gallery.api.api_main import create_app

    app = create_app(settings, store=store)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


def main(argv=None) -> None:
    ap = argparse.ArgumentParser(description="Portfolio gallery: ingest projects and serve them")
    ap.add_argument("--config", default=None, help="YAML settings file (default config/gallery.yml)")
    sub = ap.add_subparsers(dest="cmd")

    ip = sub.add_parser("ingest", help="Fetch projects into the store and exit")
    ip.add_argument("--pages", type=int, help="Override the number of creator pages")

    sp = sub.add_parser("serve", help="Serve the store over HTTP")
    sp.add_argument("--port", type=int, help="Override the HTTP port")

    ap_all = sub.add_parser("all", help="Ingest, open the browser, then serve (default)")
    ap_all.add_argument("--pages", type=int)
    ap_all.add_argument("--port", type=int)
    ap_all.add_argument("--no-browser", action="store_true", help="Don't open browser tabs")

    args = ap.parse_args(argv)
    cmd = args.cmd or "all"

    settings = load_settings(args.config)
    overrides = {}
    if getattr(args, "pages", None) is not None:
        overrides["pages"] = args.pages
    if getattr(args, "port", None) is not None:
        overrides["port"] = args.port
    if getattr(args, "no_browser", False):
        overrides["open_browser"] = False
    settings = replace(settings, **overrides)

    setup_logging(settings.log_level)

    with RecordStore(settings.db_path) as store:
        if cmd in ("ingest", "all"):
            report = run_ingest(settings, store)
            for err in report.errors:
                logger.debug("  %s %s: %s", err.stage, err.target, err.message)
            logger.info("Done! Now you may access the server via localhost:%d", settings.port)

        if cmd == "all" and settings.open_browser:
            open_urls(settings.browser_urls)

        if cmd in ("serve", "all"):
            run_serve(settings, store)


if __name__ == "__main__":
    main()
