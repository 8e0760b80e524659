# ingestion/pipeline.py
"""
Populate the record store from the portfolio API.

- Discovery: page through "creatives to follow" (settings.pages pages).
- Per creator: first listed project -> project detail -> Record.
- Each Record is saved and its cover downloaded on a bounded thread pool;
  run() returns only after every task finished.
- Failures never abort the run: each one is logged and collected into the
  IngestReport, and that unit of work is skipped.
- No dedup: running twice inserts the same projects twice.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from functools import partial
from typing import Callable, List, Optional, Tuple

from tqdm import tqdm

from gallery.cleaning import project_to_record
from gallery.config import Settings
from gallery.models import IngestError, IngestReport, Record
from gallery.store import RecordStore
from ingestion.assets import download_asset
from ingestion.client import FetchError, PortfolioClient

logger = logging.getLogger(__name__)

Downloader = Callable[[str, str], object]


class IngestionService:
    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        client: Optional[PortfolioClient] = None,
        downloader: Optional[Downloader] = None,
        progress: bool = True,
    ):
        self.settings = settings
        self.store = store
        self.client = client or PortfolioClient(
            settings.api_key,
            api_base=settings.api_base,
            timeout=settings.request_timeout,
        )
        self.downloader = downloader or partial(
            download_asset, connect_timeout=settings.download_timeout
        )
        self.progress = progress

    # ----------------------------- fetch side ----------------------------- #

    def _fail(self, report: IngestReport, stage: str, target, err: Exception) -> None:
        logger.warning("%s %s failed: %s", stage, target, err)
        report.errors.append(IngestError(stage=stage, target=str(target), message=str(err)))

    def build_record(self, username: str, report: IngestReport) -> Optional[Record]:
        """Fetch a creator's first project and shape it into an unsaved Record."""
        try:
            projects = self.client.user_projects(username)
        except FetchError as e:
            self._fail(report, "projects", username, e)
            return None
        if not projects:
            self._fail(report, "projects", username, ValueError("creator has no projects"))
            return None
        if not isinstance(projects[0], dict) or "id" not in projects[0]:
            self._fail(report, "projects", username, ValueError(f"unexpected project entry {projects[0]!r}"))
            return None

        project_id = projects[0]["id"]
        try:
            detail = self.client.project(project_id)
            return project_to_record(detail)
        except (FetchError, ValueError) as e:
            self._fail(report, "project", project_id, e)
            return None

    # ----------------------------- task side ------------------------------ #

    def _save(self, record: Record) -> Record:
        return self.store.insert(record)

    def _download(self, record: Record):
        return self.downloader(record.source_url, self.settings.photos_dir)

    def _collect(self, tasks: List[Tuple[str, Record, Future]], report: IngestReport) -> None:
        wait([f for _, _, f in tasks])
        for kind, record, fut in tasks:
            err = fut.exception()
            if err is not None:
                target = record.source_url if kind == "download" else record.title
                self._fail(report, kind, target, err)
            elif kind == "save":
                report.saved += 1
            else:
                report.downloaded += 1

    # ------------------------------- driver ------------------------------- #

    def run(self) -> IngestReport:
        report = IngestReport()
        tasks: List[Tuple[str, Record, Future]] = []
        total = self.settings.pages * 10  # upstream returns ~10 creators per page

        with ThreadPoolExecutor(max_workers=max(1, self.settings.workers)) as pool:
            bar = tqdm(total=total, desc="Fetching and populating", disable=not self.progress)
            try:
                for page in range(1, self.settings.pages + 1):
                    try:
                        creators = self.client.creators(page)
                    except FetchError as e:
                        self._fail(report, "creators", page, e)
                        continue
                    report.pages += 1

                    for creative in creators:
                        report.creators += 1
                        bar.update(1)
                        if not isinstance(creative, dict):
                            self._fail(report, "creators", page, ValueError(f"unexpected creator entry {creative!r}"))
                            continue
                        username = creative.get("username")
                        if not username:
                            self._fail(report, "creators", page, ValueError("creator without username"))
                            continue
                        record = self.build_record(username, report)
                        if record is None:
                            continue
                        logger.debug("Queued %r (%s)", record.title, record.filename)
                        tasks.append(("save", record, pool.submit(self._save, record)))
                        tasks.append(("download", record, pool.submit(self._download, record)))
            finally:
                bar.close()
            self._collect(tasks, report)

        logger.info(
            "Ingestion finished: pages=%d creators=%d saved=%d downloaded=%d errors=%d",
            report.pages, report.creators, report.saved, report.downloaded, len(report.errors),
        )
        return report
