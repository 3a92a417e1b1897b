# src/archive/pipeline.py

from typing import Literal

from archive.export.json_exporter import JsonExporter
from archive.mappers.repo_normalizer import normalize
from archive.sources.github.fetcher import GitHubFetcher
from archive.store.repo_store import RepoStore
from core.logging.logger import get_logger

WriteMode = Literal["rebuild", "upsert"]


class ArchivePipeline:
    """
    fetch -> normalize -> store -> read back -> export, once per run
    """

    def __init__(
        self,
        fetcher: GitHubFetcher,
        store: RepoStore,
        exporter: JsonExporter,
        write_mode: WriteMode = "rebuild",
    ):
        if write_mode not in ("rebuild", "upsert"):
            raise ValueError(f"unknown write mode: {write_mode}")
        self.fetcher = fetcher
        self.store = store
        self.exporter = exporter
        self.write_mode = write_mode
        self.logger = get_logger(__name__)

    async def run(self, account: str, is_org: bool = False) -> str:
        """
        Returns the exported snapshot.

        The fetch completes (and must be non-empty) before the table is
        touched, so an empty or failed fetch leaves the store as it was.
        """
        raw_records = await self.fetcher.list_repositories(account, is_org)
        records = [normalize(raw) for raw in raw_records]

        await self.store.ping()

        if self.write_mode == "rebuild":
            await self.store.reset()
            for record in records:
                await self.store.insert(record)
            self.logger.info(f"Inserted {len(records)} repositories")
        else:
            await self.store.sync(records)

        return await self.exporter.export_all()
