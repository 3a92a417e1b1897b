# src/archive/export/json_exporter.py

import sys
from typing import List, TextIO

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from archive.errors import ExportError
from archive.models import NormalizedRecord
from archive.store.repo_store import RepoStore
from core.logging.logger import get_logger

SNAPSHOT_ADAPTER = TypeAdapter(List[NormalizedRecord])


class JsonExporter:
    """
    Prints the whole repos table as one JSON array.
    """

    def __init__(self, store: RepoStore, stream: TextIO = None):
        self.store = store
        self.stream = stream
        self.logger = get_logger(__name__)

    async def export_all(self) -> str:
        records = await self.store.select_all()

        try:
            snapshot = SNAPSHOT_ADAPTER.dump_json(records, by_alias=True).decode("utf-8")
        except PydanticSerializationError as e:
            raise ExportError(f"error marshaling snapshot to json: {e}") from e

        stream = self.stream or sys.stdout
        try:
            stream.write(snapshot + "\n")
            stream.flush()
        except OSError as e:
            raise ExportError(f"failed writing snapshot: {e}") from e

        self.logger.info(f"Exported {len(records)} repositories")
        return snapshot
