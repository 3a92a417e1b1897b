# src/archive/store/repo_store.py

import asyncio
from typing import Iterable, List, Optional

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from archive.errors import StoreError
from archive.models import NormalizedRecord
from archive.store.schema import RECORD_COLUMNS, repos_table
from core.logging.logger import get_logger


class RepoStore:
    """
    Owns the repos table: schema lifecycle, writes and the full read-back.

    Every public operation runs under its own deadline. Cancellation of the
    calling task propagates as asyncio.CancelledError.
    """

    def __init__(self, engine: AsyncEngine, timeout: float = 5.0, ping_timeout: float = 1.0):
        self.engine = engine
        self.timeout = timeout
        self.ping_timeout = ping_timeout
        self.logger = get_logger(__name__)

    async def _bounded(self, operation: str, coro, timeout: Optional[float] = None):
        limit = timeout if timeout is not None else self.timeout
        try:
            return await asyncio.wait_for(coro, timeout=limit)
        except asyncio.TimeoutError as e:
            raise StoreError(f"{operation} timed out after {limit}s") from e
        except SQLAlchemyError as e:
            raise StoreError(f"{operation} failed: {e}") from e
        except OSError as e:
            # driver connect failures (refused, unreachable) are not wrapped by SQLAlchemy
            raise StoreError(f"{operation} failed: {e}") from e

    # --------------------
    # Connectivity
    # --------------------
    async def ping(self):
        async def _ping():
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        await self._bounded("ping", _ping(), timeout=self.ping_timeout)
        self.logger.info("Database connected")

    # --------------------
    # Schema lifecycle
    # --------------------
    async def drop_table(self):
        """DROP TABLE repos. Fails when the table does not exist."""
        async def _drop():
            async with self.engine.begin() as conn:
                await conn.run_sync(repos_table.drop, checkfirst=False)

        await self._bounded("drop table", _drop())

    async def create_table(self):
        async def _create():
            async with self.engine.begin() as conn:
                await conn.run_sync(repos_table.create, checkfirst=False)

        await self._bounded("create table", _create())

    async def ensure_table(self):
        """Create the table only if it is missing (first-run bootstrap)."""
        async def _ensure():
            async with self.engine.begin() as conn:
                await conn.run_sync(repos_table.create, checkfirst=True)

        await self._bounded("ensure table", _ensure())

    async def reset(self):
        await self.drop_table()
        await self.create_table()
        self.logger.info("Table repos rebuilt")

    # --------------------
    # Writes
    # --------------------
    async def insert(self, record: NormalizedRecord) -> int:
        """
        Single-row insert in its own transaction.

        Returns:
            generated id of the new row
        """
        async def _insert():
            async with self.engine.begin() as conn:
                result = await conn.execute(insert(repos_table).values(**record.to_row()))
                if result.rowcount != 1:
                    raise StoreError(f"expected to affect 1 row, affected {result.rowcount} rows")
                return result.inserted_primary_key[0]

        return await self._bounded(f"insert uid={record.uid}", _insert())

    async def sync(self, records: Iterable[NormalizedRecord]) -> dict:
        """
        Make the table match records in one transaction, keyed by uid.

        Existing rows are updated in place, new ones inserted and rows whose
        uid was not given are deleted. A failure rolls everything back.
        """
        records = list(records)
        uids = [r.uid for r in records]

        async def _sync():
            stats = {"inserted": 0, "updated": 0, "deleted": 0}
            async with self.engine.begin() as conn:
                await conn.run_sync(repos_table.create, checkfirst=True)

                for record in records:
                    row = record.to_row()
                    result = await conn.execute(
                        update(repos_table).where(repos_table.c.uid == record.uid).values(**row)
                    )
                    if result.rowcount == 1:
                        stats["updated"] += 1
                        continue
                    if result.rowcount > 1:
                        raise StoreError(f"uid={record.uid} matches {result.rowcount} rows")

                    result = await conn.execute(insert(repos_table).values(**row))
                    if result.rowcount != 1:
                        raise StoreError(f"expected to affect 1 row, affected {result.rowcount} rows")
                    stats["inserted"] += 1

                result = await conn.execute(
                    delete(repos_table).where(repos_table.c.uid.not_in(uids))
                )
                stats["deleted"] = result.rowcount
            return stats

        stats = await self._bounded("sync", _sync())
        self.logger.info(
            f"Synced repos: {stats['inserted']} inserted, "
            f"{stats['updated']} updated, {stats['deleted']} deleted"
        )
        return stats

    # --------------------
    # Reads
    # --------------------
    async def select_all(self) -> List[NormalizedRecord]:
        """Every row, in insertion order."""
        async def _select():
            async with self.engine.connect() as conn:
                result = await conn.execute(select(repos_table).order_by(repos_table.c.id))
                return result.fetchall()

        rows = await self._bounded("select all", _select())
        return [
            NormalizedRecord(**{column: row._mapping[column] for column in RECORD_COLUMNS})
            for row in rows
        ]
