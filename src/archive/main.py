import argparse
import asyncio
import signal
import sys

from archive.errors import ArchiveError
from archive.export.json_exporter import JsonExporter
from archive.pipeline import ArchivePipeline
from archive.sources.github.fetcher import GitHubFetcher
from archive.store.repo_store import RepoStore
from core.config.settings import settings
from core.containers.app_containers import AppContainer
from core.logging.logger import get_logger

logger = get_logger(__name__)

# Running task reference for signal handler
run_task = None


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="repo-archive",
        description="Archive GitHub repository metadata into the repos table and print it as JSON.",
    )
    parser.add_argument("--account", default=settings.ARCHIVE_ACCOUNT,
        help="GitHub user or organization to archive")
    parser.add_argument("--org", action="store_true", default=settings.ARCHIVE_IS_ORG,
        help="treat the account as an organization")
    parser.add_argument("--mode", choices=["rebuild", "upsert"], default=settings.ARCHIVE_WRITE_MODE,
        help="rebuild: drop/create then insert; upsert: sync rows by uid in one transaction")
    parser.add_argument("--max-pages", type=int, default=settings.GITHUB_MAX_PAGES,
        help="stop after this many pages (0 = all)")
    parser.add_argument("--init", action="store_true",
        help="create the repos table first if it does not exist")
    return parser.parse_args(argv)


async def main(args: argparse.Namespace):
    """Single archive run"""
    global run_task
    run_task = asyncio.current_task()

    container = AppContainer()
    engine = container.db_engine()

    store = RepoStore(engine, timeout=settings.DB_TIMEOUT, ping_timeout=settings.DB_PING_TIMEOUT)
    pipeline = ArchivePipeline(
        fetcher=GitHubFetcher(container.github_client(), max_pages=args.max_pages),
        store=store,
        exporter=JsonExporter(store),
        write_mode=args.mode,
    )

    logger.info(f"Archive run starting: account={args.account} org={args.org} mode={args.mode}")
    try:
        if args.init:
            await store.ensure_table()
        await pipeline.run(args.account, args.org)
    finally:
        await engine.dispose()
    logger.info("Archive run complete")


def signal_handler(signum, frame):
    logger.info(f"Received signal {signum}. Cancelling work in flight")
    # a second Ctrl+C raises KeyboardInterrupt even while a worker thread blocks
    signal.signal(signal.SIGINT, signal.default_int_handler)

    if run_task is not None and not run_task.done():
        run_task.get_loop().call_soon_threadsafe(run_task.cancel)


def cli(argv=None) -> int:
    args = parse_args(argv)

    signal.signal(signal.SIGINT, signal_handler)   # Ctrl+C
    signal.signal(signal.SIGTERM, signal_handler)  # Docker stop

    try:
        asyncio.run(main(args))
    except ArchiveError as e:
        logger.error(f"Archive run failed: {e}")
        return 1
    except (asyncio.CancelledError, KeyboardInterrupt):
        logger.error("Archive run cancelled")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(cli())
