from dependency_injector import containers, providers
from core.config.settings import settings
from core.db.engine import create_db_engine
from archive.sources.github.client import GitHubClient


class AppContainer(containers.DeclarativeContainer):

    db_engine = providers.Singleton(
        create_db_engine,
        settings.DATABASE_DSN,
        pool_size=settings.DB_POOL_SIZE,
    )

    github_client = providers.Singleton(
        GitHubClient,
        settings.GITHUB_TOKEN,
        per_page=settings.GITHUB_PER_PAGE,
        timeout=settings.GITHUB_TIMEOUT,
    )
