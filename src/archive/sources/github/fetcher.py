# src/archive/sources/github/fetcher.py

import asyncio
from typing import List

import requests
from github import GithubException
from pydantic import ValidationError

from archive.errors import EmptyFetchError, FetchError
from archive.mappers.github_repo_mapper import map_repo
from archive.models import RawRecord
from archive.sources.github.client import GitHubClient
from core.logging.logger import get_logger


class GitHubFetcher:
    """
    Lists every repository of one account as RawRecords
    """

    def __init__(self, client: GitHubClient, max_pages: int = 0):
        self.client = client
        self.per_page = client.per_page
        self.max_pages = max_pages
        self.logger = get_logger(__name__)

    def _fetch_page(self, account: str, is_org: bool, page: int) -> List[RawRecord]:
        # attribute access on PyGithub objects may hit the network, keep it in the worker thread
        repos = self.client.list_repositories_page(account, is_org, page)
        return [map_repo(repo) for repo in repos]

    async def list_repositories(self, account: str, is_org: bool) -> List[RawRecord]:
        """
        Walk pages until one comes back short (or max_pages is reached).

        Raises:
            FetchError: GitHub call failed
            EmptyFetchError: the account has no listed repositories
        """
        kind = "org" if is_org else "user"
        self.logger.info(f"Listing repositories for {kind} {account} (per_page={self.per_page})")

        records: List[RawRecord] = []
        page = 0
        while True:
            try:
                batch = await asyncio.to_thread(self._fetch_page, account, is_org, page)
            except GithubException as e:
                message = e.data.get("message", str(e)) if isinstance(e.data, dict) else str(e)
                raise FetchError(
                    f"GitHub API error ({e.status}) listing {kind} {account}: {message}"
                ) from e
            except requests.exceptions.RequestException as e:
                raise FetchError(f"network error listing {kind} {account}: {e}") from e
            except ValidationError as e:
                raise FetchError(f"unexpected repository payload for {kind} {account}: {e}") from e

            records.extend(batch)
            self.logger.info(f"Page {page + 1}: {len(batch)} repositories")

            page += 1
            if len(batch) < self.per_page:
                break
            if self.max_pages and page >= self.max_pages:
                self.logger.warning(f"Stopped after {page} page(s), more repositories may exist")
                break

        if not records:
            raise EmptyFetchError(f"no repositories returned for {kind} {account}")

        self.logger.info(f"Fetched {len(records)} repositories for {account}")
        return records
