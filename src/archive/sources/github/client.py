# src/archive/sources/github/client.py

from github import Auth, Github
from github.Repository import Repository
from typing import List


class GitHubClient:
    """
    Low-level GitHub API wrapper.
    Only responsible for HTTP communication.
    """

    def __init__(self, token: str, per_page: int = 25, timeout: int = 15):
        self.per_page = per_page
        self._listings = {}
        self.client = Github(auth=Auth.Token(token), per_page=per_page, timeout=timeout)

    def list_repositories_page(self, account: str, is_org: bool, page: int) -> List[Repository]:
        """
        One page of public repositories, newest created first.

        Args:
            account: user login or organization name
            is_org: list through /orgs/{account}/repos instead of /users/{account}/repos
            page: zero-based page index
        """
        key = (account, is_org)
        # owner lookup costs a request, resolve it once per account
        if key not in self._listings:
            if is_org:
                owner = self.client.get_organization(account)
            else:
                owner = self.client.get_user(account)
            self._listings[key] = owner.get_repos(type="public", sort="created")

        return self._listings[key].get_page(page)
