from github.Repository import Repository

from archive.models import RawRecord


def map_repo(repo: Repository) -> RawRecord:
    return RawRecord(
        # --------------------
        # Identity
        # --------------------
        id=repo.id,                         # unique key -> uid
        full_name=repo.full_name,           # owner/name
        html_url=repo.html_url or "",

        # --------------------
        # Free text (nullable on GitHub)
        # --------------------
        description=repo.description or "",
        homepage=repo.homepage or "",
        topics=list(repo.topics or []),

        # --------------------
        # Activity
        # --------------------
        created_at=repo.created_at,
        updated_at=repo.updated_at,
    )
