class ArchiveError(Exception):
    """Base class for every failure that aborts an archive run."""


class FetchError(ArchiveError):
    """GitHub listing failed (auth, rate limit, network, unknown account)."""


class EmptyFetchError(FetchError):
    """GitHub returned no repositories for the account."""


class StoreError(ArchiveError):
    """Schema, write or read failure against the repos table."""


class ExportError(ArchiveError):
    """Snapshot could not be serialized or written."""
