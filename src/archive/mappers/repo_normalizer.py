# src/archive/mappers/repo_normalizer.py

from datetime import datetime
from typing import Iterable, Tuple

from archive.models import NormalizedRecord, RawRecord

TOPIC_SEPARATOR = ","
DATE_FORMAT = "%Y-%m-%d"


def split_full_name(full_name: str) -> Tuple[str, str]:
    """
    "owner/name" -> ("owner", "name"), split at the first "/".
    """
    owner, _, name = full_name.partition("/")
    return owner, name


def split_description(description: str) -> Tuple[str, str]:
    """
    "category:text" -> ("category", "text"), split at the first ":".

    Without a ":" the whole description is the category.
    """
    category, _, rest = description.partition(":")
    return category, rest


def join_topics(topics: Iterable[str]) -> str:
    # no escaping: a topic containing "," will not split back cleanly
    return TOPIC_SEPARATOR.join(topics)


def format_date(value: datetime) -> str:
    # calendar date in the timestamp's own offset, time of day dropped
    return value.strftime(DATE_FORMAT)


def normalize(raw: RawRecord) -> NormalizedRecord:
    owner, name = split_full_name(raw.full_name)
    category, description = split_description(raw.description)

    return NormalizedRecord(
        owner=owner,
        name=name,
        category=category,
        description=description,
        html_url=raw.html_url,
        homepage=raw.homepage,
        topics=join_topics(raw.topics),
        created_at=format_date(raw.created_at),
        updated_at=format_date(raw.updated_at),
        uid=raw.id,
    )
