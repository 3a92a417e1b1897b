import re
from datetime import datetime, timedelta, timezone

import pytest

from archive.mappers.github_repo_mapper import map_repo
from archive.mappers.repo_normalizer import (
    format_date,
    join_topics,
    normalize,
    split_description,
    split_full_name,
)
from archive.models import RawRecord
from conftest import make_repo


def make_raw(**overrides) -> RawRecord:
    base = {
        "id": 1,
        "full_name": "acme/widget",
        "description": "tools:a widget",
        "html_url": "https://github.com/acme/widget",
        "homepage": "",
        "topics": ["a", "b"],
        "created_at": "2020-01-02T03:04:05Z",
        "updated_at": "2021-02-03T04:05:06Z",
    }
    base.update(overrides)
    return RawRecord(**base)


class TestSplitFullName:
    @pytest.mark.parametrize("full_name", ["acme/widget", "a/b/c", "owner/", "/name"])
    def test_reconstructs_full_name(self, full_name):
        owner, name = split_full_name(full_name)
        assert f"{owner}/{name}" == full_name

    def test_splits_at_first_slash(self):
        assert split_full_name("a/b/c") == ("a", "b/c")


class TestSplitDescription:
    @pytest.mark.parametrize("text", ["tools:a widget", "x:y:z", ":leading", "trailing:"])
    def test_reconstructs_description(self, text):
        category, description = split_description(text)
        assert f"{category}:{description}" == text

    def test_splits_at_first_colon(self):
        assert split_description("cli: run: fast") == ("cli", " run: fast")

    def test_no_colon_goes_to_category(self):
        assert split_description("just text") == ("just text", "")

    def test_empty(self):
        assert split_description("") == ("", "")


class TestTopics:
    def test_round_trip_without_commas(self):
        topics = ["python", "etl", "github-api"]
        assert join_topics(topics).split(",") == topics

    def test_keeps_order(self):
        assert join_topics(["b", "a"]) == "b,a"

    def test_empty(self):
        assert join_topics([]) == ""

    def test_embedded_comma_breaks_round_trip(self):
        topics = ["a,b", "c"]
        assert join_topics(topics).split(",") != topics


class TestFormatDate:
    def test_calendar_date(self):
        value = datetime(2020, 1, 2, 23, 59, 59, tzinfo=timezone.utc)
        formatted = format_date(value)
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", formatted)
        assert formatted == value.date().isoformat()

    def test_uses_timestamp_offset(self):
        value = datetime(2020, 1, 2, 1, 0, tzinfo=timezone(timedelta(hours=9)))
        assert format_date(value) == "2020-01-02"


class TestNormalize:
    def test_end_to_end_example(self):
        record = normalize(make_raw())

        assert record.owner == "acme"
        assert record.name == "widget"
        assert record.category == "tools"
        assert record.description == "a widget"
        assert record.topics == "a,b"
        assert record.created_at == "2020-01-02"
        assert record.updated_at == "2021-02-03"
        assert record.uid == 1

    def test_urls_pass_through(self):
        record = normalize(make_raw(homepage="https://widget.dev"))
        assert record.html_url == "https://github.com/acme/widget"
        assert record.homepage == "https://widget.dev"

    def test_snapshot_keys(self):
        dumped = normalize(make_raw()).model_dump(by_alias=True)
        assert list(dumped) == [
            "owner", "name", "category", "description", "htmlurl",
            "homepage", "topics", "createdAt", "updatedAt", "uid",
        ]


class TestMapRepo:
    def test_maps_repository(self):
        raw = map_repo(make_repo())
        assert raw.id == 1
        assert raw.full_name == "acme/widget"
        assert raw.topics == ["a", "b"]
        assert raw.created_at == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_nullable_fields_become_empty(self):
        raw = map_repo(make_repo(description=None, homepage=None, topics=None))
        assert raw.description == ""
        assert raw.homepage == ""
        assert raw.topics == []
