"""Tests for refresh_content.publish module."""

from unittest.mock import Mock

import pytest

from refresh_content.fetch_content.github import StaleVersionError
from refresh_content.models import (
    Announcement,
    Bulletin,
    CollectionResult,
    ErrorCategory,
    ErrorDescriptor,
    Event,
    EventTime,
    StoredArtifact,
)
from refresh_content.publish import (
    assemble_artifact,
    build_commit_message,
    publish,
    updated_collections,
)


def _results() -> list[CollectionResult]:
    return [
        CollectionResult(
            name="announcements",
            artifact_key="announcements",
            records=[Announcement(title="A", descriptive="hello")],
            digest="d1",
        ),
        CollectionResult(
            name="regular events",
            artifact_key="regularEvents",
            records=[Event(title="Mass", times=[EventTime(day="Sunday", time="9:00")])],
            digest="d2",
        ),
        CollectionResult(
            name="bulletins",
            artifact_key="bulletins",
            records=[Bulletin(date="May 5", title="B", link="https://example.com/b.pdf")],
            errors=[ErrorDescriptor(
                category=ErrorCategory.INVALID_STRUCTURE,
                kind="bulletin",
                type="InvalidStructureError",
                reason="Bulletin link missing or invalid",
                post_id="9",
            )],
            digest="d3",
        ),
    ]


class TestUpdatedCollections:
    def test_no_changes(self) -> None:
        assert updated_collections(_results(), ["d1", "d2", "d3"]) == []

    def test_changed_positions_reported_by_name(self) -> None:
        assert updated_collections(_results(), ["d1", "old", "d3"]) == ["regular events"]

    def test_missing_previous_digests_count_as_changed(self) -> None:
        assert updated_collections(_results(), ["d1"]) == ["regular events", "bulletins"]

    def test_comparison_is_positional(self) -> None:
        assert updated_collections(_results(), ["d2", "d1", "d3"]) == ["announcements", "regular events"]


class TestAssembleArtifact:
    def test_layout(self) -> None:
        artifact = assemble_artifact(_results())

        assert list(artifact) == [
            "announcements",
            "regularEvents",
            "bulletins",
            "digests",
            "announcementsErrors",
            "regularEventsErrors",
            "bulletinsErrors",
        ]
        assert artifact["digests"] == ["d1", "d2", "d3"]

    def test_records_omit_absent_optional_fields(self) -> None:
        artifact = assemble_artifact(_results())

        assert artifact["announcements"] == [{"title": "A", "descriptive": "hello"}]
        assert artifact["regularEvents"][0]["times"] == [{"day": "Sunday", "time": "9:00"}]
        assert artifact["bulletins"] == [{
            "date": "May 5",
            "title": "B",
            "link": "https://example.com/b.pdf",
            "inserts": [],
        }]

    def test_errors_serialized(self) -> None:
        artifact = assemble_artifact(_results())

        assert artifact["bulletinsErrors"] == [{
            "error": "Invalid structure",
            "kind": "bulletin",
            "type": "InvalidStructureError",
            "reason": "Bulletin link missing or invalid",
            "tweetId": "9",
        }]


class TestBuildCommitMessage:
    def test_lists_updated_collections(self) -> None:
        assert build_commit_message(["announcements", "bulletins"]) == (
            "Generated content data: Updates in announcements, bulletins"
        )


class TestPublish:
    def test_no_updates_no_write(self) -> None:
        store = Mock()
        previous = StoredArtifact(content={"digests": ["d1", "d2", "d3"]}, sha="abc")

        outcome = publish(_results(), previous, store)

        store.write.assert_not_called()
        assert outcome.updated == []
        assert outcome.artifact is None

    def test_updates_written_with_previous_sha(self) -> None:
        store = Mock()
        store.write.return_value = "0123456789abcdef"
        previous = StoredArtifact(content={"digests": ["d1", "d2", "old"]}, sha="abc")

        outcome = publish(_results(), previous, store)

        store.write.assert_called_once()
        content, sha, message = store.write.call_args.args
        assert content["digests"] == ["d1", "d2", "d3"]
        assert sha == "abc"
        assert message == "Generated content data: Updates in bulletins"
        assert outcome.commit_sha == "0123456789abcdef"
        assert outcome.updated == ["bulletins"]

    def test_dry_run_assembles_without_writing(self, caplog) -> None:
        store = Mock()
        previous = StoredArtifact(content={"digests": ["d1", "d2", "d3"]}, sha="abc")

        with caplog.at_level("INFO"):
            outcome = publish(_results(), previous, store, dry_run=True)

        store.write.assert_not_called()
        assert outcome.dry_run is True
        assert outcome.artifact["digests"] == ["d1", "d2", "d3"]
        assert '"digests"' in caplog.text

    def test_first_publish_without_previous_artifact(self) -> None:
        store = Mock()
        store.write.return_value = "fedcba9876543210"

        outcome = publish(_results(), StoredArtifact(content={}, sha=None), store)

        assert outcome.updated == ["announcements", "regular events", "bulletins"]
        assert store.write.call_args.args[1] is None

    def test_stale_version_propagates(self) -> None:
        store = Mock()
        store.write.side_effect = StaleVersionError("stale")
        previous = StoredArtifact(content={"digests": []}, sha="abc")

        with pytest.raises(StaleVersionError):
            publish(_results(), previous, store)


class TestStoredArtifact:
    def test_digests_default_empty(self) -> None:
        assert StoredArtifact(content={}, sha=None).digests == []

    def test_non_list_digests_ignored(self) -> None:
        assert StoredArtifact(content={"digests": "nope"}, sha=None).digests == []
