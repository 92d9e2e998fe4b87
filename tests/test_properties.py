"""
Property-based Testing with Hypothesis.

Invariants of snapshot diffs, change summaries, paging and version pruning.
"""

import math

from hypothesis import given, settings, strategies as st
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.models import Base, Job, VersionHistory
from rest_api.services.crud import EntityType, compare_snapshots, generate_change_summary, humanize
from rest_api.services.domain import Page, VersionHistoryService
from shared.utils.validators import as_utc, escape_like_pattern


field_names = st.sampled_from(["title", "status", "price", "city", "featured", "images", "id", "updated_at"])
field_values = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-1000, max_value=1000),
    st.text(max_size=20),
    st.lists(st.text(max_size=5), max_size=3),
)
snapshots = st.dictionaries(field_names, field_values, max_size=8)


class TestSnapshotProperties:
    """Property-based tests for snapshot diffs and summaries."""

    @given(snapshot=snapshots)
    def test_snapshot_equals_itself(self, snapshot):
        """Property: comparing a snapshot with itself reports nothing."""
        assert compare_snapshots(snapshot, snapshot) == []

    @given(a=snapshots, b=snapshots)
    def test_compare_is_symmetric(self, a, b):
        """Property: swapping the sides swaps old and new values only."""
        forward = compare_snapshots(a, b)
        backward = compare_snapshots(b, a)

        assert [d["field"] for d in forward] == [d["field"] for d in backward]
        for f, r in zip(forward, backward):
            assert f["old_value"] == r["new_value"]
            assert f["new_value"] == r["old_value"]

    @given(a=snapshots, b=snapshots)
    def test_identity_fields_never_reported(self, a, b):
        fields = {d["field"] for d in compare_snapshots(a, b)}
        assert not fields & {"id", "updated_at"}

    @given(old=snapshots, new=snapshots)
    def test_summary_never_empty(self, old, new):
        """Property: every update has at least one summary line."""
        summary = generate_change_summary(old, new)
        assert summary
        assert all(isinstance(line, str) and line for line in summary)


class TestRegistryProperties:

    @given(entity_type=st.sampled_from(list(EntityType)))
    def test_labels_are_readable(self, entity_type):
        label = humanize(entity_type.value)
        assert label[0].isupper()
        assert "-" not in label
        assert label[1:] == label[1:].lower()


class TestPagingProperties:

    @given(total=st.integers(min_value=0, max_value=10_000), limit=st.integers(min_value=1, max_value=200))
    def test_pages_cover_total(self, total, limit):
        page = Page(items=[], total=total, page=1, limit=limit)
        assert page.pages == math.ceil(total / limit)
        assert (page.pages - 1) * limit < total or total == 0

    @given(term=st.text(max_size=30))
    def test_escaped_pattern_has_no_bare_wildcards(self, term):
        escaped = escape_like_pattern(term)
        unescaped = escaped.replace("\\\\", "").replace("\\%", "").replace("\\_", "")
        assert "%" not in unescaped
        assert "_" not in unescaped

    @given(day=st.dates())
    def test_day_bounds_are_ordered(self, day):
        assert as_utc(day) < as_utc(day, end_of_day=True)


class TestPruningProperties:
    """Version retention cap, on a private in-memory database per example."""

    @given(snapshots_taken=st.integers(min_value=1, max_value=12), cap=st.integers(min_value=1, max_value=5))
    @settings(max_examples=25, deadline=None)
    def test_keeps_highest_versions_up_to_cap(self, snapshots_taken, cap):
        engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
        Base.metadata.create_all(bind=engine)
        session = sessionmaker(bind=engine, autoflush=False)()
        try:
            job = Job(id=1, title="Coach", status="pending")
            session.add(job)
            session.commit()

            service = VersionHistoryService(session, max_versions=cap)
            for _ in range(snapshots_taken):
                assert service.create_snapshot("job", job).ok

            kept = session.scalars(
                select(VersionHistory.version).order_by(VersionHistory.version.desc())
            ).all()
            assert kept == list(range(snapshots_taken, max(0, snapshots_taken - cap), -1))
        finally:
            session.close()
            engine.dispose()
