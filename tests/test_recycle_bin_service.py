"""
Tests for RecycleBinService domain service.
"""

from datetime import timedelta

import pytest
from sqlalchemy import func, select

from rest_api.models import Job, Listing, RecycleBinItem, VersionHistory
from rest_api.services.domain import RecycleBinService, VersionHistoryService
from shared.utils.exceptions import (
    AlreadyResolvedError,
    ConflictError,
    NotFoundError,
    UnknownEntityTypeError,
    ValidationError,
)
from tests.helpers import FakeNotifier, next_id


def _bin_count(db_session):
    return db_session.scalar(select(func.count()).select_from(RecycleBinItem))


class TestMoveToRecycleBin:

    def test_moves_snapshot_and_deletes_live_row(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, clock=clock)
        job_id = seed_job.id

        item = service.move_to_recycle_bin("job", seed_job, deleted_by=1, deleted_by_email="a@b.test")

        assert db_session.get(Job, job_id) is None
        assert item.entity_type == "job"
        assert item.entity_id == job_id
        assert item.collection_name == "job"
        assert item.snapshot_data["title"] == "Head Coach"
        assert item.entity_metadata["title"] == "Head Coach"
        assert item.state == "active"
        assert item.deleted_by == 1

    def test_expiry_is_twenty_days_after_deletion(self, db_session, seed_job, clock):
        item = RecycleBinService(db_session, clock=clock).move_to_recycle_bin("job", seed_job)

        assert item.expires_at - item.deleted_at == timedelta(days=20)

    def test_custom_retention(self, db_session, seed_job, clock):
        item = RecycleBinService(db_session, retention_days=7, clock=clock).move_to_recycle_bin(
            "job", seed_job
        )

        assert item.expires_at - item.deleted_at == timedelta(days=7)

    def test_zero_retention_expires_immediately(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, retention_days=0, warning_days=0, clock=clock)

        item = service.move_to_recycle_bin("job", seed_job)

        assert item.expires_at == item.deleted_at
        assert service.expiring_soon() == []
        assert service.purge_expired() == 1

    def test_explicit_metadata_wins(self, db_session, seed_job, clock):
        item = RecycleBinService(db_session, clock=clock).move_to_recycle_bin(
            "job", seed_job, metadata={"title": "Custom", "name": "Someone"}
        )

        assert item.entity_metadata == {"title": "Custom", "name": "Someone"}

    def test_unknown_type_writes_nothing(self, db_session, seed_job):
        with pytest.raises(UnknownEntityTypeError):
            RecycleBinService(db_session).move_to_recycle_bin("widget", seed_job)

        assert _bin_count(db_session) == 0
        assert db_session.get(Job, seed_job.id) is not None

    def test_record_must_match_type(self, db_session, seed_job):
        with pytest.raises(ValidationError):
            RecycleBinService(db_session).move_to_recycle_bin("listing", seed_job)

        assert _bin_count(db_session) == 0


class TestRestore:

    def test_restore_recreates_record_with_original_id(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, clock=clock)
        job_id = seed_job.id
        item = service.move_to_recycle_bin("job", seed_job)
        item_id = item.id

        record = service.restore_item(item_id)

        assert record.id == job_id
        assert record.title == "Head Coach"
        assert record.owner_id == 77
        assert db_session.get(RecycleBinItem, item_id) is None

    def test_restore_does_not_touch_version_history(self, db_session, seed_job, clock):
        VersionHistoryService(db_session, clock=clock).create_snapshot("job", seed_job)
        service = RecycleBinService(db_session, clock=clock)
        item = service.move_to_recycle_bin("job", seed_job)

        service.restore_item(item.id)

        assert db_session.scalar(select(func.count()).select_from(VersionHistory)) == 1

    def test_restore_missing_item(self, db_session):
        with pytest.raises(NotFoundError):
            RecycleBinService(db_session).restore_item(999)

    def test_restore_twice_fails(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, clock=clock)
        item_id = service.move_to_recycle_bin("job", seed_job).id
        service.restore_item(item_id)

        with pytest.raises(NotFoundError):
            service.restore_item(item_id)

    def test_restore_conflicts_with_live_record(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, clock=clock)
        job_id = seed_job.id
        item_id = service.move_to_recycle_bin("job", seed_job).id
        db_session.add(Job(id=job_id, title="Replacement", status="pending"))
        db_session.commit()

        with pytest.raises(ConflictError):
            service.restore_item(item_id)

        assert db_session.get(RecycleBinItem, item_id) is not None

    def test_terminal_item_is_rejected(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, clock=clock)
        item = service.move_to_recycle_bin("job", seed_job)
        item.permanently_deleted_at = clock.now
        db_session.commit()

        with pytest.raises(AlreadyResolvedError) as exc_info:
            service.restore_item(item.id)

        assert exc_info.value.state == "purged"
        assert exc_info.value.status_code == 409


class TestPurge:

    def test_purge_removes_item(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, clock=clock)
        item_id = service.move_to_recycle_bin("job", seed_job).id

        service.purge_item(item_id)

        assert _bin_count(db_session) == 0
        with pytest.raises(NotFoundError):
            service.restore_item(item_id)

    def test_purge_restored_item_is_rejected(self, db_session, seed_job, clock):
        service = RecycleBinService(db_session, clock=clock)
        item = service.move_to_recycle_bin("job", seed_job)
        item.restored_at = clock.now
        db_session.commit()

        with pytest.raises(AlreadyResolvedError):
            service.purge_item(item.id)

    def test_bulk_purge_reports_per_item(self, db_session, seed_job, seed_listing, clock):
        service = RecycleBinService(db_session, clock=clock)
        first = service.move_to_recycle_bin("job", seed_job).id
        second = service.move_to_recycle_bin("listing", seed_listing).id

        result = service.purge_items([first, 4242, second])

        assert result.purged == [first, second]
        assert len(result.failed) == 1
        assert result.failed[0]["id"] == 4242
        assert "not found" in result.failed[0]["reason"]

    def test_bulk_purge_limit(self, db_session):
        with pytest.raises(ValidationError):
            RecycleBinService(db_session).purge_items(range(1, 102))


class TestListItems:

    def _fill(self, db_session, clock):
        service = RecycleBinService(db_session, clock=clock)
        for title in ("Morning Yoga", "Evening Spin", "Yoga Retreat"):
            listing = Listing(id=next_id(), title=title, status="approved", email=f"{title[:3].lower()}@x.test")
            db_session.add(listing)
            db_session.commit()
            service.move_to_recycle_bin("listing", listing)
            clock.advance(days=1)
        job = Job(id=next_id(), title="Yoga Instructor", status="pending")
        db_session.add(job)
        db_session.commit()
        service.move_to_recycle_bin("job", job)
        return service

    def test_newest_first_with_totals(self, db_session, clock):
        service = self._fill(db_session, clock)

        page = service.list_items(page=1, limit=3)

        assert page.total == 4
        assert page.pages == 2
        assert [i.meta_title for i in page.items] == ["Yoga Instructor", "Yoga Retreat", "Evening Spin"]

    def test_filter_by_type_and_search(self, db_session, clock):
        service = self._fill(db_session, clock)

        listings = service.list_items(entity_type="listing", search="yoga")

        assert sorted(i.meta_title for i in listings.items) == ["Morning Yoga", "Yoga Retreat"]

    def test_search_treats_wildcards_literally(self, db_session, clock):
        service = self._fill(db_session, clock)

        assert service.list_items(search="%").total == 0

    def test_date_range(self, db_session, clock):
        service = self._fill(db_session, clock)
        first_day = (clock.now - timedelta(days=3)).date()

        page = service.list_items(start_date=first_day, end_date=first_day)

        assert [i.meta_title for i in page.items] == ["Morning Yoga"]

    def test_unknown_type_filter(self, db_session):
        with pytest.raises(UnknownEntityTypeError):
            RecycleBinService(db_session).list_items(entity_type="widget")


class TestSweep:

    def test_expiring_soon_window(self, db_session, seed_job, seed_listing, clock):
        service = RecycleBinService(db_session, clock=clock)
        service.move_to_recycle_bin("job", seed_job)
        clock.advance(days=10)
        service.move_to_recycle_bin("listing", seed_listing)

        clock.advance(days=6)  # job expires in 4 days, listing in 14
        soon = service.expiring_soon()

        assert [i.entity_type for i in soon] == ["job"]

    def test_record_lifecycle_scenario(self, db_session, seed_job, clock):
        notifier = FakeNotifier()
        service = RecycleBinService(db_session, clock=clock, notifier=notifier)
        item_id = service.move_to_recycle_bin("job", seed_job).id

        clock.advance(days=16)
        first = service.sweep()
        assert first.warning_count == 1
        assert first.notified is True
        assert first.purged == 0
        assert len(notifier.calls) == 1
        assert notifier.calls[0][0].id == item_id

        clock.advance(days=5)
        second = service.sweep()
        assert second.purged == 1
        assert second.warning_count == 0

        with pytest.raises((AlreadyResolvedError, NotFoundError)):
            service.restore_item(item_id)

    def test_sweep_is_idempotent(self, db_session, seed_job, seed_listing, clock):
        notifier = FakeNotifier()
        service = RecycleBinService(db_session, clock=clock, notifier=notifier)
        service.move_to_recycle_bin("job", seed_job)
        clock.advance(days=3)
        service.move_to_recycle_bin("listing", seed_listing)

        clock.advance(days=19)  # job expired, listing expires in 1 day
        first = service.sweep()
        second = service.sweep()

        assert (first.warning_count, first.purged) == (1, 1)
        assert (second.warning_count, second.purged) == (0, 0)
        assert len(notifier.calls) == 1

    def test_failed_warning_is_retried_next_run(self, db_session, seed_job, clock):
        notifier = FakeNotifier(sent=False)
        service = RecycleBinService(db_session, clock=clock, notifier=notifier)
        service.move_to_recycle_bin("job", seed_job)
        clock.advance(days=17)

        first = service.sweep()
        notifier.sent = True
        second = service.sweep()

        assert first.notified is False
        assert second.notified is True
        assert second.warning_count == 1
        assert len(notifier.calls) == 2

    def test_sweep_with_nothing_to_do(self, db_session, clock):
        notifier = FakeNotifier()

        result = RecycleBinService(db_session, clock=clock, notifier=notifier).sweep()

        assert (result.warning_count, result.notified, result.purged) == (0, False, 0)
        assert notifier.calls == []

    def test_purge_expired_counts_each_item_once(self, db_session, seed_job, seed_listing, clock):
        service = RecycleBinService(db_session, clock=clock)
        service.move_to_recycle_bin("job", seed_job)
        service.move_to_recycle_bin("listing", seed_listing)
        clock.advance(days=20)

        assert service.purge_expired() == 2
        assert service.purge_expired() == 0
