"""Tests for bulk job records and the in-memory job store."""

import threading

import pytest

from smartbudget.jobs import (
    BulkCategorizationJob,
    InMemoryJobStore,
    InvalidJobTransition,
    JobStatus,
)


class TestBulkCategorizationJob:
    """Test the job state machine."""

    def test_new_job_is_pending(self):
        """A new job starts pending with zero counters."""
        job = BulkCategorizationJob(user_id="user-1")

        assert job.status == JobStatus.pending
        assert job.total_processed == 0
        assert job.total_updated == 0
        assert job.total_skipped_low_confidence == 0
        assert job.error is None
        assert job.job_id

    def test_job_ids_are_unique(self):
        """Every job gets its own id."""
        ids = {BulkCategorizationJob(user_id="user-1").job_id for _ in range(100)}
        assert len(ids) == 100

    def test_happy_path(self):
        """Pending to running to completed keeps counters consistent."""
        job = BulkCategorizationJob(user_id="user-1")
        job.mark_running()
        job.record_progress(updated=2, skipped=1)
        job.complete(total_processed=3)

        assert job.status == JobStatus.completed
        assert job.is_terminal
        assert job.completed_at is not None
        assert job.total_processed == job.total_updated + job.total_skipped_low_confidence

    def test_failure_keeps_counters(self):
        """Failing keeps the error and progress so far."""
        job = BulkCategorizationJob(user_id="user-1")
        job.mark_running()
        job.record_progress(updated=1, skipped=1)
        job.fail("database went away")

        snapshot = job.snapshot()
        assert snapshot["status"] == JobStatus.failed
        assert snapshot["error"] == "database went away"
        assert snapshot["total_updated"] == 1
        assert snapshot["total_processed"] == 2

    def test_pending_job_can_fail(self):
        """A job can fail before it starts running."""
        job = BulkCategorizationJob(user_id="user-1")
        job.fail("never started")
        assert job.status == JobStatus.failed

    @pytest.mark.parametrize("finish", ["complete", "fail"])
    def test_terminal_status_is_final(self, finish):
        """No transition leaves a terminal status."""
        job = BulkCategorizationJob(user_id="user-1")
        job.mark_running()
        if finish == "complete":
            job.complete(0)
        else:
            job.fail("boom")

        with pytest.raises(InvalidJobTransition):
            job.mark_running()
        with pytest.raises(InvalidJobTransition):
            job.complete(0)
        with pytest.raises(InvalidJobTransition):
            job.fail("again")

    def test_cannot_complete_before_running(self):
        """Completing a pending job is rejected."""
        job = BulkCategorizationJob(user_id="user-1")
        with pytest.raises(InvalidJobTransition):
            job.complete(0)

    def test_snapshot_fields(self):
        """Snapshot exposes the public status fields."""
        job = BulkCategorizationJob(user_id="user-1", job_id="job-1")
        assert job.snapshot() == {
            "job_id": "job-1",
            "status": JobStatus.pending,
            "total_processed": 0,
            "total_updated": 0,
            "total_skipped_low_confidence": 0,
            "error": None,
        }


class TestInMemoryJobStore:
    """Test job registration and lookup."""

    def test_add_and_get(self):
        """Added jobs are found by id."""
        store = InMemoryJobStore()
        job = BulkCategorizationJob(user_id="user-1")
        store.add(job)

        assert store.get(job.job_id) is job
        assert len(store) == 1

    def test_unknown_job(self):
        """Unknown id reads as None."""
        assert InMemoryJobStore().get("missing") is None

    def test_evicts_oldest_terminal_jobs(self):
        """Over the limit, the oldest finished job goes first."""
        store = InMemoryJobStore(max_jobs=2)
        first = BulkCategorizationJob(user_id="user-1")
        first.fail("done")
        second = BulkCategorizationJob(user_id="user-1")
        second.fail("done")
        store.add(first)
        store.add(second)

        third = BulkCategorizationJob(user_id="user-1")
        store.add(third)

        assert store.get(first.job_id) is None
        assert store.get(second.job_id) is second
        assert store.get(third.job_id) is third

    def test_active_jobs_are_never_evicted(self):
        """Pending and running jobs stay even over the limit."""
        store = InMemoryJobStore(max_jobs=1)
        running = BulkCategorizationJob(user_id="user-1")
        running.mark_running()
        pending = BulkCategorizationJob(user_id="user-1")
        store.add(running)
        store.add(pending)

        assert store.get(running.job_id) is running
        assert store.get(pending.job_id) is pending
        assert len(store) == 2

    def test_concurrent_adds(self):
        """Concurrent adds are all kept."""
        store = InMemoryJobStore()
        jobs = [BulkCategorizationJob(user_id="user-1") for _ in range(200)]

        def add(chunk):
            for job in chunk:
                store.add(job)

        threads = [threading.Thread(target=add, args=(jobs[i::4],)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 200
        assert all(store.get(job.job_id) is job for job in jobs)
