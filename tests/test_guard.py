"""Tests for the single-flight run guard."""

import threading

from untis_export.engine.guard import RunGuard, RunState


class TestRunGuard:
    """Tests for RunGuard."""

    def test_starts_idle(self) -> None:
        """Test a new guard is idle."""
        guard = RunGuard()

        assert guard.state is RunState.IDLE
        assert guard.is_running is False

    def test_acquire_and_release(self) -> None:
        """Test the idle → running → idle cycle."""
        guard = RunGuard()

        assert guard.try_acquire() is True
        assert guard.state is RunState.RUNNING

        guard.release()
        assert guard.state is RunState.IDLE

    def test_second_acquire_fails(self) -> None:
        """Test the guard cannot be acquired twice."""
        guard = RunGuard()

        assert guard.try_acquire() is True
        assert guard.try_acquire() is False
        assert guard.is_running is True

    def test_release_when_idle(self) -> None:
        """Test releasing an idle guard keeps it idle."""
        guard = RunGuard()

        guard.release()

        assert guard.state is RunState.IDLE

    def test_concurrent_acquire_has_single_winner(self) -> None:
        """Test exactly one of many racing threads acquires the guard."""
        guard = RunGuard()
        barrier = threading.Barrier(16)
        results: list[bool] = []
        results_lock = threading.Lock()

        def contend() -> None:
            barrier.wait()
            acquired = guard.try_acquire()
            with results_lock:
                results.append(acquired)

        threads = [threading.Thread(target=contend) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 1
        assert results.count(False) == 15
