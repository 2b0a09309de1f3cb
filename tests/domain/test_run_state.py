from __future__ import annotations

import pytest

from kubesync.domain.run_state import InvalidTransitionError, SyncRun, SyncState


def test_capability_run_path() -> None:
    run = SyncRun(flow="capability")

    path = (SyncState.DISCOVERING, SyncState.INFERRING, SyncState.STORING, SyncState.COMPLETE)
    for state in path:
        run.advance(state)

    assert run.finished
    assert run.history == [
        SyncState.IDLE,
        SyncState.DISCOVERING,
        SyncState.INFERRING,
        SyncState.STORING,
        SyncState.COMPLETE,
    ]


def test_instance_run_path_goes_through_reconciling() -> None:
    run = SyncRun(flow="instance")

    path = (SyncState.DISCOVERING, SyncState.RECONCILING, SyncState.STORING, SyncState.COMPLETE)
    for state in path:
        run.advance(state)

    assert run.state is SyncState.COMPLETE


def test_dry_run_path_skips_storing() -> None:
    run = SyncRun(flow="instance")

    run.advance(SyncState.DISCOVERING)
    run.advance(SyncState.COMPLETE)

    assert run.finished


def test_rejects_skipping_discovery() -> None:
    run = SyncRun(flow="capability")

    with pytest.raises(InvalidTransitionError):
        run.advance(SyncState.STORING)


def test_reconciling_must_be_followed_by_storing() -> None:
    run = SyncRun(flow="instance")
    run.advance(SyncState.DISCOVERING)
    run.advance(SyncState.RECONCILING)

    with pytest.raises(InvalidTransitionError):
        run.advance(SyncState.COMPLETE)


def test_fail_from_any_active_state() -> None:
    run = SyncRun(flow="capability")
    run.advance(SyncState.DISCOVERING)

    run.fail()

    assert run.state is SyncState.FAILED
    assert run.finished


def test_terminal_states_cannot_be_left() -> None:
    run = SyncRun(flow="capability")
    run.advance(SyncState.DISCOVERING)
    run.advance(SyncState.COMPLETE)

    with pytest.raises(InvalidTransitionError):
        run.fail()
    with pytest.raises(InvalidTransitionError):
        run.advance(SyncState.DISCOVERING)
