import pytest

from rvkern.sync import SSTATUS_SIE, InterruptState, local_intr_save


def test_starts_disabled():
    state = InterruptState()
    assert not state.enabled


def test_enable_sets_sie_bit():
    state = InterruptState()
    state.enable()
    assert state.enabled
    assert state.sstatus & SSTATUS_SIE == SSTATUS_SIE


def test_disable_clears_only_sie():
    state = InterruptState(sstatus=0x100)
    state.enable()
    assert state.sstatus == 0x100 | SSTATUS_SIE
    state.disable()
    assert state.sstatus == 0x100
    assert not state.enabled


def test_save_disables_and_restores():
    state = InterruptState()
    state.enable()
    with local_intr_save(state) as saved:
        assert saved is True
        assert not state.enabled
    assert state.enabled


def test_save_when_disabled_stays_disabled():
    state = InterruptState()
    with local_intr_save(state) as saved:
        assert saved is False
        assert not state.enabled
    assert not state.enabled


def test_nested_saves_restore_outermost_only():
    state = InterruptState()
    state.enable()
    with local_intr_save(state) as outer:
        with local_intr_save(state) as inner:
            assert inner is False
        assert not state.enabled
    assert outer is True
    assert state.enabled


def test_restores_after_exception():
    state = InterruptState()
    state.enable()
    with pytest.raises(RuntimeError):
        with local_intr_save(state):
            raise RuntimeError("boom")
    assert state.enabled