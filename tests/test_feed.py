import io

import pytest

from srcgit.remote import Packing, PushTransfer, Sideband, SidebandOp, Transfer
from srcgit.term.feed import BAR_NAMES, apply_event, confirm, setup_progress_bar
from srcgit.term.progress import CLEAR_LINE, ProgressBar


def _bar():
    return ProgressBar(BAR_NAMES, io.StringIO())


def _answers(*replies):
    prompts = []
    remaining = list(replies)

    def ask(prompt):
        prompts.append(prompt)
        return remaining.pop(0)

    return ask, prompts


@pytest.mark.parametrize(
    "reply,expected",
    [("y", True), ("YES", True), ("", False), ("n", False), ("no", False)],
)
def test_confirm_answers(reply, expected):
    ask, _ = _answers(reply)
    assert confirm("Amend this commit?", ask) is expected


def test_confirm_repeats_on_unknown_answer():
    ask, prompts = _answers("maybe", "yes")
    assert confirm("Amend this commit?", ask) is True
    assert len(prompts) == 2
    assert all("Amend this commit?" in prompt for prompt in prompts)


def test_transfer_event_updates_second_bar():
    bar = _bar()
    apply_event(bar, Transfer(3, 10))
    assert bar.bars[1].message == "3/10 objects"
    assert (bar.bars[1].current, bar.bars[1].total) == (3, 10)


def test_push_transfer_event_reports_bytes():
    bar = _bar()
    apply_event(bar, PushTransfer(512, 1, 4))
    assert bar.bars[1].message == "512 bytes"
    assert (bar.bars[1].current, bar.bars[1].total) == (1, 4)


def test_packing_event_updates_third_bar():
    bar = _bar()
    apply_event(bar, Packing(7, 9))
    assert (bar.bars[2].current, bar.bars[2].total) == (7, 9)
    assert bar.bars[2].message is None


@pytest.mark.parametrize(
    "op,label",
    [
        (SidebandOp.COUNTING, "counting"),
        (SidebandOp.COMPRESSING, "compressing"),
        (SidebandOp.RESOLVING, "resolving"),
    ],
)
def test_sideband_event_updates_first_bar(op, label):
    bar = _bar()
    apply_event(bar, Sideband(op, 2, 5))
    assert bar.bars[0].message == f"{label} (2/5 objects)"
    assert (bar.bars[0].current, bar.bars[0].total) == (2, 5)


def test_unknown_event_raises():
    with pytest.raises(TypeError):
        apply_event(_bar(), object())


def test_setup_progress_bar_draws_and_clears():
    out = io.StringIO()
    thread = setup_progress_bar([Transfer(1, 2), Packing(2, 2)], out)
    thread.join(timeout=5)
    assert not thread.is_alive()
    text = out.getvalue()
    for name in BAR_NAMES:
        assert name in text
    assert text.endswith(CLEAR_LINE)
    assert text.count(CLEAR_LINE) == len(BAR_NAMES)