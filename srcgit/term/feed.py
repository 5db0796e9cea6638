"""Interactive prompts and the progress display fed by remote operations."""

from __future__ import annotations

import threading
import time
from typing import Callable, Iterable, TextIO

from ..remote import Packing, ProgressEvent, PushTransfer, Sideband, SidebandOp, Transfer
from .progress import ProgressBar

BAR_NAMES = ("Remote", "Transfer", "Packing")
REDRAW_INTERVAL = 0.05

_YES = {"y", "yes"}
_NO = {"n", "no"}

_SIDEBAND_LABELS = {
    SidebandOp.COUNTING: "counting",
    SidebandOp.COMPRESSING: "compressing",
    SidebandOp.RESOLVING: "resolving",
}


def confirm(prompt: str, input_fn: Callable[[str], str] | None = None) -> bool:
    """Ask a yes/no question; an empty answer means no.

    Unrecognised answers repeat the question.
    """
    ask = input_fn if input_fn is not None else input
    while True:
        answer = ask(f"? {prompt} (y/N) ").strip().lower()
        if not answer:
            return False
        if answer in _YES:
            return True
        if answer in _NO:
            return False


def apply_event(bar: ProgressBar, event: ProgressEvent) -> None:
    """Update the bars for one progress event."""
    match event:
        case Transfer(current=current, total=total):
            bar.set_message(1, f"{current}/{total} objects")
            bar.set_progress(1, current, total)
        case PushTransfer(bytes=size, current=current, total=total):
            bar.set_message(1, f"{size} bytes")
            bar.set_progress(1, current, total)
        case Packing(current=current, total=total):
            bar.set_progress(2, current, total)
        case Sideband(op=op, current=current, total=total):
            bar.set_progress(0, current, total)
            bar.set_message(0, f"{_SIDEBAND_LABELS[op]} ({current}/{total} objects)")
        case _:
            raise TypeError(f"unknown progress event: {event!r}")


def _consume(events: Iterable[ProgressEvent], out: TextIO | None) -> None:
    bar = ProgressBar(BAR_NAMES, out)
    bar.draw()
    last = time.monotonic()

    for event in events:
        apply_event(bar, event)
        if time.monotonic() - last < REDRAW_INTERVAL:
            continue
        last = time.monotonic()
        bar.draw()

    bar.clear()


def setup_progress_bar(
    events: Iterable[ProgressEvent], out: TextIO | None = None
) -> threading.Thread:
    """Draw progress for ``events`` on a background thread and return it.

    The thread ends, clearing the bars, once ``events`` is exhausted; a queue
    can be fed through ``iter(queue.get, None)``.
    """
    thread = threading.Thread(target=_consume, args=(events, out), daemon=True)
    thread.start()
    return thread