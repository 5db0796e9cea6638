import io

from srcgit.term.progress import (
    CLEAR_LINE,
    DELETE_CHAR,
    ERASE_TO_END,
    MOVE_BEGIN,
    MOVE_DOWN,
    MOVE_UP,
    Bar,
    ProgressBar,
    decode_chars,
)

NAMES = ["Remote", "Transfer", "Packing"]


def visible(text):
    return "".join(decode_chars(text))


def test_decode_chars_strips_escapes():
    assert decode_chars("\x1b[1;34m[\x1b[0mab") == ["[", "a", "b"]


def test_decode_chars_plain_text():
    assert decode_chars("plain") == list("plain")


def test_complete_bar_shows_check():
    assert visible(Bar("Remote", current=5, total=5).render(6, 24)) == "Remote ✔"


def test_complete_bar_is_padded_to_prefix():
    line = visible(Bar("Remote", current=9, total=5).render(8, 24))
    assert line == "Remote" + " " * 2 + " ✔"


def test_empty_bar_is_dashes():
    line = visible(Bar("Remote", current=0, total=10).render(6, 24))
    assert line == "Remote [" + "-" * 24 + "] "


def test_half_bar():
    line = visible(Bar("P", current=5, total=10).render(1, 10))
    assert line == "P [====❯     ] "


def test_bar_width_is_constant():
    for current in range(0, 100, 7):
        bar = Bar("Transfer", current=current, total=100, message="msg")
        line = visible(bar.render(8, 24))
        assert len(line) == 8 + 4 + 24 + len("msg")


def test_message_is_appended():
    line = visible(Bar("Remote", current=1, total=10, message="counting").render(6, 24))
    assert line.endswith("] counting")


def test_first_draw_prints_each_bar():
    out = io.StringIO()
    progress = ProgressBar(NAMES, out)
    progress.draw()
    lines = out.getvalue().split("\n")
    assert lines[-1] == ""
    assert lines[:-1] == [bar.render(8, progress.width) for bar in progress.bars]


def test_redraw_without_changes_only_moves_cursor():
    out = io.StringIO()
    progress = ProgressBar(NAMES, out)
    progress.draw()
    out.seek(0)
    out.truncate()
    progress.draw()
    assert out.getvalue() == MOVE_UP * 3 + MOVE_DOWN * 3 + MOVE_BEGIN


def test_redraw_with_changes_writes_new_chars():
    out = io.StringIO()
    progress = ProgressBar(NAMES, out)
    progress.draw()
    out.seek(0)
    out.truncate()
    progress.set_progress(2, 50, 100)
    progress.draw()
    written = out.getvalue()
    assert "❯" in written
    assert DELETE_CHAR in written
    assert written.endswith(MOVE_DOWN * 3 + MOVE_BEGIN)


def test_redraw_shorter_line_erases_rest():
    out = io.StringIO()
    progress = ProgressBar(NAMES, out)
    progress.draw()
    out.seek(0)
    out.truncate()
    progress.set_progress(0, 10, 10)
    progress.draw()
    written = out.getvalue()
    assert ERASE_TO_END in written
    assert progress.bars[0].render(8, progress.width) in written


def test_clear_before_draw_writes_nothing():
    out = io.StringIO()
    ProgressBar(NAMES, out).clear()
    assert out.getvalue() == ""


def test_clear_after_draw_erases_each_line():
    out = io.StringIO()
    progress = ProgressBar(NAMES, out)
    progress.draw()
    out.seek(0)
    out.truncate()
    progress.clear()
    assert out.getvalue() == (MOVE_BEGIN + MOVE_UP + CLEAR_LINE) * 3
    out.seek(0)
    out.truncate()
    progress.clear()
    assert out.getvalue() == ""


def test_out_of_range_updates_are_ignored():
    progress = ProgressBar(NAMES, io.StringIO())
    before = [Bar(bar.name, bar.current, bar.total, bar.message) for bar in progress.bars]
    progress.set_progress(3, 1, 2)
    progress.set_message(7, "nope")
    progress.set_progress(-1, 1, 2)
    assert progress.bars == before


def test_setters_update_bar():
    progress = ProgressBar(NAMES, io.StringIO())
    progress.set_progress(1, 3, 9)
    progress.set_message(1, "3/9 objects")
    assert progress.bars[1] == Bar("Transfer", 3, 9, "3/9 objects")


def test_default_output_is_stdout(capsys):
    ProgressBar(["Remote"]).draw()
    assert visible(capsys.readouterr().out).startswith("Remote [")