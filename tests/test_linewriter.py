import pytest

from corelog.core import Entry, Level
from corelog.linewriter import Writer
from corelog.observer import LoggedEntry, observe

CASES = [
    (
        "simple",
        Level.INFO,
        ["foo\n", "bar\n", "baz\n"],
        [(Level.INFO, "foo"), (Level.INFO, "bar"), (Level.INFO, "baz")],
    ),
    ("level too low", Level.DEBUG, ["foo\n", "bar\n"], []),
    (
        "multiple newlines in a message",
        Level.WARN,
        ["foo\nbar\n", "baz\n", "qux\nquux\n"],
        [
            (Level.WARN, "foo"),
            (Level.WARN, "bar"),
            (Level.WARN, "baz"),
            (Level.WARN, "qux"),
            (Level.WARN, "quux"),
        ],
    ),
    (
        "message split across multiple writes",
        Level.ERROR,
        ["foo", "bar\nbaz", "qux"],
        [(Level.ERROR, "foobar"), (Level.ERROR, "bazqux")],
    ),
    (
        "blank lines in the middle",
        Level.INFO,
        ["foo\n\nbar\nbaz"],
        [(Level.INFO, "foo"), (Level.INFO, ""), (Level.INFO, "bar"), (Level.INFO, "baz")],
    ),
    (
        "blank line at the end",
        Level.INFO,
        ["foo\nbar\nbaz\n"],
        [(Level.INFO, "foo"), (Level.INFO, "bar"), (Level.INFO, "baz")],
    ),
    (
        "multiple blank line at the end",
        Level.INFO,
        ["foo\nbar\nbaz\n\n"],
        [(Level.INFO, "foo"), (Level.INFO, "bar"), (Level.INFO, "baz"), (Level.INFO, "")],
    ),
]


@pytest.mark.parametrize("desc, level, writes, want", CASES, ids=[c[0] for c in CASES])
def test_writer(desc, level, writes, want):
    core, observed = observe(Level.INFO)
    writer = Writer(core, level)
    for chunk in writes:
        assert writer.write(chunk) == len(chunk.encode())
    writer.close()
    got = [(e.entry.level, e.entry.message) for e in observed.all_untimed()]
    assert got == want


def test_write_then_sync():
    core, observed = observe(Level.INFO)
    writer = Writer(core, Level.INFO)
    writer.write("foo")
    writer.write("bar")
    assert len(observed) == 0

    writer.sync()
    assert observed.all_untimed() == [
        LoggedEntry(Entry(level=Level.INFO, message="foobar"), [])
    ]
    observed.take_all()

    writer.sync()
    assert len(observed) == 0


def test_example_lines():
    core, observed = observe(Level.INFO)
    writer = Writer(core)
    writer.write(b"starting up\n")
    writer.write(b"running\n")
    writer.write(b"shutting down\n")
    writer.close()
    assert [e.entry.message for e in observed.all()] == [
        "starting up",
        "running",
        "shutting down",
    ]


def test_context_manager_flushes_partial_line():
    core, observed = observe(Level.INFO)
    with Writer(core) as writer:
        writer.write(b"partial")
        assert len(observed) == 0
    assert [e.entry.message for e in observed.all()] == ["partial"]


def test_disabled_level_reports_full_length():
    core, observed = observe(Level.ERROR)
    writer = Writer(core, Level.INFO)
    assert writer.write(b"abc\ndef") == 7
    writer.close()
    assert observed.all() == []