# corelog

Building blocks for structured logging.

- **Cores** (`corelog.core`): the abstract `Core` class with `enabled`,
  `with_fields`, `check`, `write` and `sync`; the `Level` enum (`DEBUG`,
  `INFO`, `WARN`, `ERROR`, `DPANIC`, `PANIC`, `FATAL`, `INVALID`); the frozen
  `Entry` and `Field` dataclasses; `CheckedEntry` and `add_core`; `NopCore`
  and `new_nop_core`; and `new_tee`, which fans entries out to several cores
  through a `MultiCore`. `level_of` reports the lowest level that a core, a
  `Level` or a callable enabler allows.
- **Write syncers** (`corelog.write_syncer`): `add_sync` returns a writer
  unchanged if it already has `write` and `sync`, and otherwise wraps it in a
  `WriterWrapper` whose `sync` calls the writer's `flush` if it has one.
  `lock` wraps a syncer in a `LockedWriteSyncer`, and `new_multi_write_syncer`
  duplicates writes and syncs across several syncers through a
  `MultiWriteSyncer`. It writes to all of them even when one fails, and
  reports the smallest non-zero byte count.
- **Observer** (`corelog.observer`): `observe(enabler)` returns an
  `ObserverCore` together with the `ObservedLogs` that it records into.
  `ObservedLogs` supports `len()`, `all`, `take_all` and `all_untimed`. It can
  be filtered with `filter_level_exact`, `filter_message`,
  `filter_message_snippet`, `filter_field`, `filter_field_key` and `filter`.
  Each recorded `LoggedEntry` holds its `entry` and its `context` fields.
  `context_map()` returns those fields as a dict, with namespace fields
  becoming nested dicts.
- **Line writer** (`corelog.linewriter`): `Writer` logs each line written to
  it as an entry at its `level`. Partial lines stay buffered until a newline
  arrives or `sync`/`close` is called. It also works as a context manager.
- **gRPC-style logger** (`corelog.grpclog`): `new_logger(core, *options)`
  returns a `Logger` with the `print`/`info`/`warning`/`error`/`fatal`
  methods and their `…ln` and `…f` variants, plus `v(level)` for gRPC
  verbosity levels 0–3. The `with_debug()` option makes `print`, `printf` and
  `println` log at `DEBUG` instead of `INFO`. The `fatal` methods log at
  `FATAL` and then raise `SystemExit(1)`.
- **Test writer** (`corelog.testing_writer`): `TestingWriter` sends each chunk
  written to it, with trailing newlines stripped, to the `logf` method of
  anything that satisfies the `TestingT` protocol. `with_mark_failed(True)`
  returns a copy that also calls `fail()` on every write.

## Installation

```
pip install corelog
```

## Observing logs in tests

```python
from corelog.core import Entry, Level, new_tee
from corelog.observer import observe

debug_core, debug_logs = observe(Level.DEBUG)
warn_core, warn_logs = observe(Level.WARN)
tee = new_tee(debug_core, warn_core)

for entry in (Entry(level=Level.INFO, message="hello"),
              Entry(level=Level.ERROR, message="boom")):
    checked = tee.check(entry, None)
    if checked is not None:
        checked.write()

assert len(debug_logs) == 2
assert [e.entry.message for e in warn_logs.all()] == ["boom"]
```

## Logging a stream line by line

```python
from corelog.core import Level
from corelog.linewriter import Writer
from corelog.observer import observe

core, logs = observe(Level.INFO)
with Writer(core, Level.INFO) as writer:
    writer.write(b"starting up\nrunning\n")
    writer.write(b"shutting down")

assert [e.entry.message for e in logs.all()] == ["starting up", "running", "shutting down"]
```

## What this package does not do

Entries are only recorded by `ObserverCore` or by cores that you write
yourself. The package has no encoders that turn entries into JSON or console
text, and no core that writes to files or streams. It also has no high-level
logger with field helpers, caller information, stack traces or sampling, and
no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```