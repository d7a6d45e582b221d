import io
import threading

import pytest

from corelog.write_syncer import (
    LockedWriteSyncer,
    MultiWriteSyncer,
    WriterWrapper,
    add_sync,
    lock,
    new_multi_write_syncer,
)


class SpyBuffer:
    """Collects writes and records sync calls, optionally failing the sync."""

    def __init__(self, error=None):
        self.data = bytearray()
        self.called = False
        self.error = error

    def write(self, data):
        self.data.extend(data)
        return len(data)

    def sync(self):
        self.called = True
        if self.error is not None:
            raise self.error


class FailWriter:
    def write(self, data):
        raise OSError("failed")

    def sync(self):
        return None


class ShortWriter:
    def write(self, data):
        return len(data) - 1

    def sync(self):
        return None


class Discarder:
    def write(self, data):
        return len(data)

    def sync(self):
        return None


def test_add_sync_write_syncer():
    concrete = SpyBuffer()
    ws = add_sync(concrete)
    assert ws is concrete
    assert ws.write(b"foo") == 3
    ws.sync()
    assert concrete.called is True

    concrete.error = RuntimeError("fail")
    with pytest.raises(RuntimeError):
        ws.sync()


def test_add_sync_writer():
    buf = io.BytesIO()
    ws = add_sync(buf)
    assert isinstance(ws, WriterWrapper)
    assert ws.write(b"foo") == 3
    ws.sync()
    assert buf.getvalue() == b"foo"


def test_multi_write_syncer_single_writer_returned():
    w = SpyBuffer()
    ws = new_multi_write_syncer(w)
    assert ws is w
    ws.sync()
    assert w.called is True


def test_multi_write_syncer_writes_both():
    first, second = io.BytesIO(), io.BytesIO()
    ws = new_multi_write_syncer(add_sync(first), add_sync(second))
    msg = b"dumbledore"
    assert ws.write(msg) == len(msg)
    assert first.getvalue() == msg
    assert second.getvalue() == msg


def test_multi_write_syncer_fails_write():
    ws = MultiWriteSyncer([add_sync(FailWriter())])
    with pytest.raises(OSError):
        ws.write(b"test")


def test_multi_write_syncer_short_write():
    ws = MultiWriteSyncer([add_sync(ShortWriter())])
    assert ws.write(b"test") == 3


def test_writes_to_all_even_if_first_errors():
    second = io.BytesIO()
    ws = new_multi_write_syncer(add_sync(FailWriter()), add_sync(second))
    with pytest.raises(OSError):
        ws.write(b"fail")
    assert second.getvalue() == b"fail"


def test_multi_write_syncer_sync_propagates_errors():
    badsink = SpyBuffer(error=RuntimeError("sink is full"))
    ws = new_multi_write_syncer(Discarder(), badsink)
    with pytest.raises(RuntimeError, match="sink is full"):
        ws.sync()


def test_multi_write_syncer_sync_no_errors_on_discard():
    ws = MultiWriteSyncer([Discarder()])
    assert ws.sync() is None
    assert ws.write(b"abc") == 3


def test_multi_write_syncer_sync_all_called():
    failed = SpyBuffer(error=RuntimeError("disposal broken"))
    second = SpyBuffer()
    ws = new_multi_write_syncer(failed, second)
    with pytest.raises(RuntimeError):
        ws.sync()
    assert failed.called is True
    assert second.called is True


def test_multi_write_syncer_groups_multiple_sync_errors():
    ws = new_multi_write_syncer(
        SpyBuffer(error=RuntimeError("a")), SpyBuffer(error=ValueError("b"))
    )
    with pytest.raises(ExceptionGroup) as info:
        ws.sync()
    assert len(info.value.exceptions) == 2


def test_lock_is_idempotent_and_delegates():
    spy = SpyBuffer()
    locked = lock(spy)
    assert isinstance(locked, LockedWriteSyncer)
    assert lock(locked) is locked
    assert locked.write(b"abc") == 3
    locked.sync()
    assert spy.called is True
    assert bytes(spy.data) == b"abc"


def test_lock_concurrent_writes():
    spy = SpyBuffer()
    locked = lock(spy)

    def work():
        for _ in range(200):
            locked.write(b"x")

    threads = [threading.Thread(target=work) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(spy.data) == 1600