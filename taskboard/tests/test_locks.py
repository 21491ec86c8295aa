"""读写锁测试用例"""

import threading

import pytest

from taskboard.storage.locks import ReadWriteLock


class TestReadWriteLock:
    """测试读写锁"""

    def test_readers_share(self):
        """测试多个读者可以同时持有读锁"""
        lock = ReadWriteLock()
        inside = threading.Barrier(3, timeout=5)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        assert not inside.broken

    def test_writer_excludes_readers(self):
        """测试写锁持有期间读者被阻塞"""
        lock = ReadWriteLock()
        entered = threading.Event()

        def reader():
            with lock.read():
                entered.set()

        with lock.write():
            t = threading.Thread(target=reader)
            t.start()
            assert not entered.wait(timeout=0.2)
        assert entered.wait(timeout=5)
        t.join(timeout=5)

    def test_writer_waits_for_reader(self):
        """测试写者等待现有读者释放"""
        lock = ReadWriteLock()
        acquired = threading.Event()

        def writer():
            with lock.write():
                acquired.set()

        with lock.read():
            t = threading.Thread(target=writer)
            t.start()
            assert not acquired.wait(timeout=0.2)
        assert acquired.wait(timeout=5)
        t.join(timeout=5)

    def test_release_without_acquire(self):
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError):
            lock.release_read()
        with pytest.raises(RuntimeError):
            lock.release_write()

    def test_lock_released_on_error(self):
        """测试上下文内抛出异常后锁被释放"""
        lock = ReadWriteLock()
        with pytest.raises(ValueError):
            with lock.write():
                raise ValueError("boom")
        with lock.write():
            pass
