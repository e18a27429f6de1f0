"""
Tests for per-operation fault injection.

Verifies the single-shot FIFO protocol, queue independence between
operations and objects, and that failed operations leave state unchanged.
"""
from __future__ import annotations

import logging

import pytest

from mock_gcs import NotFound, NotMockable
from mock_gcs.faults import MOCKABLE_METHODS, FaultQueues


class TestFaultQueues:
    """Test FaultQueues directly."""

    def test_mockable_methods(self):
        assert MOCKABLE_METHODS == (
            "exists",
            "delete",
            "download",
            "save",
            "get_signed_url",
            "set_metadata",
            "get_metadata",
        )

    def test_empty_queue_does_nothing(self):
        FaultQueues().raise_next("exists")

    def test_fifo_order(self):
        queues = FaultQueues()
        first, second = RuntimeError("first"), RuntimeError("second")
        queues.push_error("save", first)
        queues.push_error("save", second)

        with pytest.raises(RuntimeError) as excinfo:
            queues.raise_next("save")
        assert excinfo.value is first

        with pytest.raises(RuntimeError) as excinfo:
            queues.raise_next("save")
        assert excinfo.value is second

        queues.raise_next("save")

    def test_unknown_method_rejected(self):
        with pytest.raises(NotMockable, match="Method 'copy' is not mockable"):
            FaultQueues().push_error("copy", RuntimeError())

    def test_reset_single_method(self):
        queues = FaultQueues()
        queues.push_error("save", RuntimeError())
        queues.push_error("delete", RuntimeError())

        queues.reset("save")

        assert queues.pending("save") == 0
        assert queues.pending("delete") == 1

    def test_reset_all(self):
        queues = FaultQueues()
        for method in MOCKABLE_METHODS:
            queues.push_error(method, RuntimeError())

        queues.reset()

        assert all(queues.pending(m) == 0 for m in MOCKABLE_METHODS)

    def test_injected_fault_is_logged(self, caplog):
        queues = FaultQueues()
        queues.push_error("download", KeyError("x"))

        with caplog.at_level(logging.DEBUG, logger="mock_gcs.faults"):
            with pytest.raises(KeyError):
                queues.raise_next("download")

        assert "Raising injected KeyError for download()" in caplog.text


class TestMockErrorOnce:
    """Test mock_error_once() on files."""

    @pytest.mark.asyncio
    async def test_exists_fails_once(self, file):
        file.mock_error_once("exists", Exception("Exists error"))

        with pytest.raises(Exception, match="Exists error"):
            await file.exists()
        assert await file.exists() is True

    @pytest.mark.asyncio
    async def test_delete_fails_once(self, file):
        file.mock_error_once("delete", Exception("Delete error"))

        with pytest.raises(Exception, match="Delete error"):
            await file.delete()
        assert await file.exists() is True

        await file.delete()
        assert await file.exists() is False

    @pytest.mark.asyncio
    async def test_get_signed_url_fails_once(self, file):
        file.mock_error_once("get_signed_url", Exception("Get signed URL error"))

        with pytest.raises(Exception, match="Get signed URL error"):
            await file.get_signed_url(action="read", expires="03-17-2024")
        assert await file.get_signed_url(action="read", expires="03-17-2024")

    @pytest.mark.asyncio
    async def test_save_failure_leaves_state(self, bucket):
        file = bucket.file("new.txt")
        error = Exception("Failed to save")
        file.mock_error_once("save", error)

        with pytest.raises(Exception) as excinfo:
            await file.save("Hello, world!", {"metadata": {"x": 1}})

        assert excinfo.value is error
        assert file.contents == b""
        assert file.metadata == {"metadata": {}}
        assert await file.exists() is False

    @pytest.mark.asyncio
    async def test_set_metadata_failure_leaves_metadata(self, file):
        await file.set_metadata({"metadata": {"a": 1}})
        file.mock_error_once("set_metadata", OSError("nope"))

        with pytest.raises(OSError):
            await file.set_metadata({"metadata": {"b": 2}})

        assert file.metadata == {"metadata": {"a": 1}}

    @pytest.mark.asyncio
    async def test_fault_precedes_not_found(self, bucket):
        """Test that the queue is consumed even when the object is absent."""
        missing = bucket.file("missing.txt")
        missing.mock_error_once("download", TimeoutError("slow"))

        with pytest.raises(TimeoutError):
            await missing.download()

        with pytest.raises(NotFound):
            await missing.download()

    @pytest.mark.asyncio
    async def test_queues_are_per_operation(self, file):
        file.mock_error_once("get_metadata", RuntimeError("metadata"))

        await file.save(b"data")
        assert await file.download() == b"data"

        with pytest.raises(RuntimeError, match="metadata"):
            await file.get_metadata()

    @pytest.mark.asyncio
    async def test_queues_are_per_object(self, bucket):
        first = bucket.file("first.txt", force_exists=True)
        second = bucket.file("second.txt", force_exists=True)
        first.mock_error_once("exists", RuntimeError("first only"))

        assert await second.exists() is True
        with pytest.raises(RuntimeError):
            await first.exists()

    @pytest.mark.asyncio
    async def test_chaining_enqueues_in_order(self, file):
        file.mock_error_once("download", ValueError("one")).mock_error_once(
            "download", KeyError("two")
        )

        with pytest.raises(ValueError):
            await file.download()
        with pytest.raises(KeyError):
            await file.download()
        assert await file.download() == b""

    def test_unknown_method(self, file):
        with pytest.raises(NotMockable):
            file.mock_error_once("create_write_stream", RuntimeError())  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_mock_reset(self, file):
        file.mock_error_once("exists", RuntimeError()).mock_error_once("delete", RuntimeError())

        assert file.mock_reset("exists") is file
        assert await file.exists() is True

        file.mock_reset()
        await file.delete()
