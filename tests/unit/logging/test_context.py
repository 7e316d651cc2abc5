"""Unit tests for the operation logging context."""

import logging
import threading

from tvt.logging.context import (
    OperationContextFilter,
    get_operation_context,
    operation_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord("tvt.test", logging.INFO, __file__, 1, "msg", (), None)


class TestOperationContext:
    def test_set_and_reset(self):
        assert get_operation_context() == (None, None)
        with operation_context("convert", "videos/clip.mp4"):
            assert get_operation_context() == ("convert", "videos/clip.mp4")
            with operation_context("info"):
                assert get_operation_context() == ("info", None)
            assert get_operation_context() == ("convert", "videos/clip.mp4")
        assert get_operation_context() == (None, None)

    def test_reset_on_error(self):
        try:
            with operation_context("extract", "a.mkv"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_operation_context() == (None, None)

    def test_not_shared_with_other_threads(self):
        seen = []
        with operation_context("convert", "a.mp4"):
            thread = threading.Thread(
                target=lambda: seen.append(get_operation_context())
            )
            thread.start()
            thread.join()
        assert seen == [(None, None)]


class TestOperationContextFilter:
    """Tests for OperationContextFilter."""

    def test_tags_record(self):
        record = _record()
        with operation_context("convert", "videos/clip.mp4"):
            assert OperationContextFilter().filter(record) is True
        assert record.operation == "convert"
        assert record.input_file == "videos/clip.mp4"
        assert record.op_tag == "[convert:clip.mp4] "

    def test_operation_without_file(self):
        record = _record()
        with operation_context("doctor"):
            OperationContextFilter().filter(record)
        assert record.op_tag == "[doctor] "

    def test_outside_operation(self):
        record = _record()
        assert OperationContextFilter().filter(record) is True
        assert record.operation is None
        assert record.op_tag == ""
