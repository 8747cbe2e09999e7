"""Unit tests for trace sinks."""

import logging

import pytest
from sudokuprop.trace import FileTraceSink, LoggingTraceSink, MemoryTraceSink, NullTraceSink


class TestTraceSinks:
    """Tests for the trace sink implementations."""

    def test_null_sink_discards(self):
        NullTraceSink().append("anything")

    def test_memory_sink_keeps_order(self):
        sink = MemoryTraceSink()
        sink.append("first")
        sink.append("second")
        assert sink.events == ["first", "second"]
        assert len(sink) == 2

    def test_logging_sink(self, caplog):
        sink = LoggingTraceSink()
        with caplog.at_level(logging.DEBUG, logger="sudokuprop.trace"):
            sink.append("insert 5 at (4, 4)")
        assert "insert 5 at (4, 4)" in caplog.messages

    def test_logging_sink_custom_level(self, caplog):
        logger = logging.getLogger("tests.trace")
        sink = LoggingTraceSink(logger, level=logging.WARNING)
        with caplog.at_level(logging.WARNING, logger="tests.trace"):
            sink.append("event")
        assert caplog.records[0].levelno == logging.WARNING

    def test_file_sink_opens_lazily(self, tmp_path):
        path = tmp_path / "trace.log"
        sink = FileTraceSink(str(path))
        assert not sink.used
        sink.close()
        assert not path.exists()

    def test_file_sink_writes_lines(self, tmp_path):
        path = tmp_path / "trace.log"
        with FileTraceSink(str(path)) as sink:
            sink.append("one")
            sink.append("two\n")
        assert path.read_text() == "one\ntwo\n"
        assert not sink.used


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
