"""Unit tests for processor, encoder and analyser registries."""

import pytest

from asset_pipeline.services import (
    AnalyserRegistry,
    EncoderRegistry,
    ProcessorRegistry,
    UnknownAnalyser,
    UnknownEncoder,
    UnknownProcessor,
)


class TestProcessorRegistry:
    """Tests for ProcessorRegistry."""

    def test_register_and_process(self):
        """A registered processor receives the payload then its params."""
        processors = ProcessorRegistry()
        processors.register("repeat", lambda data, times: data * times)

        assert processors.process(b"ab", "repeat", 3) == b"ababab"

    def test_register_as_decorator(self):
        """register() works as a decorator and returns the function."""
        processors = ProcessorRegistry()

        @processors.register("upper")
        def upper(data):
            return data.upper()

        assert "upper" in processors
        assert processors.names() == ["upper"]
        assert processors.process(b"abc", "upper") == b"ABC"
        assert upper(b"x") == b"X"

    def test_unknown_processor(self):
        """Unknown names raise UnknownProcessor."""
        with pytest.raises(UnknownProcessor, match="resize"):
            ProcessorRegistry().process(b"abc", "resize")

    def test_processor_errors_propagate(self):
        """Exceptions from the processor itself are not wrapped."""
        processors = ProcessorRegistry()

        def broken(data):
            raise ValueError("bad image")

        processors.register("broken", broken)

        with pytest.raises(ValueError, match="bad image"):
            processors.process(b"abc", "broken")

    def test_register_replaces_existing(self):
        processors = ProcessorRegistry()
        processors.register("p", lambda data: b"old")
        processors.register("p", lambda data: b"new")

        assert len(processors) == 1
        assert processors.process(b"", "p") == b"new"


class TestEncoderRegistry:
    """Tests for EncoderRegistry."""

    def test_encode(self):
        encoders = EncoderRegistry()
        encoders.register("hex", lambda data: data.hex().encode("ascii"))

        assert encoders.encode(b"\x01\xff", "hex") == b"01ff"

    def test_unknown_format(self):
        with pytest.raises(UnknownEncoder):
            EncoderRegistry().encode(b"abc", "webp")


class TestAnalyserRegistry:
    """Tests for AnalyserRegistry."""

    def test_analyse_returns_any_value(self):
        analysers = AnalyserRegistry()
        analysers.register("length", len)

        assert analysers.analyse(b"abcd", "length") == 4

    def test_unknown_analyser(self):
        with pytest.raises(UnknownAnalyser):
            AnalyserRegistry().analyse(b"abc", "width")
