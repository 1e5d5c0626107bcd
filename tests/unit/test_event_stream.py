import pytest

from clawapi.core.adapters.stream import EventStreamDecoder, iter_event_payloads, parse_payload


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


@pytest.mark.unit
class TestEventStreamDecoder:
    def test_extracts_marked_lines_only(self):
        decoder = EventStreamDecoder()
        payloads = decoder.feed(b'event: completion\ndata: {"a": 1}\n\n: ping\ndata: {"b": 2}\n')
        assert payloads == ['{"a": 1}', '{"b": 2}']

    def test_line_split_across_reads_is_held_back(self):
        decoder = EventStreamDecoder()
        assert decoder.feed(b'data: {"completion": "Hel') == []
        assert decoder.feed(b'lo"}\n') == ['{"completion": "Hello"}']

    def test_multibyte_character_split_across_reads(self):
        encoded = 'data: {"completion": "café ☃"}\n'.encode("utf-8")
        # Split inside the three-byte snowman
        cut = encoded.index("☃".encode("utf-8")) + 1
        decoder = EventStreamDecoder()

        payloads = decoder.feed(encoded[:cut]) + decoder.feed(encoded[cut:])

        assert payloads == ['{"completion": "café ☃"}']

    def test_crlf_line_endings(self):
        decoder = EventStreamDecoder()
        assert decoder.feed(b"data: x\r\ndata: y\r\n") == ["x", "y"]

    def test_flush_returns_unterminated_last_line(self):
        decoder = EventStreamDecoder()
        assert decoder.feed(b"data: first\ndata: last") == ["first"]
        assert decoder.flush() == ["last"]
        assert decoder.flush() == []

    def test_custom_marker(self):
        decoder = EventStreamDecoder(marker="chunk:")
        assert decoder.feed(b"chunk:{}\ndata: ignored\n") == ["{}"]


@pytest.mark.unit
class TestParsePayload:
    def test_json_object(self):
        assert parse_payload('{"type": "message_stop"}') == {"type": "message_stop"}

    def test_non_json_is_skipped(self):
        assert parse_payload("[DONE]") is None

    def test_non_object_is_skipped(self):
        assert parse_payload("[1, 2]") is None


@pytest.mark.unit
class TestIterEventPayloads:
    @pytest.mark.asyncio
    async def test_preserves_arrival_order_across_chunks(self):
        chunks = _chunks(
            b'data: {"n": 1}\nda',
            b'ta: not json\ndata: {"n"',
            b': 2}\ndata: {"n": 3}',
        )
        events = [event async for event in iter_event_payloads(chunks)]
        assert events == [{"n": 1}, {"n": 2}, {"n": 3}]
