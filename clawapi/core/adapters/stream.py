from __future__ import annotations

import codecs
import json
import logging
from collections.abc import AsyncIterator
from typing import Any

logger = logging.getLogger(__name__)


class EventStreamDecoder:
    """Incremental decoder for line-delimited event streams.

    Bytes are fed as they arrive from the transport. Complete lines that
    start with ``marker`` yield their payload text; a line split across two
    reads (or a multi-byte character split across two reads) is held back
    until the rest arrives, so no fragment is ever lost.
    """

    def __init__(self, marker: str = "data: ") -> None:
        self.marker = marker
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    def feed(self, chunk: bytes) -> list[str]:
        """Consume one transport chunk and return the payloads it completed."""
        self._buffer += self._decoder.decode(chunk)
        *lines, self._buffer = self._buffer.split("\n")
        return self._payloads(lines)

    def flush(self) -> list[str]:
        """Return the payload of a trailing line that had no newline."""
        self._buffer += self._decoder.decode(b"", final=True)
        remainder, self._buffer = self._buffer, ""
        return self._payloads([remainder]) if remainder else []

    def _payloads(self, lines: list[str]) -> list[str]:
        payloads = []
        for line in lines:
            line = line.rstrip("\r")
            if line.startswith(self.marker):
                payloads.append(line[len(self.marker) :])
        return payloads


def parse_payload(payload: str) -> dict[str, Any] | None:
    """Decode one event payload; non-JSON or non-object payloads are skipped."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        logger.debug(f"Skipping non-JSON event payload: {payload[:80]!r}")
        return None
    return data if isinstance(data, dict) else None


async def iter_event_payloads(
    chunks: AsyncIterator[bytes], marker: str = "data: "
) -> AsyncIterator[dict[str, Any]]:
    """Yield decoded JSON event objects from a raw byte stream, in arrival order."""
    decoder = EventStreamDecoder(marker)
    async for chunk in chunks:
        for payload in decoder.feed(chunk):
            event = parse_payload(payload)
            if event is not None:
                yield event
    for payload in decoder.flush():
        event = parse_payload(payload)
        if event is not None:
            yield event
