"""
Transport session state shared between command handlers and the framer.

The only mutable state here is the delimited-response flag. A handler
(guest-sync-delimited) raises it; the framer checks it before writing
the next outgoing message and, when set, emits a delimiter byte first
so the controller can throw away whatever stale bytes precede it.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import BinaryIO

logger = logging.getLogger("guestagent.session")

# Never valid in UTF-8, so it cannot appear inside a JSON response.
DELIMITER = b"\xff"


class TransportSession:
    """Per-channel state owned by the transport.

    The lock gives the flag write a happens-before edge with the
    framer's read of the response that follows it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._response_delimited = False

    @property
    def response_delimited(self) -> bool:
        with self._lock:
            return self._response_delimited

    def set_response_delimited(self) -> None:
        """Ask the framer to prefix the next response with a delimiter."""
        with self._lock:
            self._response_delimited = True

    def consume_response_delimited(self) -> bool:
        """Test-and-clear, called by the framer once per outgoing message."""
        with self._lock:
            was_set = self._response_delimited
            self._response_delimited = False
            return was_set


class ResponseFramer:
    """Writes JSON responses to a byte stream, honoring the session flag.

    Args:
        session: Session whose delimited flag is consulted.
        stream: Binary stream to the controller.
    """

    def __init__(self, session: TransportSession, stream: BinaryIO):
        self.session = session
        self.stream = stream

    def write_response(self, payload: dict) -> None:
        data = json.dumps(payload, separators=(",", ":")).encode("utf-8") + b"\n"
        if self.session.consume_response_delimited():
            logger.debug("Prefixing response with delimiter")
            data = DELIMITER + data
        self.stream.write(data)
        self.stream.flush()
