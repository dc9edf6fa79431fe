# blackjack/common/transport.py

import socket
import threading
from typing import Optional, Tuple

from .constants import MAX_FRAME_LEN
from .protocol import SessionMessage, ProtocolError, encode_message
from .logging_utils import get_logger, log_message

log = get_logger("transport")


class MessageChannel:
    """
    Duplex message connection over a stream socket.
    One message = one UTF-8 line. JSON escapes newlines inside strings,
    so a newline always ends a frame.
    """

    def __init__(self, sock: socket.socket, peer: Optional[Tuple[str, int]] = None) -> None:
        self._sock = sock
        self._reader = sock.makefile("rb")
        self._send_lock = threading.Lock()
        self.peer = peer

    def send(self, msg: SessionMessage, note: str = "") -> None:
        raw = encode_message(msg)
        with self._send_lock:
            self._sock.sendall(raw.encode("utf-8") + b"\n")
        log_message(log, "OUT", self.peer, raw, parsed=msg, note=note)

    def recv_text(self) -> Optional[str]:
        """
        Returns the next frame without its newline, or None once the peer closed.
        Raises ProtocolError for oversized or non UTF-8 frames.
        """
        if self._reader.closed:
            return None
        line = self._reader.readline(MAX_FRAME_LEN + 1)
        if not line:
            # reader is closed by the receiving side only
            self._reader.close()
            return None
        if not line.endswith(b"\n"):
            if len(line) > MAX_FRAME_LEN:
                # drain the rest of the oversized frame
                while line and not line.endswith(b"\n"):
                    line = self._reader.readline(MAX_FRAME_LEN + 1)
                raise ProtocolError(f"Frame longer than {MAX_FRAME_LEN} bytes")
            # peer closed in the middle of a frame
            self._reader.close()
            return None
        try:
            raw = line[:-1].decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolError(f"Frame is not valid UTF-8: {e}") from e
        log_message(log, "IN", self.peer, raw, note="frame received")
        return raw

    def close(self) -> None:
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # already disconnected
            pass
        self._sock.close()


def connect(host: str, port: int, timeout: Optional[float] = None) -> MessageChannel:
    sock = socket.create_connection((host, port), timeout=timeout)
    # blocking reads from here on
    sock.settimeout(None)
    return MessageChannel(sock, (host, port))
