# blackjack/client/gameplay.py

import queue
import threading
from dataclasses import dataclass
from typing import Union

from blackjack.common.protocol import (
    MessageAction,
    ProtocolError,
    build_request,
    decode_message,
)
from blackjack.common.transport import MessageChannel, connect
from blackjack.common.logging_utils import get_logger
from blackjack.client.state import ClientSessionState

log = get_logger("client.gameplay")


class HandshakeError(ConnectionError):
    """The network thread did not hand over a usable connection."""
    pass


@dataclass(frozen=True)
class Connected:
    channel: MessageChannel


@dataclass(frozen=True)
class ConnectFailed:
    error: Exception


Event = Union[Connected, ConnectFailed]


def receive_loop(channel: MessageChannel, state: ClientSessionState, disconnected: threading.Event) -> None:
    """Feed every server message into the session state until the connection closes."""
    try:
        while True:
            try:
                raw = channel.recv_text()
                if raw is None:
                    log.info("Server closed the connection")
                    break
                msg = decode_message(raw)
            except ProtocolError as e:
                log.warning(f"Dropping malformed server message: {e}")
                continue
            state.apply(msg)
    except (ConnectionError, OSError) as e:
        log.warning(f"Connection lost: {e}")
    finally:
        disconnected.set()


def run_network(
    host: str,
    port: int,
    state: ClientSessionState,
    ready: "queue.Queue[Event]",
    disconnected: threading.Event,
) -> None:
    """
    Network thread body. Puts exactly one event on `ready`: Connected with the
    channel the main thread sends through, or ConnectFailed.
    """
    try:
        channel = connect(host, port)
    except OSError as e:
        log.error(f"Could not connect to {host}:{port}: {e}")
        disconnected.set()
        ready.put(ConnectFailed(e))
        return

    log.info(f"Connected to {host}:{port}")
    ready.put(Connected(channel))
    receive_loop(channel, state, disconnected)


def start_network(
    host: str,
    port: int,
    state: ClientSessionState,
    disconnected: threading.Event,
) -> MessageChannel:
    """
    Start the network thread and block until it reports the connection.
    The thread is a daemon and is never joined.
    """
    ready: "queue.Queue[Event]" = queue.Queue(maxsize=1)
    t = threading.Thread(
        target=run_network,
        args=(host, port, state, ready, disconnected),
        daemon=True,
    )
    t.start()

    event = ready.get()
    if not isinstance(event, Connected):
        raise HandshakeError(f"Connection to {host}:{port} failed: {getattr(event, 'error', event)}")
    return event.channel


def announce_player(channel: MessageChannel, player_name: str) -> None:
    channel.send(build_request(MessageAction.NEW_PLAYER, text=player_name), note="player name")
