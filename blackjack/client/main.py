# blackjack/client/main.py

import select
import sys
import threading

from blackjack.common.constants import SERVER_HOST, SERVER_PORT, FRAME_INTERVAL_S
from blackjack.common.logging_utils import setup_logging, get_logger
from blackjack.client.state import ClientSessionState, Key
from blackjack.client.gameplay import start_network, announce_player, HandshakeError
from blackjack.client.ui import welcome_script, get_player_name, parse_key
from blackjack.client.cardfx.terminal import TerminalRenderer
from blackjack.client.cardfx.table import TableRenderer


log = get_logger("client.main")


def _read_key(timeout: float):
    """Waits up to timeout for one line on stdin. Returns (got_line, key)."""
    ready, _, _ = select.select([sys.stdin], [], [], timeout)
    if not ready:
        return False, None
    line = sys.stdin.readline()
    if line == "":
        # stdin closed
        return True, Key.QUIT
    return True, parse_key(line)


def run_table(state: ClientSessionState, channel, disconnected: threading.Event, table: TableRenderer) -> None:
    """Render/input loop. Leaves on quit or as soon as the connection drops."""
    while not disconnected.is_set():
        state.advance_reveal()
        table.render(state.snapshot())

        got_line, key = _read_key(FRAME_INTERVAL_S)
        if not got_line:
            continue
        if key is Key.QUIT:
            log.info("Quit requested")
            return
        if key is not None:
            request = state.press(key)
            if request is not None:
                try:
                    channel.send(request, note=f"key={key.value}")
                except OSError as e:
                    log.warning(f"Send failed: {e}")
                    disconnected.set()
                    break
        table.render(state.snapshot(), force=True)

    log.error("Disconnected from server")


def main() -> None:
    setup_logging()
    print(welcome_script())
    player_name = get_player_name()

    state = ClientSessionState(player_name)
    disconnected = threading.Event()

    try:
        channel = start_network(SERVER_HOST, SERVER_PORT, state, disconnected)
    except HandshakeError as e:
        log.error(str(e))
        sys.exit(1)

    announce_player(channel, player_name)

    rend = TerminalRenderer(clear_each_frame=True)
    rend.begin()
    try:
        run_table(state, channel, disconnected, TableRenderer(rend))
        lost = disconnected.is_set()
    finally:
        rend.end()
        channel.close()

    if lost:
        sys.exit(1)


if __name__ == "__main__":
    main()
