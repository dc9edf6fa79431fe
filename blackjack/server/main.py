# blackjack/server/main.py
import socket
import threading

from blackjack.common.constants import SERVER_HOST, SERVER_PORT
from blackjack.common.logging_utils import setup_logging, get_logger
from blackjack.server.session import handle_client


log = get_logger("server.main")


def _create_tcp_listener(host: str = SERVER_HOST, port: int = SERVER_PORT) -> socket.socket:
    """
    Create the TCP listening socket. Port 0 picks any free port.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    s.bind((host, port))
    s.listen()
    return s


def serve(listener: socket.socket, stop_event: threading.Event) -> None:
    """Accept loop: one daemon thread and one dealing session per connection."""
    listener.settimeout(0.5)
    while not stop_event.is_set():
        try:
            conn, addr = listener.accept()
        except socket.timeout:
            continue
        conn.settimeout(None)
        t_client = threading.Thread(
            target=handle_client,
            args=(conn, addr),
            daemon=True,
        )
        t_client.start()


def main() -> None:
    setup_logging()

    stop_event = threading.Event()
    tcp_listener = _create_tcp_listener()
    host, port = tcp_listener.getsockname()[:2]
    log.info(f"TCP listening on {host}:{port}")
    print(f"Server started, listening on {host}:{port}")

    try:
        serve(tcp_listener, stop_event)
    except KeyboardInterrupt:
        log.info("Shutting down...")
    finally:
        stop_event.set()
        tcp_listener.close()


if __name__ == "__main__":
    main()
