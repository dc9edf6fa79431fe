# blackjack/client/ui.py

from typing import Optional

from blackjack.client.state import Key


def welcome_script() -> str:
    return "welcome to BLACKJACK!"


def get_player_name() -> str:
    name = ''
    while not name:
        name = input("Player name: ").strip()
    return name


def parse_key(line: str) -> Optional[Key]:
    """
    Maps one line of terminal input to a table key.
    An empty line is Enter, a single space (or "stand") is Space.
    """
    line = line.rstrip("\r\n")
    if line == "" or line.strip().lower() in ("hit", "h"):
        return Key.ENTER
    if line.strip() == "" or line.strip().lower() == "stand":
        return Key.SPACE

    raw = line.strip().lower()
    if raw in ("d", "double"):
        return Key.DOUBLE
    if raw in ("s", "split"):
        return Key.SPLIT
    if raw in ("q", "quit", "exit"):
        return Key.QUIT
    return None
