# blackjack/client/cardfx/sprites.py
from __future__ import annotations
from .terminal import Sprite

def card_face(face: str, suit: str, w: int = 11, h: int = 7) -> Sprite:
    w = max(w, 9)
    h = max(h, 5)
    inner_w = w - 2

    top = "┌" + "─" * inner_w + "┐"
    bot = "└" + "─" * inner_w + "┘"

    label = face[:2] + suit
    lines = [top, "│" + label.ljust(inner_w) + "│"]
    middle_rows = h - 4
    mid_symbol = suit.center(inner_w)
    for i in range(middle_rows):
        lines.append("│" + (mid_symbol if i == middle_rows // 2 else " " * inner_w) + "│")
    lines.append("│" + label.rjust(inner_w) + "│")
    lines.append(bot)
    return Sprite(lines)

def card_back(w: int = 11, h: int = 7) -> Sprite:
    w = max(w, 9)
    h = max(h, 5)
    inner_w = w - 2

    top = "┌" + "─" * inner_w + "┐"
    bot = "└" + "─" * inner_w + "┘"

    lines = [top]
    for r in range(h - 2):
        pattern = (("░▒" if r % 2 == 0 else "▒░") * (inner_w // 2 + 3))[:inner_w]
        lines.append("│" + pattern + "│")
    lines.append(bot)
    return Sprite(lines)

def shoe(remaining: int, w: int = 18, h: int = 5) -> Sprite:
    """Card shoe box with the remaining card count inside."""
    w = max(w, 14)
    h = max(h, 5)
    inner_w = w - 2

    top = "╔" + "═" * inner_w + "╗"
    bot = "╚" + "═" * inner_w + "╝"

    lines = [top]
    for r in range(h - 2):
        if r == (h - 2) // 2:
            lines.append("║" + f"{remaining} cards".center(inner_w)[:inner_w] + "║")
        else:
            lines.append("║" + (" " * inner_w) + "║")
    lines.append(bot)
    return Sprite(lines)
