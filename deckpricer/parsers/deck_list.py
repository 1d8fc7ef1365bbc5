"""
Deck list parser.

Supports:
- "4 Lightning Bolt"
- "4x Lightning Bolt" / "4X Lightning Bolt"
- "Lightning Bolt" (quantity defaults to 1)
"""

import re

from deckpricer.models.deck import DeckLine

# Groups: (quantity, card_name)
QUANTITY_PATTERN = re.compile(r"^(\d+)x?\s+(.+)$", re.IGNORECASE)


def parse_deck_line(line: str) -> DeckLine | None:
    """
    Parse a single deck list line.

    Returns:
        DeckLine, or None for blank lines
    """
    line = line.strip()
    if not line:
        return None

    match = QUANTITY_PATTERN.match(line)
    if match:
        return DeckLine(name=match.group(2).strip(), quantity=int(match.group(1)))

    return DeckLine(name=line, quantity=1)


def parse_deck_list(text: str) -> list[DeckLine]:
    """
    Parse free-form deck list text, one card per line.

    Lines are kept in order and are not merged: the same card on two lines
    yields two DeckLines.
    """
    lines: list[DeckLine] = []

    for raw in text.strip().split("\n"):
        parsed = parse_deck_line(raw)
        if parsed is not None:
            lines.append(parsed)

    return lines
