from enum import Enum


class StoreKey(str, Enum):
    """Identifiers of the storefronts prices are fetched from."""

    F2F = "f2f"
    HOC = "hoc"
    GAMES_401 = "401games"
