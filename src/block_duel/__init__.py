"""Block Duel: two-player falling-block engine with garbage attacks."""

__version__ = "0.1.0"
