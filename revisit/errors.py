"""
Exceptions raised by the review engine and its persistence layer.
"""

from __future__ import annotations


class InvalidCardStateError(ValueError):
    """A card's persisted memory state is corrupted and cannot be scheduled."""


class CardNotFoundError(LookupError):
    """The card does not exist or does not belong to the requesting user."""

    def __init__(self, card_id: str, user_id: str):
        super().__init__(f"Card {card_id!r} not found for user {user_id!r}")
        self.card_id = card_id
        self.user_id = user_id


class ConcurrentModificationError(RuntimeError):
    """
    Another transaction committed a new state for the card first.

    The caller must reload the card and retry with the fresh state.
    """

    def __init__(self, card_id: str):
        super().__init__(f"Card {card_id!r} was modified by a concurrent review")
        self.card_id = card_id
