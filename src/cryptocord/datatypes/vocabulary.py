"""
Vocabulary for the crypto word-guessing game.

Each entry pairs a guessable term with an emoji glyph shown as a visual clue
and a one-line hint. The list is fixed and never mutated at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class VocabularyEntry:
    """A single guessable term.

    Attributes:
        term (str): The word players have to guess.
        glyph (str): Emoji displayed next to the masked term.
        hint (str): Short description shown when the game starts.
    """

    term: str
    glyph: str
    hint: str


CRYPTO_VOCABULARY: Tuple[VocabularyEntry, ...] = (
    VocabularyEntry("bitcoin", "₿", "The first and most famous cryptocurrency"),
    VocabularyEntry("blockchain", "🔗", "A decentralized digital ledger"),
    VocabularyEntry("wallet", "👝", "Where you store your crypto"),
    VocabularyEntry("mining", "⛏️", "Process of validating transactions and earning rewards"),
    VocabularyEntry("hodl", "💎", "Crypto slang for holding onto your assets"),
    VocabularyEntry("altcoin", "🪙", "Any cryptocurrency that isn't Bitcoin"),
    VocabularyEntry("exchange", "🏦", "Platform for trading cryptocurrencies"),
    VocabularyEntry("staking", "🥩", "Locking up crypto to support network operations"),
    VocabularyEntry("defi", "🏗️", "Decentralized financial services"),
    VocabularyEntry("nft", "🎨", "Digital assets with unique properties"),
)
