"""
Crypto word-guessing game.

Every channel can hold at most one active word. ``!guess`` draws a random
entry from the vocabulary and shows its glyph, the masked term and the hint.
Players then type guesses in the channel; wrong guesses get no response.

State transitions per channel:

- no session  --start-->         active
- active      --start-->         active (the previous word is discarded)
- active      --correct guess--> no session
- active      --give up-->       no session
- active      --hint / wrong-->  active

Every method mutates the table synchronously and returns the text to send,
so callers always finish updating state before awaiting any Discord call.
"""

from __future__ import annotations

import random
import re
from typing import Dict, Optional, Sequence

from cryptocord.datatypes.vocabulary import CRYPTO_VOCABULARY, VocabularyEntry
from cryptocord.util.logger import get_logger

logger = get_logger("word_game")

MASK_PLACEHOLDER = "_ "
_LETTER_PATTERN = re.compile(r"[a-zA-Z]")


def mask_term(term: str) -> str:
    """Replace every letter of ``term`` with the placeholder; keep everything else.

    >>> mask_term("defi")
    '_ _ _ _ '
    """
    return _LETTER_PATTERN.sub(MASK_PLACEHOLDER, term)


def format_game_start(entry: VocabularyEntry) -> str:
    return (
        "🎮 **Crypto Word Guessing Game**\n"
        "Can you guess the crypto-related word?\n\n"
        f"{entry.glyph} {mask_term(entry.term)}\n"
        f"💡 Hint: {entry.hint}\n\n"
        "Type your guess in the chat!"
    )


def format_correct_guess(entry: VocabularyEntry) -> str:
    return f"🎉 Congratulations! You got it right! The word was **{entry.term}**!"


def format_length_hint(entry: VocabularyEntry) -> str:
    return f"💡 Additional hint: The word has {len(entry.term)} letters."


def format_give_up(entry: VocabularyEntry) -> str:
    return f"Game Over! The word was **{entry.term}**"


class GameSessionTable:
    """
    Active guessing games keyed by destination (channel) identifier.

    Args:
        vocabulary: Entries to draw from. Defaults to the crypto vocabulary.
        rng: Random source used by :meth:`start`; inject a seeded
            ``random.Random`` for deterministic tests.
    """

    def __init__(
        self,
        vocabulary: Sequence[VocabularyEntry] = CRYPTO_VOCABULARY,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not vocabulary:
            raise ValueError("Game vocabulary must contain at least one entry")
        self._vocabulary = tuple(vocabulary)
        self._rng = rng or random.Random()
        self._sessions: Dict[str, VocabularyEntry] = {}

    def active_entry(self, destination_id: str) -> Optional[VocabularyEntry]:
        """Return the word being guessed in ``destination_id``, if any."""
        return self._sessions.get(str(destination_id))

    def start(self, destination_id: str) -> str:
        """Start (or restart) a game and return the announcement."""
        entry = self._rng.choice(self._vocabulary)
        key = str(destination_id)
        replaced = self._sessions.get(key)
        self._sessions[key] = entry
        if replaced is not None:
            logger.debug("[WORD GAME] Replaced active game in %s", key)
        logger.debug("[WORD GAME] Started game in %s", key)
        return format_game_start(entry)

    def guess(self, destination_id: str, text: str) -> Optional[str]:
        """Check a guess. Returns the success message, or None when there is
        nothing to say (no game running, or a wrong guess)."""
        key = str(destination_id)
        entry = self._sessions.get(key)
        if entry is None:
            return None
        if text.strip().lower() != entry.term.lower():
            return None
        del self._sessions[key]
        logger.debug("[WORD GAME] Word guessed in %s", key)
        return format_correct_guess(entry)

    def hint(self, destination_id: str) -> Optional[str]:
        """Reveal the length of the active word without touching the session."""
        entry = self._sessions.get(str(destination_id))
        if entry is None:
            return None
        return format_length_hint(entry)

    def give_up(self, destination_id: str) -> Optional[str]:
        """End the active game and reveal the word."""
        entry = self._sessions.pop(str(destination_id), None)
        if entry is None:
            return None
        logger.debug("[WORD GAME] Game abandoned in %s", destination_id)
        return format_give_up(entry)

    def __contains__(self, destination_id: object) -> bool:
        return str(destination_id) in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
