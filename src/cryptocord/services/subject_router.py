"""Point members to the dedicated channel of a school subject they mention."""

from __future__ import annotations

from typing import Dict, List, Mapping, Tuple

DEFAULT_SUBJECT_CHANNELS: Dict[str, str] = {
    "history": "📚-history",
    "maths": "🔢-mathematics",
    "english": "📝-english",
    "malay": "🇲🇾-bahasa-melayu",
    "biology": "🧬-biology",
    "chemistry": "🧪-chemistry",
}


class SubjectRouter:
    """Case-insensitive substring matcher over a small subject vocabulary."""

    def __init__(self, subject_channels: Mapping[str, str] = DEFAULT_SUBJECT_CHANNELS) -> None:
        self.subject_channels = {subject.lower(): channel for subject, channel in subject_channels.items()}

    def match_subjects(self, text: str) -> List[Tuple[str, str]]:
        """Return ``(subject, channel)`` for every subject mentioned in ``text``."""
        lowered = text.lower()
        return [(subject, channel) for subject, channel in self.subject_channels.items() if subject in lowered]

    def redirects_for(self, text: str) -> List[str]:
        return [format_redirect(subject, channel) for subject, channel in self.match_subjects(text)]


def format_redirect(subject: str, channel: str) -> str:
    return f"Please head to the {channel} channel for {subject}-related discussions!"
