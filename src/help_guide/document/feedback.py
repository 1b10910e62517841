"""Feedback entries: structured contact points declared by a guide document.

The host application owns composing the actual message; these records only
carry what it needs (recipient, handle, labels).
"""

from __future__ import annotations

import dataclasses
import re

from help_guide.constants import FEEDBACK_EMAIL_LABEL, FEEDBACK_TWITTER_LABEL

# "Name <addr>", "\"Name\" <addr>", "<addr>" or a bare address
_EMAIL_RE = re.compile(r'^\s*(("?([^"]*)"?|.*)\s)?<?(.+?@.+?)>?\s*$')

_HANDLE_RE = re.compile(r"[A-Za-z0-9_]{1,20}")

# Whitespace and ASCII/fullwidth at-signs, trimmed from both ends: "handle@" -> "handle"
_HANDLE_TRIM_RE = re.compile(r"^[\s@＠]+|[\s@＠]+$")


@dataclasses.dataclass(frozen=True)
class FeedbackEmail:
    address: str
    name: str | None = None

    @classmethod
    def from_string(cls, value: str) -> FeedbackEmail | None:
        """Parse a free-form recipient string. Returns None without an address."""
        match = _EMAIL_RE.match(value)
        if match is None:
            return None
        address = match.group(4)
        if not address:
            return None
        name = match.group(3) or None
        return cls(address=address, name=name)

    @property
    def label(self) -> str:
        return FEEDBACK_EMAIL_LABEL

    @property
    def detail(self) -> str:
        return self.address

    @property
    def full_string(self) -> str:
        """Recipient string suitable for a mail composer."""
        if self.name is not None:
            return f"{self.name} <{self.address}>"
        return self.address


@dataclasses.dataclass(frozen=True)
class FeedbackTwitter:
    handle: str

    @classmethod
    def from_string(cls, value: str) -> FeedbackTwitter | None:
        handle = _HANDLE_TRIM_RE.sub("", value)
        if not _HANDLE_RE.fullmatch(handle):
            return None
        return cls(handle=handle)

    @property
    def label(self) -> str:
        return FEEDBACK_TWITTER_LABEL

    @property
    def detail(self) -> str:
        return f"@{self.handle}"

    @property
    def url(self) -> str:
        return f"https://twitter.com/{self.handle}"

    @property
    def initial_text(self) -> str:
        """Prefilled text for a new post addressed to the handle."""
        return f"@{self.handle} "


FeedbackEntry = FeedbackEmail | FeedbackTwitter
