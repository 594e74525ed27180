from __future__ import annotations

"""
MessageEncoder

Inverse of the decoding engine, mostly useful to produce test streams and to
check decoded output. Each character is written as the canonical code word of
its first position in the header, and runs of equal-length words share one
segment.
"""

from typing import Dict, List

from keying.header import cumulative_total, words_before
from keying.segments import TAG_WIDTH, join_segments, max_word_length


def word_for_rank(r: int, tag_width: int = TAG_WIDTH) -> str:
    """Return the code word whose rank is r."""
    limit = max_word_length(tag_width)
    if not 0 <= r < cumulative_total(limit):
        raise ValueError(f"rank {r} has no code word of at most {limit} bits")
    ln = 1
    while cumulative_total(ln) <= r:
        ln += 1
    return f"{r-words_before(ln):0{ln}b}"


class MessageEncoder:
    """Encodes plaintext against a header."""

    __slots__ =("header", "tag_width", "_codes")

    def __init__(self, header: str, tag_width: int = TAG_WIDTH):
        self.header = header
        self.tag_width = tag_width
        reachable = min(len(header), cumulative_total(max_word_length(tag_width)))
        #Duplicate header characters keep their first (shortest) word
        self._codes: Dict[str, str] ={}
        for i in range(reachable):
            self._codes.setdefault(header[i], word_for_rank(i, tag_width))

    def code_words(self, text: str) -> List[str]:
        try:
            return [self._codes[c] for c in text]
        except KeyError as exc:
            raise ValueError(f"character {exc.args[0]!r} has no code word in this header") from None

    def encode(self, text: str) -> str:
        return join_segments(self.code_words(text), self.tag_width)
