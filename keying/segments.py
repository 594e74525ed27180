from __future__ import annotations

"""
SegmentPartitioner

Splits an encoded bitstream into the code words it carries.

The stream is a run of segments. Each one opens with a fixed-width start tag
holding the word length W, then carries code words of exactly W bits, then
closes with W one-bits. A start tag of zero ends the stream. Because no code
word is ever all ones, the first chunk-aligned run of W ones is the terminator
and a single forward pass is enough.
"""

from typing import Iterable, Iterator, List

from keying.errors import MalformedSegmentError

TAG_WIDTH = 3


def max_word_length(tag_width: int = TAG_WIDTH) -> int:
    return(1 << tag_width)-1


#
#Partitioner
#

class SegmentPartitioner:
    """Turns an encoded bitstream into an ordered list of code words."""

    __slots__ =("tag_width", "_terminators")

    def __init__(self, tag_width: int = TAG_WIDTH):
        if tag_width < 1:
            raise ValueError(f"tag width must be positive, got {tag_width}")
        self.tag_width = tag_width
        #Terminator per word length, index 0 unused
        self._terminators: List[str] = ["1"*w for w in range(max_word_length(tag_width)+1)]

    def partition(self, text: str) -> List[str]:
        #Anything after the terminal segment is never read
        return list(self.iter_words(iter(text)))

    def iter_words(self, bits: Iterable[str]) -> Iterator[str]:
        """Yield code words pulled lazily from an iterator of '0'/'1' chars.

        Stops right after the empty terminal segment, leaving whatever
        follows it in ``bits`` untouched.
        """
        it = iter(bits)
        while True:
            width = int(self._take(it, self.tag_width, "start tag"), 2)
            if width == 0:
                return
            terminator = self._terminators[width]
            while True:
                chunk = self._take(it, width, f"segment of {width}-bit words")
                if chunk == terminator:
                    break
                yield chunk

    @staticmethod
    def _take(it: Iterator[str], n: int, where: str) -> str:
        chars = []
        for _ in range(n):
            c = next(it, None)
            if c is None:
                raise MalformedSegmentError(f"bitstream ended inside {where}")
            if c != "0" and c != "1":
                raise MalformedSegmentError(f"unexpected character {c!r} in {where}")
            chars.append(c)
        return "".join(chars)


def join_segments(words: Iterable[str], tag_width: int = TAG_WIDTH) -> str:
    """Rebuild a tagged stream, one segment per run of equal-length words."""
    limit = max_word_length(tag_width)
    out: List[str] = []
    prev_len = 0
    for word in words:
        ln = len(word)
        if not 1 <= ln <= limit:
            raise ValueError(f"code word {word!r} does not fit a {tag_width}-bit start tag")
        if word == "1"*ln:
            raise ValueError(f"code word {word!r} collides with the segment terminator")
        if ln != prev_len:
            if prev_len:
                out.append("1"*prev_len)
            out.append(f"{ln:0{tag_width}b}")
            prev_len = ln
        out.append(word)
    if prev_len:
        out.append("1"*prev_len)
    out.append("0"*tag_width)
    return "".join(out)
