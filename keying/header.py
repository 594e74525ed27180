from __future__ import annotations

"""
Encoding

Maps code words back to header characters.

Code words are enumerated length first, then by binary value, skipping the
all-ones word of every length. The k-th word of that enumeration stands for
header[k]. There are 2**L - 1 usable words of length L, so the words shorter
than L number 2**L - L - 1 and the rank of a word of length L and value v is
simply v + 2**L - L - 1.
"""

from typing import Iterable

from keying.errors import IndexOutOfRangeError
from keying.segments import TAG_WIDTH, SegmentPartitioner


def words_before(length: int) -> int:
    #Usable code words strictly shorter than length
    return(1 << length)-length-1


def cumulative_total(length: int) -> int:
    #Usable code words of length 1..length
    return words_before(length+1)


def rank(word: str) -> int:
    return int(word, 2)+words_before(len(word))


#
#Header lookup
#

class Encoding:
    """Read-only header table plus the decode entry points."""

    __slots__ =("header", "partitioner")

    def __init__(self, header: str, tag_width: int = TAG_WIDTH):
        self.header = header
        self.partitioner = SegmentPartitioner(tag_width)

    def decode_word(self, word: str) -> str:
        r = rank(word)
        if r >= len(self.header):
            raise IndexOutOfRangeError(
                f"code word {word!r} has rank {r} but the header holds {len(self.header)} characters"
            )
        return self.header[r]

    def decode(self, words: Iterable[str]) -> str:
        return "".join(self.decode_word(w) for w in words)

    def decode_message(self, text: str) -> str:
        """Partition an encoded bitstream and decode every word in order."""
        return self.decode(self.partitioner.partition(text))

    def decode_stream(self, bits: Iterable[str]) -> str:
        #Same as decode_message but pulls bits lazily and stops at the terminal tag
        return self.decode(self.partitioner.iter_words(bits))
