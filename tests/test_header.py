from itertools import product

import pytest

from keying.errors import IndexOutOfRangeError
from keying.header import Encoding, cumulative_total, rank

TAN_ME = "0010101100011" "1010001001110110011" "11000"
SAMPLE = "010000010110110001110010100000"


def test_rank_values():
    assert rank("0") == 0
    assert rank("00") == 1
    assert rank("10") == 3
    assert rank("000") == 4
    assert rank("110") == 10
    assert rank("0000") == 11
    assert rank("1111110") == 246


def test_ranks_are_dense():
    ranks = []
    for ln in range(1, 8):
        for bits in product("01", repeat=ln):
            word = "".join(bits)
            if word != "1"*ln:
                ranks.append(rank(word))
    assert sorted(ranks) == list(range(cumulative_total(7)))
    assert cumulative_total(7) == 247


def test_decode_sample():
    assert Encoding("AB#TANCnrtXc").decode_message(SAMPLE) == "BBTAA"
    assert Encoding("$#**\\").decode_message(SAMPLE) == "##*\\$"


def test_decode_words():
    enc = Encoding("AB#TANCnrtXc")
    assert enc.decode_word("000") == "A"
    assert enc.decode_word("110") == "X"
    assert enc.decode(["0", "01", "000"]) == "A#A"
    assert enc.decode([]) == ""


def test_decode_message_spanning_lines():
    enc = Encoding("TNM AEIOU")
    assert enc.decode_message(TAN_ME) == "TAN ME"
    assert enc.decode_stream(iter(TAN_ME)) == "TAN ME"


def test_single_character_header():
    assert Encoding("Z").decode_message("001" + "0" + "1" + "000") == "Z"
    assert Encoding("Z").decode_message("000") == ""


def test_decode_is_deterministic():
    enc = Encoding("TNM AEIOU")
    assert {enc.decode_message(TAN_ME) for _ in range(5)} == {"TAN ME"}


def test_rank_past_header():
    with pytest.raises(IndexOutOfRangeError, match="rank 1"):
        Encoding("Z").decode_message("010" + "00" + "11" + "000")
    with pytest.raises(IndexError):
        Encoding("").decode_word("0")
