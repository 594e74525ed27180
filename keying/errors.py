"""Exceptions raised while decoding a keyed message."""


class DecodeError(ValueError):
    """Base class for every failure of the decoding engine."""


class MalformedSegmentError(DecodeError):
    #Start tag, content or terminator does not follow the segment layout
    pass


class IndexOutOfRangeError(DecodeError, IndexError):
    #Code word ranks past the end of the header
    pass
