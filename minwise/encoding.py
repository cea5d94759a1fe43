'''
Canonical byte encoding of the elements pushed into a MinHash.

The encodable values are a closed set:

* byte sequences (`bytes`, `bytearray`, `memoryview`) pass through as is;
* integers, Python or numpy, are written as 8 little-endian bytes of their
  value modulo 2**64;
* strings that are entirely a non-negative integer literal take the
  integer path, every other string is encoded as UTF-8.
'''

import logging
import re
import struct
import numbers

import numpy as np

logger = logging.getLogger(__name__)

_zero_bytes = bytes(8)
_mask64 = (1 << 64) - 1
_min_int64 = -(1 << 63)
# Decimal, prefixed hex/octal/binary, and leading-zero octal.
_int_literal = re.compile(
    r'0[xX](?:_?[0-9a-fA-F])+'
    r'|0[oO](?:_?[0-7])+'
    r'|0[bB](?:_?[01])+'
    r'|0[0-7]+'
    r'|[1-9](?:_?[0-9])*'
    r'|0')


def _is_integer(x):
    if isinstance(x, (bool, np.bool_)):
        return False
    return isinstance(x, (numbers.Integral, np.integer))


def int_to_bytes(n):
    '''Encode an integer as 8 little-endian bytes.

    Negative integers use their two's complement representation, so the
    same 64-bit pattern always produces the same bytes regardless of the
    signedness or width it came from.

    Raises:
        OverflowError: If `n` does not fit in 64 bits.
    '''
    n = int(n)
    if n < _min_int64 or n > _mask64:
        raise OverflowError("Integer %d does not fit in 64 bits" % n)
    return struct.pack('<Q', n & _mask64)


def parse_int_literal(s):
    '''Parse a non-negative integer literal.

    Returns:
        Optional[int]: The value, or None if `s` is not entirely an integer
        literal or does not fit in 64 bits.
    '''
    if _int_literal.fullmatch(s) is None:
        return None
    if len(s) > 1 and s[0] == '0' and s[1].isdigit():
        n = int(s, 8)
    else:
        n = int(s, 0)
    if n > _mask64:
        return None
    return n


def string_to_bytes(s):
    '''Encode a string as its UTF-8 bytes, without integer parsing.'''
    return s.encode('utf-8')


def string_int_to_bytes(s):
    '''Encode a string through the integer path if it is a non-negative
    integer literal, and as UTF-8 bytes otherwise.'''
    n = parse_int_literal(s)
    if n is None:
        return string_to_bytes(s)
    return int_to_bytes(n)


def to_bytes(x, strict=True):
    '''Convert an element to the canonical bytes that get hashed.

    Args:
        x: The element. See the module documentation for the supported
            types.
        strict (bool): If True, unsupported types raise a `TypeError`.
            Otherwise they are encoded as eight zero bytes and a warning is
            logged. Every unsupported value then collides on the same
            bytes, so non-strict mode should be used only to reproduce
            signatures built that way.

    Returns:
        bytes: The encoded element.

    Raises:
        TypeError: If `x` is not encodable and `strict` is True.
        OverflowError: If `x` is an integer that does not fit in 64 bits.
    '''
    if isinstance(x, bytes):
        return x
    if isinstance(x, (bytearray, memoryview)):
        return bytes(x)
    if isinstance(x, str):
        return string_int_to_bytes(x)
    if _is_integer(x):
        return int_to_bytes(x)
    if strict:
        raise TypeError("Cannot encode element of type %s" % type(x).__name__)
    logger.warning("Encoding unsupported element of type %s as zero bytes",
                   type(x).__name__)
    return _zero_bytes
