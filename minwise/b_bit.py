'''
This module implements b-bit MinHash signatures.
http://research.microsoft.com/pubs/120078/wfc0398-liPS.pdf

A b-bit signature keeps only the b lowest bits of each slot and packs them
into 64-bit words, which cuts storage by a factor of 64 / b at the cost of
accidental matches between unrelated slots.

Fields are packed most significant first: each new field shifts the word
left by b bits. They are unpacked least significant first. Both sides of a
comparison use the same layout, so corresponding fields line up.
'''

import numbers
import struct
import numpy as np

from minwise.signature import SizeMismatchError, check_size

_word_bits = 64


def _check_b(b):
    if isinstance(b, (bool, np.bool_)) or \
            not isinstance(b, (numbers.Integral, np.integer)):
        raise ValueError("b must be an integer in [1, 64]")
    b = int(b)
    if b < 1 or b > _word_bits:
        raise ValueError("b must be an integer in [1, 64]")
    return b


def _mask(b):
    return np.uint64((1 << b) - 1)


def signature_bbit(sig, b):
    '''Compress a signature into packed b-bit fields.

    Each 64-bit word holds ``64 // b`` fields. When a word has fewer than b
    free bits it is emitted and a new one started. The last word holds the
    remaining fields in its low bits, with zero high bits.

    Args:
        sig: The signature, an array-like of unsigned 64-bit integers, or an
            object with a ``signature`` attribute.
        b (int): The number of bits kept per slot, in ``[1, 64]``.

    Returns:
        numpy.ndarray: The packed words as `numpy.uint64`.
    '''
    b = _check_b(b)
    sig = np.asarray(getattr(sig, 'signature', sig), dtype=np.uint64)
    low = np.bitwise_and(sig, _mask(b))
    per_word = _word_bits // b
    num_full = len(low) // per_word
    rest = len(low) - num_full * per_word

    def pack(fields, n):
        shifts = np.arange(n)[::-1].astype(np.uint64) * np.uint64(b)
        return np.bitwise_or.reduce(fields << shifts, axis=-1)

    words = pack(low[:num_full * per_word].reshape(num_full, per_word), per_word)
    if rest:
        words = np.append(words, pack(low[num_full * per_word:], rest))
    return words.astype(np.uint64)


def similarity_bbit(words_a, words_b, b):
    '''Estimate the Jaccard similarity from two b-bit packed signatures.

    Every word is drained in b-bit fields from the least significant end
    while at least b bits remain, so padding fields of a partial last word
    are compared too.

    Args:
        words_a: The packed words of the first signature.
        words_b: The packed words of the second signature.
        b (int): The number of bits per field used when packing.

    Returns:
        float: The fraction of matching fields.

    Raises:
        SizeMismatchError: If the two word arrays have different lengths.
        ValueError: If the word arrays are empty.
    '''
    b = _check_b(b)
    words_a = np.asarray(words_a, dtype=np.uint64)
    words_b = np.asarray(words_b, dtype=np.uint64)
    check_size(words_a, words_b)
    if len(words_a) == 0:
        raise ValueError("Cannot compare empty b-bit signatures")
    mask = _mask(b)
    shifts = np.arange(_word_bits // b, dtype=np.uint64) * np.uint64(b)
    fields_a = (words_a[:, np.newaxis] >> shifts) & mask
    fields_b = (words_b[:, np.newaxis] >> shifts) & mask
    return float(np.count_nonzero(fields_a == fields_b)) / float(fields_a.size)


class bBitSignature(object):
    '''
    The b-bit MinHash signature object.

    Args:
        source: A :class:`minwise.MinHash` or a signature to compress.
        b (int): The number of bits to keep for each slot, in ``[1, 64]``.

    Example:

        .. code-block:: python

            bm1 = bBitSignature(m1, b=8)
            bm2 = bBitSignature(m2, b=8)
            bm1.jaccard(bm2)
    '''

    __slots__ = ('b', 'num_perm', 'words')

    # b as uint8
    # num_perm as int32
    _serial_fmt_params = '<Bi'
    # each word as uint64
    _serial_fmt_block = 'Q'

    def __init__(self, source, b=1):
        self.b = _check_b(b)
        sig = np.asarray(getattr(source, 'signature', source), dtype=np.uint64)
        self.num_perm = len(sig)
        self.words = signature_bbit(sig, self.b)

    def __eq__(self, other):
        '''
        Check for full equality of two b-bit signatures.
        '''
        return type(self) is type(other) and \
            self.b == other.b and \
            self.num_perm == other.num_perm and \
            np.array_equal(self.words, other.words)

    def __len__(self):
        return self.num_perm

    def jaccard(self, other):
        '''
        Estimate the Jaccard similarity (resemblance) between this b-bit
        signature and the other.

        Raises:
            ValueError: If the two signatures use different b values.
            SizeMismatchError: If the two signatures have different lengths.
        '''
        if self.b != other.b:
            raise ValueError("Cannot compare two b-bit signatures with "
                             "different b values")
        if self.num_perm != other.num_perm:
            raise SizeMismatchError(self.num_perm, other.num_perm)
        return similarity_bbit(self.words, other.words, self.b)

    def bytesize(self):
        '''
        Get the serialized size of this b-bit signature in number of bytes.
        '''
        return struct.calcsize(self._serial_fmt_params +
                               "%d%s" % (len(self.words), self._serial_fmt_block))

    def __getstate__(self):
        '''
        This function is called when pickling the b-bit signature.
        Returns a bytearray which will then be pickled.
        '''
        buf = bytearray(self.bytesize())
        fmt = self._serial_fmt_params + \
            "%d%s" % (len(self.words), self._serial_fmt_block)
        struct.pack_into(fmt, buf, 0, self.b, self.num_perm,
                         *(int(w) for w in self.words))
        return buf

    def __setstate__(self, buf):
        '''
        This function is called when unpickling the b-bit signature.
        Initialize the object with data in the buffer.
        '''
        self.b, self.num_perm = struct.unpack_from(self._serial_fmt_params, buf, 0)
        offset = struct.calcsize(self._serial_fmt_params)
        per_word = _word_bits // self.b
        num_words = -(-self.num_perm // per_word)
        fmt = "<%d%s" % (num_words, self._serial_fmt_block)
        self.words = np.array(struct.unpack_from(fmt, buf, offset), dtype=np.uint64)
