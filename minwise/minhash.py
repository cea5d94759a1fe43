from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from typing import Generator, Iterable, List, Optional
import numpy as np

from minwise import estimators
from minwise.encoding import to_bytes, string_to_bytes, string_int_to_bytes
from minwise.hashfamily import DEFAULT_FAMILY, HashFamily
from minwise.signature import (
    INFINITY,
    as_signature,
    check_size,
    empty_signature,
    is_empty,
)

logger = logging.getLogger(__name__)

# The largest signature we accept, since lengths are serialized as int32.
_max_num_perm = (1 << 31) - 1
# Number of elements pre-hashed and derived together by push_batch.
_batch_rows = 4096


class MinHash(object):
    """MinHash is a probabilistic data structure for estimating
    `Jaccard similarity`_ and cardinality of sets from a stream of
    elements.

    The signature has one slot per member of a parametric hash family
    ``h_i(x) = h1(x) + i * h2(x)``. Each slot keeps the minimum value its
    hash function produced over the elements pushed so far.

    Args:
        num_perm (int): Number of hash functions, i.e. the signature length.
            It will be ignored if `hashvalues` is not None.
        family (HashFamily): The hash family used by this MinHash. It is
            shared, never copied, between sketches. The default is based on
            SHA1 and MD5 from hashlib_.
        hashvalues (Optional[Iterable]): An existing signature to start
            from. It is copied, so later changes to it do not affect this
            MinHash.
        strict (bool): If True, :meth:`push` raises a `TypeError` for
            elements it cannot encode. If False, such elements are encoded
            as eight zero bytes.

    Note:
        A MinHash is not safe for concurrent writers. Reading estimates
        from several threads is fine as long as nothing pushes or merges
        at the same time.

    .. _`Jaccard similarity`: https://en.wikipedia.org/wiki/Jaccard_index
    .. _hashlib: https://docs.python.org/3/library/hashlib.html
    """

    def __init__(
        self,
        num_perm: int = 128,
        family: HashFamily = DEFAULT_FAMILY,
        hashvalues: Optional[Iterable] = None,
        strict: bool = True,
    ) -> None:
        if not isinstance(family, HashFamily):
            raise ValueError("The family must be a HashFamily.")
        self.family = family
        self.strict = strict
        if hashvalues is not None:
            num_perm = len(hashvalues)
        if num_perm > _max_num_perm:
            raise ValueError(
                "Cannot have more than %d hash functions" % _max_num_perm
            )
        if hashvalues is not None:
            self._hashvalues = as_signature(hashvalues)
        else:
            self._hashvalues = empty_signature(num_perm)

    @classmethod
    def from_signature(
        cls, signature: Iterable, family: HashFamily = DEFAULT_FAMILY, **kwargs
    ) -> MinHash:
        """Create a MinHash from an existing signature. The signature is
        copied.

        Args:
            signature (Iterable): The signature, a sequence of unsigned
                64-bit integers.
            family (HashFamily): The hash family the signature was built
                with.

        Returns:
            MinHash: A new MinHash holding a copy of `signature`.
        """
        return cls(family=family, hashvalues=signature, **kwargs)

    @property
    def signature(self) -> np.ndarray:
        """numpy.ndarray: A read-only view of the signature. Use
        :meth:`digest` for a copy that can be modified."""
        view = self._hashvalues.view()
        view.flags.writeable = False
        return view

    hashvalues = signature

    def push(self, x) -> None:
        """Push an element into this MinHash.

        The element is first encoded to bytes: bytes pass through, integers
        become 8 little-endian bytes, and strings take the integer path when
        they are a non-negative integer literal.

        Args:
            x: The element.

        Example:

            .. code-block:: python

                m = MinHash(num_perm=256)
                m.push(b"raw bytes")
                m.push(42)
                m.push("42")  # same as m.push(42)
        """
        self.push_bytes(to_bytes(x, strict=self.strict))

    def push_bytes(self, b: bytes) -> None:
        """Push an already encoded element.

        Candidate values equal to 0 are discarded, so 0 never appears in a
        signature built by pushing.

        Args:
            b (bytes): The encoded element.
        """
        v1, v2 = self.family.prehash(b)
        hv = self.family.derive(v1, v2, 0, len(self))
        hv[hv == 0] = INFINITY
        np.minimum(hv, self._hashvalues, out=self._hashvalues)

    def push_string(self, s: str) -> None:
        """Push a string as its UTF-8 bytes, without integer parsing."""
        self.push_bytes(string_to_bytes(s))

    def push_string_int(self, s: str) -> None:
        """Push a string through the integer path when it is a non-negative
        integer literal, and as UTF-8 bytes otherwise."""
        self.push_bytes(string_int_to_bytes(s))

    def push_strings(self, *ss: str) -> None:
        for s in ss:
            self.push_string(s)

    def push_batch(self, b: Iterable, workers: Optional[int] = None) -> None:
        """Push many elements. The result is the same as pushing them one at
        a time.

        Elements are consumed in chunks, so a long generator is streamed
        rather than held in memory.

        Args:
            b (Iterable): The elements.
            workers (Optional[int]): If greater than 1, the slots are split
                into that many disjoint ranges and each range is updated by
                its own thread. Both base hash values of every element in a
                chunk are computed once, before the threads start.

        Example:

            .. code-block:: python

                m = MinHash(num_perm=1024)
                m.push_batch(range(100000), workers=4)
        """
        k = len(self)
        if workers is None or workers <= 1 or k < 2:
            for v1, v2 in self._prehash_chunks(b):
                self._push_range(v1, v2, 0, k)
            return
        workers = min(workers, k)
        bounds = np.linspace(0, k, workers + 1).astype(int)
        ranges = list(zip(bounds[:-1], bounds[1:]))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            for v1, v2 in self._prehash_chunks(b):
                logger.debug("Pushing %d elements into %d slots with %d workers",
                             len(v1), k, workers)
                futures = [
                    executor.submit(self._push_range, v1, v2, start, stop)
                    for start, stop in ranges
                ]
                for future in futures:
                    future.result()

    def _prehash_chunks(self, b):
        it = iter(b)
        while True:
            pre = [self.family.prehash(to_bytes(x, strict=self.strict))
                   for x in islice(it, _batch_rows)]
            if not pre:
                return
            yield (np.array([p[0] for p in pre], dtype=np.uint64),
                   np.array([p[1] for p in pre], dtype=np.uint64))

    def _push_range(self, v1, v2, start, stop):
        # Writes only to the slots start to stop - 1.
        if start >= stop:
            return
        out = self._hashvalues[start:stop]
        hv = self.family.derive(v1, v2, start, stop)
        hv[hv == 0] = INFINITY
        np.minimum(hv.min(axis=0), out, out=out)

    def merge(self, other: MinHash) -> None:
        """Merge the other MinHash with this one, making this one the union
        of both.

        Args:
            other (MinHash): The other MinHash.

        Raises:
            SizeMismatchError: If the two MinHashes have different numbers
                of hash functions.
        """
        check_size(self._hashvalues, other.hashvalues)
        np.minimum(other.hashvalues, self._hashvalues, out=self._hashvalues)

    def similarity(self, other: MinHash) -> float:
        """Estimate the `Jaccard similarity`_ (resemblance) between the sets
        represented by this MinHash and the other.

        Args:
            other (MinHash): The other MinHash.

        Returns:
            float: The Jaccard similarity, which is between 0.0 and 1.0.

        Raises:
            SizeMismatchError: If the two MinHashes have different numbers
                of hash functions.
        """
        return estimators.similarity(self, other)

    jaccard = similarity

    def cardinality(self) -> int:
        """Estimate the cardinality of the set represented by this MinHash.

        Returns:
            int: The estimate. It is 0 for the empty and all-zero signatures.
        """
        return estimators.cardinality(self)

    count = cardinality

    def union_cardinality(self, other: MinHash) -> int:
        """Estimate the cardinality of the union with the other set."""
        return estimators.union_cardinality(self, other)

    def intersection_cardinality(self, other: MinHash) -> int:
        """Estimate the cardinality of the intersection with the other set."""
        return estimators.intersection_cardinality(self, other)

    def symmetric_difference_cardinality(self, other: MinHash) -> int:
        """Estimate the cardinality of the symmetric difference with the
        other set."""
        return estimators.symmetric_difference_cardinality(self, other)

    def less_cardinality(self, other: MinHash) -> int:
        """Estimate the number of elements in this set but not the other."""
        return estimators.less_cardinality(self, other)

    def digest(self) -> np.ndarray:
        """Export the hash values, which is the internal state of the
        MinHash.

        Returns:
            numpy.ndarray: A copy of the signature.
        """
        return self._hashvalues.copy()

    def is_empty(self) -> bool:
        """
        Returns:
            bool: If every slot is still untouched. Note that a non-empty
                set can give the empty signature if its elements only ever
                hash to 0.
        """
        return is_empty(self._hashvalues)

    def clear(self) -> None:
        """
        Clear the current state of the MinHash.
        All hash values are reset.
        """
        self._hashvalues = empty_signature(len(self))

    def copy(self) -> MinHash:
        """
        Returns:
            MinHash: a copy of this MinHash sharing the same hash family.
        """
        return type(self)(
            family=self.family,
            hashvalues=self._hashvalues,
            strict=self.strict,
        )

    def __len__(self) -> int:
        """
        Returns:
            int: The number of hash values.
        """
        return len(self._hashvalues)

    def __eq__(self, other: MinHash) -> bool:
        """
        Returns:
            bool: If their hash families and hash values are both equal
                then two are equivalent.
        """
        return (
            type(self) is type(other)
            and self.family == other.family
            and np.array_equal(self._hashvalues, other.hashvalues)
        )

    def __repr__(self) -> str:
        return "%s(num_perm=%d, family=%r)" % (
            type(self).__name__, len(self), self.family)

    @classmethod
    def union(cls, *mhs: MinHash) -> MinHash:
        """Create a MinHash which is the union of the MinHash objects passed
        as arguments.

        Args:
            *mhs (MinHash): The MinHash objects to be united. The argument
                list length is variable, but must be at least 2.

        Returns:
            MinHash: a new union MinHash.

        Raises:
            ValueError: If fewer than 2 MinHash objects are given.
            SizeMismatchError: If the MinHash objects have different
                numbers of hash functions.

        Example:

            .. code-block:: python

                m1 = MinHash(num_perm=128)
                m1.push_batch([b"a", b"b"])
                m2 = MinHash(num_perm=128)
                m2.push_batch([b"b", b"c"])
                m = MinHash.union(m1, m2)
        """
        if len(mhs) < 2:
            raise ValueError("Cannot union less than 2 MinHash")
        for m in mhs[1:]:
            check_size(mhs[0].hashvalues, m.hashvalues)
        hashvalues = np.minimum.reduce([m.hashvalues for m in mhs])
        return cls(family=mhs[0].family, hashvalues=hashvalues,
                   strict=mhs[0].strict)

    @classmethod
    def bulk(cls, b: Iterable, **minhash_kwargs) -> List[MinHash]:
        """Compute MinHashes in bulk. This method avoids unnecessary
        overhead when initializing many minhashes by reusing the initialized
        state.

        Args:
            b (Iterable): An Iterable of iterables of elements, each inner
                iterable is pushed into one MinHash in the output.
            **minhash_kwargs: Keyword arguments used to initialize MinHash,
                will be used for all minhashes.

        Returns:
            List[MinHash]: A list of computed MinHashes.

        Example:

            .. code-block:: python

                data = [[b'token1', b'token2', b'token3'],
                        [b'token4', b'token5', b'token6']]
                minhashes = MinHash.bulk(data, num_perm=64)
        """
        return list(cls.generator(b, **minhash_kwargs))

    @classmethod
    def generator(cls, b: Iterable, **minhash_kwargs) -> Generator[MinHash, None, None]:
        """Compute MinHashes in a generator, one per inner iterable of `b`.

        Args:
            b (Iterable): An Iterable of iterables of elements.
            minhash_kwargs: Keyword arguments used to initialize MinHash,
                will be used for all minhashes.

        Returns:
            Generator[MinHash, None, None]: a generator of computed MinHashes.
        """
        m = cls(**minhash_kwargs)
        for _b in b:
            _m = m.copy()
            _m.push_batch(_b)
            yield _m
