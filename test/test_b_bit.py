import pickle
import unittest
import numpy as np
from minwise.b_bit import bBitSignature, signature_bbit, similarity_bbit
from minwise.minhash import MinHash
from minwise.signature import SizeMismatchError


class TestSignatureBbit(unittest.TestCase):

    def test_pack_partial_word(self):
        words = signature_bbit([1, 2, 3], 8)
        self.assertEqual(words.dtype, np.uint64)
        self.assertListEqual(words.tolist(), [0x010203])

    def test_pack_full_words(self):
        words = signature_bbit(list(range(1, 10)), 8)
        self.assertListEqual(words.tolist(), [0x0102030405060708, 0x09])
        words = signature_bbit(list(range(1, 9)), 8)
        self.assertListEqual(words.tolist(), [0x0102030405060708])

    def test_pack_low_bits(self):
        words = signature_bbit([0xff01, 0xabcd02], 8)
        self.assertListEqual(words.tolist(), [0x0102])
        words = signature_bbit([1, 0, 1, 1], 1)
        self.assertListEqual(words.tolist(), [0b1011])

    def test_pack_64(self):
        sig = [(1 << 64) - 1, 5, 7]
        self.assertListEqual(signature_bbit(sig, 64).tolist(), sig)

    def test_word_count(self):
        for k in [1, 5, 63, 64, 65, 128, 200]:
            sig = np.arange(1, k + 1, dtype=np.uint64)
            for b in [1, 2, 3, 4, 7, 8, 16, 27, 32, 64]:
                per_word = 64 // b
                expected = -(-k // per_word)
                self.assertEqual(len(signature_bbit(sig, b)), expected)

    def test_invalid_b(self):
        self.assertRaises(ValueError, signature_bbit, [1, 2], 0)
        self.assertRaises(ValueError, signature_bbit, [1, 2], 65)
        self.assertRaises(ValueError, signature_bbit, [1, 2], 8.5)
        self.assertRaises(ValueError, signature_bbit, [1, 2], True)
        self.assertEqual(len(signature_bbit([1, 2], np.int32(8))), 1)

    def test_minhash_accepted(self):
        m = MinHash(16)
        m.push_batch(range(10))
        self.assertTrue(np.array_equal(signature_bbit(m, 4),
                                       signature_bbit(m.digest(), 4)))


class TestSimilarityBbit(unittest.TestCase):

    def test_self_similarity(self):
        m = MinHash(128)
        m.push_batch(range(1000))
        for b in [1, 2, 4, 8, 16, 32, 64]:
            words = signature_bbit(m, b)
            self.assertEqual(similarity_bbit(words, words, b), 1.0)

    def test_drain_lsb_first(self):
        # 3 fields plus 5 zero padding fields per word; only the last differs.
        self.assertEqual(similarity_bbit([0x010203], [0x010204], 8), 7 / 8)
        self.assertEqual(similarity_bbit([0x010203], [0x090203], 8), 7 / 8)

    def test_matches_full_similarity(self):
        a = MinHash(256)
        b = MinHash(256)
        a.push_batch(range(0, 2000))
        b.push_batch(range(1000, 3000))
        exact = a.similarity(b)
        est = similarity_bbit(signature_bbit(a, 16), signature_bbit(b, 16), 16)
        self.assertAlmostEqual(est, exact, delta=0.05)
        # Fewer bits only add accidental matches.
        est1 = similarity_bbit(signature_bbit(a, 1), signature_bbit(b, 1), 1)
        self.assertGreater(est1, exact)

    def test_size_mismatch(self):
        self.assertRaises(SizeMismatchError, similarity_bbit, [1, 2], [1], 8)
        a = signature_bbit(list(range(1, 10)), 8)
        b = signature_bbit(list(range(1, 9)), 8)
        self.assertRaises(SizeMismatchError, similarity_bbit, a, b, 8)

    def test_empty(self):
        self.assertRaises(ValueError, similarity_bbit, [], [], 8)


class TestbBitSignature(unittest.TestCase):

    def setUp(self):
        self.m = MinHash()
        self.m.push_batch([11, 123, 92, 98, 123218, 32])

    def test_init(self):
        for b in [1, 2, 3, 4, 5, 8, 12, 16, 27, 32, 64]:
            bm = bBitSignature(self.m, b)
            self.assertEqual(len(bm), len(self.m))
            self.assertEqual(bm.b, b)
        self.assertRaises(ValueError, bBitSignature, self.m, 0)

    def test_eq(self):
        m1 = MinHash(4)
        m2 = MinHash(4)
        m3 = MinHash(8)
        m4 = MinHash(4)
        m1.push(11)
        m2.push(12)
        m3.push(11)
        m4.push(11)
        self.assertNotEqual(bBitSignature(m1, 8), bBitSignature(m2, 8))
        self.assertNotEqual(bBitSignature(m1, 8), bBitSignature(m3, 8))
        self.assertNotEqual(bBitSignature(m1, 8), bBitSignature(m1, 4))
        self.assertEqual(bBitSignature(m1, 8), bBitSignature(m4, 8))

    def test_jaccard(self):
        m1 = MinHash(64)
        m2 = MinHash(64)
        bm1 = bBitSignature(m1, 8)
        bm2 = bBitSignature(m2, 8)
        self.assertTrue(bm1.jaccard(bm2) == 1.0)

        m2.push(12)
        bm2 = bBitSignature(m2, 8)
        self.assertTrue(bm1.jaccard(bm2) < 1.0)

        self.assertRaises(ValueError, bm1.jaccard, bBitSignature(m2, 4))

    def test_jaccard_size_mismatch(self):
        m1 = MinHash(63)
        m2 = MinHash(64)
        m1.push_batch(range(100))
        m2.push_batch(range(100))
        bm1 = bBitSignature(m1, 1)
        bm2 = bBitSignature(m2, 1)
        # Both pack into a single word.
        self.assertEqual(len(bm1.words), len(bm2.words))
        self.assertRaises(SizeMismatchError, bm1.jaccard, bm2)
        self.assertRaises(SizeMismatchError, bm2.jaccard, bm1)

    def test_bytesize(self):
        s = bBitSignature(self.m, 1).bytesize()
        self.assertEqual(s, 1 + 4 + 8 * 2)
        s = bBitSignature(self.m, 64).bytesize()
        self.assertEqual(s, 1 + 4 + 8 * 128)

    def test_pickle(self):
        for num_perm in [1 << i for i in range(4, 10)]:
            m = MinHash(num_perm=num_perm)
            m.push_batch([11, 123, 92, 98, 123218, 32])
            for b in [1, 2, 3, 9, 27, 32, 64]:
                bm = bBitSignature(m, b)
                bm2 = pickle.loads(pickle.dumps(bm))
                self.assertEqual(bm, bm2)


if __name__ == "__main__":
    unittest.main()
