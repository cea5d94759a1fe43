'''
Some examples for MinHash
'''

from minwise import MinHash, bBitSignature

data1 = ['minhash', 'is', 'a', 'probabilistic', 'data', 'structure', 'for',
        'estimating', 'the', 'similarity', 'between', 'datasets']
data2 = ['minhash', 'is', 'a', 'probability', 'data', 'structure', 'for',
        'estimating', 'the', 'similarity', 'between', 'documents']

def eg1():
    m1 = MinHash()
    m2 = MinHash()
    for d in data1:
        m1.push_string(d)
    for d in data2:
        m2.push_string(d)
    print("Estimated Jaccard for data1 and data2 is", m1.similarity(m2))

    s1 = set(data1)
    s2 = set(data2)
    actual_jaccard = float(len(s1.intersection(s2))) /\
            float(len(s1.union(s2)))
    print("Actual Jaccard for data1 and data2 is", actual_jaccard)

def eg2():
    evens = MinHash(num_perm=400)
    odds = MinHash(num_perm=400)
    evens.push_batch(range(0, 10001, 2))
    odds.push_batch(range(1, 10001, 2))
    print("Estimated cardinality of evens is", evens.cardinality())
    print("Estimated cardinality of evens | odds is",
          evens.union_cardinality(odds))
    print("Estimated cardinality of evens & odds is",
          evens.intersection_cardinality(odds))

def eg3():
    m1 = MinHash(num_perm=512)
    m2 = MinHash(num_perm=512)
    m1.push_batch(range(0, 2000))
    m2.push_batch(range(1000, 3000))
    for b in [1, 4, 8, 16]:
        bm1 = bBitSignature(m1, b)
        bm2 = bBitSignature(m2, b)
        print("b = %d: estimated Jaccard is %.4f in %d bytes"
              % (b, bm1.jaccard(bm2), bm1.bytesize()))
    print("Full signature estimated Jaccard is %.4f" % m1.similarity(m2))

if __name__ == "__main__":
    eg1()
    eg2()
    eg3()
