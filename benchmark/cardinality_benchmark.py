import time, logging, argparse
import numpy as np
from minwise import HashFamily, MinHash
from minwise.hashfunc import sha1_hash64, md5_hash64, blake2b_hash64

logging.basicConfig(level=logging.INFO)

# Produce some bytes
int_bytes = lambda x : ("a-%d-%d" % (x, x)).encode('utf-8')

_families = [
    HashFamily(sha1_hash64, md5_hash64),
    HashFamily(md5_hash64, blake2b_hash64),
    HashFamily(blake2b_hash64, sha1_hash64),
]

def _gen_data(size, offset):
    return [int_bytes(offset + i) for i in range(size)]

def _run_minhash(data, family, num_perm, workers):
    m = MinHash(num_perm=num_perm, family=family)
    m.push_batch(data, workers=workers)
    return m.cardinality()

def _run_test(exact_card, n, num_perm, workers):
    logging.info("Running MinHash with num_perm = %d" % num_perm)
    start = time.perf_counter()
    runs = [_run_minhash(_gen_data(exact_card, i * exact_card),
                         _families[i % len(_families)], num_perm, workers)
            for i in range(n)]
    logging.info("Finished %d runs in %.2f seconds"
                 % (n, time.perf_counter() - start))
    return runs

def run_full_tests(exact_card, n, num_perm_list, workers):
    logging.info("Run tests with n = %d" % (n))
    return [_run_test(exact_card, n, num_perm, workers)
            for num_perm in num_perm_list]

def plot_hist(ax, est_cards, title, exact_card):
    errors = [float(exact_card - c)/float(exact_card) for c in est_cards]
    errors.sort()
    ax.plot(errors, 'g.', markersize=12)
    ax.set_title(title)

def plot(result, num_perm_list, exact_card, save):
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt
    basesize = 5
    size = (basesize*len(result), basesize)
    fig, axes = plt.subplots(1, len(result), sharex=True, sharey=True,
            figsize=size, squeeze=False)
    for i, runs in enumerate(result):
        title = "MinHash Error Rate num_perm = %d" % num_perm_list[i]
        plot_hist(axes[0][i], runs, title, exact_card)
    fig.suptitle("Exact cardinality = %d" % exact_card)
    fig.savefig(save)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Cardinality estimation error of MinHash")
    parser.add_argument("--card", type=int, default=5000)
    parser.add_argument("--runs", type=int, default=30)
    parser.add_argument("--num-perm", type=int, nargs="+",
                        default=[64, 256, 1024])
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--save", default="cardinality_benchmark.png")
    args = parser.parse_args()
    result = run_full_tests(args.card, args.runs, args.num_perm, args.workers)
    for num_perm, runs in zip(args.num_perm, result):
        errors = np.abs(np.array(runs) - args.card) / float(args.card)
        logging.info("num_perm = %d: mean relative error %.4f"
                     % (num_perm, errors.mean()))
    plot(result, args.num_perm, args.card, args.save)
