import argparse
import os
import timeit
import warnings

import numpy as np

from pgmath import erfc, incomplete_gamma_q, lgamma, sample_truncated_gamma
from pgmath.utils import accuracy_dataframe, load_config, sampling_summary


def main(args):
    config = load_config(args.config)

    # step 1 accuracy of the kernels against scipy.special
    with warnings.catch_warnings():
        if args.quiet:
            warnings.simplefilter("ignore")
        report = accuracy_dataframe(config)
    print(report.to_string())

    # step 2 truncated gamma sampler against the analytic mean
    summary = sampling_summary(config)
    print(summary.to_string())

    # step 3 per call cost. The special functions compile on import and the
    # sampler was compiled for np.random.Generator in step 2.
    rng = np.random.default_rng(config.sampling.seed)
    n = args.number
    timings = {
        "erfc": timeit.timeit(lambda: erfc(1.3), number=n),
        "lgamma": timeit.timeit(lambda: lgamma(7.25), number=n),
        "incomplete_gamma_q": timeit.timeit(
            lambda: incomplete_gamma_q(7.25, 5.5, True), number=n
        ),
        "sample_truncated_gamma": timeit.timeit(
            lambda: sample_truncated_gamma(rng, 2.0, 1.0, 3.0), number=n
        ),
    }
    for name, seconds in timings.items():
        print("{:<24} {:8.3f} us/call".format(name, seconds / n * 1e6))


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Accuracy and timing report for pgmath")
    parser.add_argument(
        "--config",
        default=os.path.join(os.path.dirname(__file__), "config", "default.yaml"),
        help="YAML configuration file",
    )
    parser.add_argument("--number", type=int, default=100000, help="calls per timing")
    parser.add_argument("--quiet", action="store_true", help="silence tolerance warnings")
    main(parser.parse_args())
