"""
Command line entry point.

    python -m pyturnover turnover.csv --trees 500 --seed 1
"""

import argparse

from pyturnover.core.exceptions import PyTurnoverError
from pyturnover.analysis import AnalysisConfig, run_analysis


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='pyturnover',
        description='Cox vs random survival forest study of employee turnover'
    )
    parser.add_argument('data', help='Path to the turnover CSV')
    parser.add_argument('--sep', default=',', help='Field separator')
    parser.add_argument('--encoding', default=None, help='File encoding')
    parser.add_argument('--test-size', type=float, default=0.2)
    parser.add_argument('--seed', type=int, default=42)
    parser.add_argument('--ties', choices=('efron', 'breslow'), default='efron')
    parser.add_argument('--penalizer', type=float, default=0.0)
    parser.add_argument('--trees', type=int, default=300, help='Forest size')
    parser.add_argument('--min-samples-leaf', type=int, default=15)
    parser.add_argument('--jobs', type=int, default=None)
    parser.add_argument(
        '--censoring', choices=('test', 'train'), default='test',
        help='Partition used to estimate the censoring distribution'
    )
    parser.add_argument('--tie-tolerance', type=float, default=0.0)
    parser.add_argument('--profile-field', default='transport')
    parser.add_argument(
        '--levels', nargs='+', default=None,
        help='Levels of --profile-field to predict for'
    )
    args = parser.parse_args(argv)

    try:
        config = AnalysisConfig(
            test_size=args.test_size,
            random_state=args.seed,
            ties=args.ties,
            penalizer=args.penalizer,
            n_estimators=args.trees,
            min_samples_leaf=args.min_samples_leaf,
            n_jobs=args.jobs,
            censoring=args.censoring,
            tie_tolerance=args.tie_tolerance,
            profile_field=args.profile_field,
            profile_levels=tuple(args.levels) if args.levels else None,
        )
        report = run_analysis(args.data, config, sep=args.sep, encoding=args.encoding)
    except PyTurnoverError as e:
        print(f"ERROR: {e}")
        return 1

    print(report.summary())
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
