"""Command-line feasibility report for rate-monotonic task systems.

    $ rmfeas 2:1 10:1 15:2
    $ rmfeas --tasks system.json
    $ rmfeas --examples

Each task is given as PERIOD:WCET, highest priority first. The exit status is
0 whatever the verdicts, and 2 when the input is malformed.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence, Tuple

from rmfeas.report import analyze, render
from rmfeas.system.load import load_examples, load_systems
from rmfeas.system.task import InvalidTaskSet, Task, rate_monotonic_order

logger = logging.getLogger(__name__)

SEPARATOR = '*' * 72


def parse_pair(text: str) -> Task:
    """Parse a PERIOD:WCET pair.

    >>> parse_pair('15:2')
    Task(2, 15)
    """
    period, sep, wcet = text.partition(':')
    if not sep or not period.strip() or not wcet.strip():
        raise InvalidTaskSet(f'expected PERIOD:WCET, got {text!r}')
    return Task(wcet=wcet, period=period)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='rmfeas',
        description='Decide rate-monotonic feasibility of a periodic task '
        'system on one processor (deadline equal to period).')
    parser.add_argument(
        'pairs', nargs='*', metavar='PERIOD:WCET',
        help='tasks in priority order, highest first')
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        '--tasks', metavar='FILE',
        help='JSON file with one task system or a list of systems')
    source.add_argument(
        '--examples', action='store_true',
        help='analyze the example systems shipped with the package')
    parser.add_argument(
        '--sort', action='store_true',
        help='reorder tasks by period instead of rejecting unsorted input')
    parser.add_argument(
        '--log-level', default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='logging level (default: WARNING)')
    return parser.parse_args(argv)


def read_systems(args: argparse.Namespace) -> List[Tuple[Optional[str], List[Task]]]:
    if args.pairs and (args.tasks or args.examples):
        raise InvalidTaskSet(
            'give tasks either as PERIOD:WCET pairs or with --tasks/--examples')
    if args.examples:
        return load_examples()
    if args.tasks:
        return load_systems(args.tasks)
    if not args.pairs:
        raise InvalidTaskSet(
            'no tasks given; pass PERIOD:WCET pairs, --tasks or --examples')
    return [(None, [parse_pair(pair) for pair in args.pairs])]


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(levelname)s %(name)s: %(message)s')

    try:
        systems = read_systems(args)
        reports = []
        for name, tsks in systems:
            if args.sort:
                tsks = rate_monotonic_order(tsks)
            reports.append(analyze(tsks, name=name))
    except (InvalidTaskSet, json.JSONDecodeError, OSError) as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 2

    logger.info('analyzed %d task system(s)', len(reports))
    for report in reports:
        print(SEPARATOR)
        print(render(report))
    print(SEPARATOR)
    return 0


if __name__ == '__main__':
    sys.exit(main())
