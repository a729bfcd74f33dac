"""Liu & Layland utilization bound for rate-monotonic scheduling.

A system of n implicit-deadline periodic tasks is schedulable under RM if

    sum(tsk.wcet / tsk.period for tsk in tsks) <= n * (2 ** (1 / n) - 1)

The condition is sufficient but not necessary: a system above the bound may
still be schedulable, and only an exact test can decide it.

"""

import logging
from fractions import Fraction
from typing import List

from rmfeas.system.task import InvalidTaskSet, Task

logger = logging.getLogger(__name__)


def utilization(tsks: List[Task]) -> Fraction:
    """Total utilization of the tasks, computed exactly.

    >>> utilization([Task(1, 2), Task(1, 10), Task(2, 15)])
    Fraction(11, 15)
    """
    total = Fraction(0)
    for i, tsk in enumerate(tsks):
        total += tsk.utilization
        logger.debug('task %d: wcet=%s, period=%s, utilization sum=%s',
                     i, tsk.wcet, tsk.period, total)
    return total


def liu_layland_bound(n: int) -> float:
    """Least upper bound on the utilization of n tasks under RM.

    >>> liu_layland_bound(1)
    1.0
    >>> round(liu_layland_bound(3), 4)
    0.7798
    """
    if n < 1:
        raise InvalidTaskSet(
            f'utilization bound is undefined for {n} tasks')
    return n * (2.0 ** (1.0 / n) - 1.0)


def within_bound(u: Fraction, bound: float) -> bool:
    """Whether utilization u passes the bound.

    >>> within_bound(Fraction(1), liu_layland_bound(1))
    True
    """
    return float(u) <= bound


def feasible_by_lub(tsks: List[Task]) -> bool:
    """Decides whether the tasks pass the Liu & Layland test.

    Args:
        tsks: nonempty list of tasks

    Returns:
        True if the total utilization is at most the bound for len(tsks)
        tasks. False means the test is inconclusive, not that the system is
        unschedulable.

    >>> feasible_by_lub([Task(1, 2), Task(1, 10), Task(2, 15)])
    True

    >>> feasible_by_lub([Task(1, 2), Task(2, 5), Task(1, 10)])
    False
    """
    assert tsks
    u = utilization(tsks)
    bound = liu_layland_bound(len(tsks))
    logger.debug('utilization=%s, LUB(%d)=%f', float(u), len(tsks), bound)
    return within_bound(u, bound)


def below_full_utilization(tsks: List[Task]) -> bool:
    """The naive threshold check: total utilization strictly below 100%.

    This only tells whether the processor has spare capacity. It is not a
    feasibility test for any particular scheduler.

    >>> below_full_utilization([Task(1, 2), Task(1, 4), Task(4, 16)])
    False
    """
    return utilization(tsks) < 1
