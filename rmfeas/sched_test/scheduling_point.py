"""Scheduling-point test for rate-monotonic scheduling (Lehoczky, Sha, Ding).

Task i meets its deadline if and only if there is a scheduling point

    t = l * tsks[k].period,  k in range(i + 1),
                             l in range(1, floor(tsks[i].period / tsks[k].period) + 1)

at which the cumulative demand of tasks 0..i fits in [0, t]:

    sum(tsk.wcet * ceil(t / tsk.period) for tsk in tsks[:i+1]) <= t

The tasks are listed in decreasing order of priority. Arithmetic is exact, so
a demand equal to the capacity of the window counts as feasible.

"""

import logging
import math
from fractions import Fraction
from typing import List, NamedTuple, Optional

from rmfeas.system.task import Task
from rmfeas.util.math import dot

logger = logging.getLogger(__name__)


class SchedulingPoint(NamedTuple):
    """A scheduling point t = l * tsks[k].period and the demand seen there."""
    k: int
    l: int
    time: object
    demand: object


def demand(tsks: List[Task], t):
    """Cumulative worst-case demand of tsks over the window [0, t].

    >>> demand([Task(1, 2), Task(2, 5), Task(1, 10)], 10)
    10
    """
    return dot([tsk.wcet for tsk in tsks],
               [math.ceil(Fraction(t, tsk.period)) for tsk in tsks])


def scheduling_point(tsks: List[Task], i: int,
                     perf=None) -> Optional[SchedulingPoint]:
    """Find a scheduling point at which task i has enough capacity.

    Points are searched in order of k, then l.

    Args:
        tsks: list of tasks in decreasing order of priority

        i: index of the task to analyze

        perf: if perf is not None, then the number of demand evaluations is
              added to perf.num_iterations

    Returns:
        the first satisfying scheduling point; None if there is none, in which
        case task i can miss its deadline.

    >>> scheduling_point([Task(1, 2), Task(1, 4), Task(4, 16)], 2)
    SchedulingPoint(k=0, l=8, time=16, demand=16)

    >>> scheduling_point([Task(1, 2), Task(1, 5), Task(2, 7)], 2)

    """
    assert 0 <= i < len(tsks)
    hp = tsks[:i + 1]
    for k in range(i + 1):
        num_multiples = math.floor(Fraction(tsks[i].period, tsks[k].period))
        # empty when tsks[k] has a longer period than tsks[i]
        for l in range(1, num_multiples + 1):
            t = l * tsks[k].period
            w = demand(hp, t)

            if perf is not None:
                perf.num_iterations += 1

            if w <= t:
                logger.debug('task %d: demand %s fits in [0, %s] (k=%d, l=%d)',
                             i, w, t, k, l)
                return SchedulingPoint(k, l, t, w)

    logger.debug('task %d: no scheduling point with enough capacity', i)
    return None


def scheduling_points(tsks: List[Task],
                      perf=None) -> List[Optional[SchedulingPoint]]:
    """Satisfying scheduling point of every task; None marks a miss."""
    return [scheduling_point(tsks, i, perf) for i in range(len(tsks))]


def feasible_by_scheduling_point(tsks: List[Task]) -> bool:
    """Decides whether the tasks are schedulable.

    Args:
        tsks: nonempty list of tasks in decreasing order of priority

    Returns:
        True if every task has a scheduling point with enough capacity; False
        otherwise.

    >>> feasible_by_scheduling_point([Task(1, 2), Task(2, 5), Task(1, 10)])
    True

    >>> feasible_by_scheduling_point([Task(1, 2), Task(1, 5), Task(1, 7), Task(2, 13)])
    False
    """
    assert tsks
    return all(p is not None for p in scheduling_points(tsks))
