"""Completion-time (response-time) test for rate-monotonic scheduling.

The worst-case completion time of task i is the least fixed point of

    phi(t) = tsks[i].wcet + sum(ceil(t / tsk.period) * tsk.wcet
                                for tsk in tsks[:i])

found by iterating phi from the initial value sum(tsk.wcet for tsk in
tsks[:i+1]). phi is nondecreasing, so the iterates never decrease; the
iteration stops as soon as an iterate exceeds the deadline of task i, which
makes it terminate on every input. Arithmetic is exact.

The tasks are listed in decreasing order of priority.

"""

import logging
import math
from fractions import Fraction
from typing import List, Optional

from rmfeas.system.task import Task

logger = logging.getLogger(__name__)


def completion_time(tsks: List[Task], i: int, perf=None):
    """Compute the worst-case completion time of task i.

    Args:
        tsks: list of tasks in decreasing order of priority

        i: index of the task to analyze

        perf: if perf is not None, then the number of iterations is added to
              perf.num_iterations

    Returns:
        the completion time if it is at most the deadline of task i; None,
        otherwise.

    >>> completion_time([Task(20, 40), Task(10, 50), Task(33, 150)], 2)
    143

    >>> completion_time([Task(1, 2), Task(1, 5), Task(2, 7)], 2)

    """
    assert 0 <= i < len(tsks)
    tsk = tsks[i]
    hp = tsks[:i]

    def phi(t):
        return tsk.wcet + sum([
            math.ceil(Fraction(t, hp_tsk.period)) * hp_tsk.wcet
            for hp_tsk in hp
        ])

    t_ = sum([hp_tsk.wcet for hp_tsk in hp]) + tsk.wcet
    while t_ <= tsk.deadline:
        v = phi(t_)

        if perf is not None:
            perf.num_iterations += 1

        if v == t_:  # fixed point is found
            logger.debug('task %d: completion time %s, deadline %s', i, t_,
                         tsk.deadline)
            return t_
        t_ = v

    logger.debug('task %d: iterate %s exceeds deadline %s', i, t_,
                 tsk.deadline)
    return None


def completion_times(tsks: List[Task], perf=None) -> List[Optional[int]]:
    """Worst-case completion time of every task; None marks a miss.

    >>> completion_times([Task(1, 2), Task(1, 10), Task(2, 15)])
    [1, 2, 6]
    """
    return [completion_time(tsks, i, perf) for i in range(len(tsks))]


def feasible_by_completion_time(tsks: List[Task]) -> bool:
    """Decides whether the tasks are schedulable.

    Args:
        tsks: nonempty list of tasks in decreasing order of priority

    Returns:
        True if every task completes by its deadline; False otherwise.

    >>> feasible_by_completion_time([Task(1, 2), Task(1, 4), Task(4, 16)])
    True

    >>> feasible_by_completion_time([Task(1, 2), Task(1, 5), Task(2, 7)])
    False
    """
    assert tsks
    return all(t is not None for t in completion_times(tsks))
