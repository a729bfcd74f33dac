import math
from fractions import Fraction
from typing import List, Optional, Sequence

import numpy as np
from rmfeas.system.task import Task, rate_monotonic_order


def uunifast(rng: np.random.Generator, n: int, sum_util) -> List[float]:
    """Draw n task utilizations that sum to sum_util using UUniFast.

    Args:
        rng: a random number generator from numpy like np.random.default_rng()

        n: number of tasks in the system

        sum_util: total utilization of the system

    Returns: a list of n nonnegative utilizations whose sum is sum_util.

    """
    assert n >= 1 and sum_util >= 0
    us = []
    remaining = sum_util
    for i in range(1, n):
        next_remaining = remaining * rng.uniform() ** (1.0 / (n - i))
        us.append(remaining - next_remaining)
        remaining = next_remaining
    us.append(remaining)
    return us


def generate_system(rng: np.random.Generator, n: int, min_period: int,
                    max_period: int, sum_util,
                    abs_tol: float = 0.05) -> List[Task]:
    """Generate a random implicit-deadline system by sampling periods from a
    log-uniform distribution.

    Args:
        rng: a random number generator from numpy like np.random.default_rng()

        n: number of tasks in the system

        min_period (resp., max_period): minimum (resp., maximum) period of any
                  task in the system. periods are picked from a log-uniform
                  distribution over [min_period, max_period].

        sum_util: total utilization of the system, at most 1. utilizations are
                  drawn with UUniFast; since wcets are integral, each wcet is
                  the floor of period * utilization (at least 1), and systems
                  whose total drifts from sum_util by more than abs_tol are
                  redrawn.

        abs_tol: absolute tolerance of divergence from sum_util.

    Returns:
        A random system of tasks in rate-monotonic order.

    """
    assert 1 <= min_period <= max_period
    assert 0 < sum_util <= 1
    while True:
        periods = np.exp(
            rng.uniform(low=np.log(min_period),
                        high=np.log(max_period),
                        size=n)).tolist()
        periods = [min(max_period, math.ceil(p)) for p in periods]
        us = uunifast(rng, n, sum_util)
        wcets = [min(p, max(1, math.floor(p * u)))
                 for (p, u) in zip(periods, us)]
        total = sum(w / p for (w, p) in zip(wcets, periods))
        if not math.isclose(sum_util, total, abs_tol=abs_tol):
            continue
        return rate_monotonic_order(
            [Task(wcet=w, period=p) for w, p in zip(wcets, periods)])


def generate_system_from_periods(rng: np.random.Generator, n: int,
                                 periods: Sequence[int], max_util,
                                 min_wcet: int = 0,
                                 max_wcet: Optional[int] = None) -> List[Task]:
    """Generate a random system whose periods are drawn from a fixed menu.

    Drawing periods from the divisors of a small number keeps the hyperperiod
    small, which lets a schedule be simulated in full.

    Args:
        rng: a random number generator from numpy like np.random.default_rng()

        n: number of tasks in the system

        periods: candidate periods; each task picks one uniformly.

        max_util: wcets are drawn uniformly from [min_wcet, max_wcet] and then
                  scaled down, task by task from the lowest priority, until the
                  total utilization is at most max_util.

        min_wcet, max_wcet: range of the wcets before scaling; max_wcet
                  defaults to the period of each task.

    Returns:
        A random system of tasks in rate-monotonic order.

    """
    assert n >= 1 and max_util >= 0
    chosen = sorted(rng.choice(periods, size=n).tolist())
    wcets = []
    for p in chosen:
        hi = p if max_wcet is None else min(p, max_wcet)
        lo = min(min_wcet, hi)
        wcets.append(int(rng.integers(low=lo, high=hi + 1)))
    i = n - 1
    while sum(Fraction(w, p) for w, p in zip(wcets, chosen)) > max_util:
        if wcets[i] > 0:
            wcets[i] -= 1
        i = (i - 1) % n
    return [Task(wcet=w, period=p) for w, p in zip(wcets, chosen)]
