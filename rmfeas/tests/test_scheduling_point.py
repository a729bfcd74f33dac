"""Test the scheduling-point test.

"""

from fractions import Fraction
from typing import List

import pytest
from attr import dataclass
from rmfeas.sched_test.scheduling_point import (SchedulingPoint, demand,
                                                feasible_by_scheduling_point,
                                                scheduling_point,
                                                scheduling_points)
from rmfeas.system.task import Task, tasks_from_arrays


@dataclass
class Perf:
    num_iterations: int = 0


@pytest.mark.parametrize("periods, wcets, expected", [
    ([2, 10, 15], [1, 1, 2], True),
    ([2, 5, 7], [1, 1, 2], False),
    ([2, 5, 7, 13], [1, 1, 1, 2], False),
    ([3, 5, 15], [1, 2, 3], True),
    ([2, 4, 16], [1, 1, 4], True),
    ([2, 5, 10], [1, 2, 1], True),
    ([3, 5, 15], [1, 2, 4], True),
    ([6, 8, 12, 24], [1, 2, 4, 6], True),
    ([10], [10], True),
])
def test_1(periods: List[int], wcets: List[int], expected: bool):
    tsks = tasks_from_arrays(periods, wcets)
    assert feasible_by_scheduling_point(tsks) == expected


def test_points_found():
    tsks = tasks_from_arrays([2, 10, 15], [1, 1, 2])
    assert scheduling_points(tsks) == [
        SchedulingPoint(k=0, l=1, time=2, demand=1),
        SchedulingPoint(k=0, l=1, time=2, demand=2),
        SchedulingPoint(k=0, l=3, time=6, demand=6),
    ]


def test_demand_equal_to_capacity_is_feasible():
    tsks = tasks_from_arrays([2, 5, 10], [1, 2, 1])
    assert demand(tsks, 10) == 10
    assert scheduling_point(tsks, 2) == SchedulingPoint(0, 5, 10, 10)
    assert scheduling_point(tsks, 1) == SchedulingPoint(0, 2, 4, 4)


def test_demand_with_rationals():
    tsks = [Task(Fraction(1, 3), Fraction(2, 3)), Task(1, 4)]
    # ceil(2 / (2/3)) = 3 activations of the first task
    assert demand(tsks, 2) == 2
    # 1/3 of a time unit past 2, a fourth activation is pending
    assert demand(tsks, Fraction(7, 3)) == Fraction(7, 3)


def test_equal_periods():
    assert feasible_by_scheduling_point([Task(2, 4), Task(2, 4)])
    assert not feasible_by_scheduling_point([Task(2, 4), Task(3, 4)])
    assert scheduling_point([Task(2, 4), Task(2, 4)], 1) == \
        SchedulingPoint(0, 1, 4, 4)


def test_longer_period_above_is_skipped():
    # out-of-order input: tsks[0] has no multiple inside tsks[1].period
    tsks = [Task(1, 10), Task(1, 4)]
    assert scheduling_point(tsks, 1) == SchedulingPoint(1, 1, 4, 2)


def test_points_are_counted():
    perf = Perf()
    tsks = tasks_from_arrays([2, 5, 7], [1, 1, 2])
    assert scheduling_point(tsks, 2, perf) is None
    # k = 0: 2, 4, 6; k = 1: 5; k = 2: 7
    assert perf.num_iterations == 5


def test_single_task_full_utilization():
    assert scheduling_points([Task(10, 10)]) == [SchedulingPoint(0, 1, 10, 10)]


def test_bad_inputs():
    with pytest.raises(AssertionError):
        feasible_by_scheduling_point([])  # empty task list

    with pytest.raises(AssertionError):
        scheduling_point([Task(1, 2)], -1)  # index out of range
