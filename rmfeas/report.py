"""Run every feasibility test on a task system and summarize the verdicts.

"""

from fractions import Fraction
from typing import List, Optional

from attr import dataclass

from rmfeas.sched_test.completion_time import completion_times
from rmfeas.sched_test.lub import (below_full_utilization, liu_layland_bound,
                                   utilization, within_bound)
from rmfeas.sched_test.scheduling_point import (SchedulingPoint,
                                                scheduling_points)
from rmfeas.system.task import Task, validate_system


@dataclass(frozen=True)
class FeasibilityReport:
    tasks: List[Task]
    utilization: Fraction
    bound: float
    completion_times: List[Optional[object]]
    scheduling_points: List[Optional[SchedulingPoint]]
    below_full_utilization: bool
    name: Optional[str] = None

    @property
    def feasible_by_lub(self) -> bool:
        return within_bound(self.utilization, self.bound)

    @property
    def feasible_by_completion_time(self) -> bool:
        return all(t is not None for t in self.completion_times)

    @property
    def feasible_by_scheduling_point(self) -> bool:
        return all(p is not None for p in self.scheduling_points)


def analyze(tsks: List[Task], name: Optional[str] = None) -> FeasibilityReport:
    """Validate tsks and run the three feasibility tests and the utilization
    threshold check.

    Raises:
        InvalidTaskSet: if tsks is empty or not in rate-monotonic order.
    """
    validate_system(tsks)
    tsks = list(tsks)
    return FeasibilityReport(
        tasks=tsks,
        utilization=utilization(tsks),
        bound=liu_layland_bound(len(tsks)),
        completion_times=completion_times(tsks),
        scheduling_points=scheduling_points(tsks),
        below_full_utilization=below_full_utilization(tsks),
        name=name)


def verdict(feasible: bool) -> str:
    return 'FEASIBLE' if feasible else 'INFEASIBLE'


def render(report: FeasibilityReport) -> str:
    """Format a report as the text block printed by the command-line tool."""
    tsks = report.tasks
    n = len(tsks)
    cs = ', '.join(f'C{i + 1}={tsk.wcet}' for i, tsk in enumerate(tsks))
    ts = ', '.join(f'T{i + 1}={tsk.period}' for i, tsk in enumerate(tsks))
    title = f'{report.name} ' if report.name else ''
    lines = [
        f'{title}U={float(report.utilization) * 100:4.2f}% ({cs}; {ts}; T=D)',
        f'Completion Time:  {verdict(report.feasible_by_completion_time)}',
        f'Scheduling Point: {verdict(report.feasible_by_scheduling_point)}',
        f'RM LUB:           {verdict(report.feasible_by_lub)} '
        f'(U={float(report.utilization):.4f}, LUB({n})={report.bound:.4f})',
        f'U < 100%:         {verdict(report.below_full_utilization)}',
        '',
        f'  {"task":<6}{"period":<8}{"wcet":<8}{"completion":<12}'
        'scheduling point',
    ]
    for i, tsk in enumerate(tsks):
        ct = report.completion_times[i]
        sp = report.scheduling_points[i]
        ct_text = '-' if ct is None else str(ct)
        sp_text = '-' if sp is None else \
            f't={sp.time} (k={sp.k + 1}, l={sp.l})'
        lines.append(f'  {i + 1:<6}{str(tsk.period):<8}{str(tsk.wcet):<8}'
                     f'{ct_text:<12}{sp_text}')
    return '\n'.join(lines)
