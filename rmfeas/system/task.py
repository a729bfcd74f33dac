from fractions import Fraction
from numbers import Rational
from typing import List, Optional, Sequence

from rmfeas.util.math import argsort


class InvalidTaskSet(ValueError):
    """Raised when a task or a list of tasks cannot be analyzed."""


def as_rational(value, field: str):
    """Convert value to an exact rational time quantity.

    Integers stay integers; other rationals become Fractions. Floats and
    strings go through their decimal text, so 0.1 means 1/10.

    >>> as_rational(3, 'wcet')
    3
    >>> as_rational('2.5', 'period')
    Fraction(5, 2)
    >>> as_rational(0.1, 'wcet')
    Fraction(1, 10)
    """
    if isinstance(value, bool):
        raise InvalidTaskSet(f'{field} must be a number, got {value!r}')
    if isinstance(value, Rational):
        q = Fraction(value)
    elif isinstance(value, (float, str)):
        try:
            q = Fraction(str(value).strip())
        except (ValueError, ZeroDivisionError) as exc:
            raise InvalidTaskSet(
                f'{field} must be a finite rational number, got {value!r}'
            ) from exc
    else:
        raise InvalidTaskSet(f'{field} must be a number, got {value!r}')
    if q.denominator == 1:
        return q.numerator
    return q


class Task:
    """This class implements a periodic hard real-time task.

    Attributes:
        wcet: worst-case execution time of each activation
        period: duration between successive activations

    The relative deadline is always equal to the period. wcet and period are
    exact rationals with period > 0 and 0 <= wcet <= period. Priority is not
    stored; it is implied by the position of the task in a list, index 0
    being the highest priority.

    """

    __slots__ = ('_wcet', '_period')

    def __init__(self, wcet, period) -> None:
        """Constructs a periodic task.

        Examples
        --------

        >>> Task(1, 2)
        Task(1, 2)

        >>> Task(wcet='0.5', period=2)
        Task(Fraction(1, 2), 2)
        """
        wcet = as_rational(wcet, 'wcet')
        period = as_rational(period, 'period')
        if period <= 0:
            raise InvalidTaskSet(f'period must be positive, got {period}')
        if wcet < 0:
            raise InvalidTaskSet(f'wcet must be nonnegative, got {wcet}')
        if wcet > period:
            raise InvalidTaskSet(
                f'wcet ({wcet}) cannot exceed period ({period})')
        self._wcet = wcet
        self._period = period

    @property
    def wcet(self):
        return self._wcet

    @property
    def period(self):
        return self._period

    @property
    def deadline(self):
        """Relative deadline; equal to the period."""
        return self._period

    @property
    def utilization(self) -> Fraction:
        """The utilization of the task.

        >>> Task(1, 2).utilization
        Fraction(1, 2)
        """
        return Fraction(self.wcet, self.period)

    def __eq__(self, other):
        if not isinstance(other, Task):
            return NotImplemented
        return (self.wcet, self.period) == (other.wcet, other.period)

    def __hash__(self):
        return hash((self.wcet, self.period))

    def __repr__(self):
        """repr(self)"""
        return (f'{self.__class__.__name__}({self.wcet!r}, '
                f'{self.period!r})')

    def __str__(self):
        """str(self)"""
        return f'(wcet: {self.wcet}, period: {self.period})'


def tasks_from_arrays(periods: Sequence, wcets: Sequence,
                      deadlines: Optional[Sequence] = None) -> List[Task]:
    """Build a task list from parallel period, wcet and deadline arrays.

    Args:
        periods: period of each task, highest priority first

        wcets: worst-case execution time of each task

        deadlines: if given, must equal periods element by element

    Returns: the tasks in the given order.

    >>> tasks_from_arrays([2, 10, 15], [1, 1, 2])
    [Task(1, 2), Task(1, 10), Task(2, 15)]
    """
    if len(periods) != len(wcets):
        raise InvalidTaskSet(
            f'got {len(periods)} periods but {len(wcets)} wcets')
    tsks = [Task(wcet=w, period=p) for p, w in zip(periods, wcets)]
    if deadlines is not None:
        if len(deadlines) != len(tsks):
            raise InvalidTaskSet(
                f'got {len(deadlines)} deadlines for {len(tsks)} tasks')
        for i, (tsk, d) in enumerate(zip(tsks, deadlines)):
            if as_rational(d, 'deadline') != tsk.period:
                raise InvalidTaskSet(
                    f'task {i}: deadline ({d}) must equal period '
                    f'({tsk.period})')
    return tsks


def validate_system(tsks: Sequence[Task]) -> None:
    """Check that tsks is a nonempty list in rate-monotonic priority order.

    Raises:
        InvalidTaskSet: if tsks is empty, contains something other than a
            Task, or periods decrease somewhere along the list.
    """
    if not tsks:
        raise InvalidTaskSet('task set is empty')
    for i, tsk in enumerate(tsks):
        if not isinstance(tsk, Task):
            raise InvalidTaskSet(f'task {i} is not a Task: {tsk!r}')
    for i in range(1, len(tsks)):
        if tsks[i].period < tsks[i - 1].period:
            raise InvalidTaskSet(
                f'tasks are not in rate-monotonic order: task {i - 1} has '
                f'period {tsks[i - 1].period} but task {i} has period '
                f'{tsks[i].period}')


def rate_monotonic_order(tsks: Sequence[Task]) -> List[Task]:
    """Sort tasks by nondecreasing period; ties keep their relative order.

    >>> rate_monotonic_order([Task(1, 5), Task(1, 2), Task(2, 5)])
    [Task(1, 2), Task(1, 5), Task(2, 5)]
    """
    return [tsks[i] for i in argsort([tsk.period for tsk in tsks])]
