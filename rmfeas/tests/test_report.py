"""Test the aggregated report and the bundled example systems.

"""

import json
from fractions import Fraction

import pytest
from rmfeas.report import analyze, render
from rmfeas.sched_test.lub import feasible_by_lub
from rmfeas.sched_test.scheduling_point import SchedulingPoint
from rmfeas.system.load import load_examples, load_systems
from rmfeas.system.task import InvalidTaskSet, Task, tasks_from_arrays

# name: (LUB, completion time, scheduling point, U < 100%)
EXPECTED = {
    'Ex-0': (True, True, True, True),
    'Ex-1': (False, False, False, True),
    'Ex-2': (False, False, False, True),
    'Ex-3': (False, True, True, True),
    'Ex-4': (False, True, True, False),
    'Ex-5': (False, True, True, False),
    'Ex-6': (False, False, False, True),
    'Ex-7': (False, True, True, False),
    'Ex-8': (False, False, False, True),
    'Ex-9': (False, True, True, False),
}


def test_examples():
    systems = load_examples()
    assert [name for name, _ in systems] == list(EXPECTED)
    for name, tsks in systems:
        report = analyze(tsks, name=name)
        got = (report.feasible_by_lub, report.feasible_by_completion_time,
               report.feasible_by_scheduling_point,
               report.below_full_utilization)
        assert got == EXPECTED[name], name
        assert report.feasible_by_lub == feasible_by_lub(tsks), name


@pytest.mark.parametrize("periods, wcets, expected", [
    # U = 1.0 above LUB(3); both exact tests meet demand exactly at t = 10
    ([2, 5, 10], [1, 2, 1], (False, True, True)),
    ([2, 10, 15], [1, 1, 2], (True, True, True)),
    # harmonic periods at U = 1.0
    ([2, 4, 16], [1, 1, 4], (False, True, True)),
    ([10], [10], (True, True, True)),
])
def test_scenarios(periods, wcets, expected):
    report = analyze(tasks_from_arrays(periods, wcets))
    assert (report.feasible_by_lub, report.feasible_by_completion_time,
            report.feasible_by_scheduling_point) == expected


def test_report_fields():
    report = analyze(tasks_from_arrays([2, 5, 10], [1, 2, 1]), name='Ex-5')
    assert report.name == 'Ex-5'
    assert report.utilization == Fraction(1)
    assert report.bound == pytest.approx(0.779763, abs=1e-6)
    assert report.completion_times == [1, 4, 10]
    assert report.scheduling_points[2] == SchedulingPoint(0, 5, 10, 10)
    assert not report.below_full_utilization


def test_analyze_rejects_bad_systems():
    with pytest.raises(InvalidTaskSet):
        analyze([])
    with pytest.raises(InvalidTaskSet):
        analyze([Task(1, 10), Task(1, 2)])


def test_render():
    report = analyze(tasks_from_arrays([2, 5, 7], [1, 1, 2]), name='Ex-1')
    text = render(report)
    lines = text.splitlines()
    assert lines[0] == 'Ex-1 U=98.57% (C1=1, C2=1, C3=2; T1=2, T2=5, T3=7; T=D)'
    assert lines[1] == 'Completion Time:  INFEASIBLE'
    assert lines[2] == 'Scheduling Point: INFEASIBLE'
    assert lines[3] == 'RM LUB:           INFEASIBLE (U=0.9857, LUB(3)=0.7798)'
    assert lines[4] == 'U < 100%:         FEASIBLE'
    assert lines[7].split() == ['1', '2', '1', '1', 't=2', '(k=1,', 'l=1)']
    assert lines[9].split() == ['3', '7', '2', '-', '-']


def test_render_without_name():
    report = analyze([Task(10, 10)])
    assert render(report).splitlines()[0] == 'U=100.00% (C1=10; T1=10; T=D)'


def test_load_systems(tmp_path):
    single = tmp_path / 'single.json'
    single.write_text(json.dumps(
        {'name': 'mine', 'tasks': [{'period': 4, 'wcet': '1/2'},
                                   {'period': 6.5, 'wcet': 1}]}))
    [(name, tsks)] = load_systems(single)
    assert name == 'mine'
    assert tsks == [Task(Fraction(1, 2), 4), Task(1, Fraction(13, 2))]

    bare = tmp_path / 'bare.json'
    bare.write_text(json.dumps([{'period': 4, 'wcet': 1}]))
    assert load_systems(bare) == [(None, [Task(1, 4)])]


def test_load_systems_entry_without_tasks(tmp_path):
    path = tmp_path / 'systems.json'
    path.write_text(json.dumps([
        {'name': 'a', 'tasks': [{'period': 2, 'wcet': 1}]},
        {'name': 'b'},
    ]))
    with pytest.raises(InvalidTaskSet, match="'b' needs a 'tasks' key"):
        load_systems(path)


@pytest.mark.parametrize("doc", [
    {'name': 'no tasks'},
    [{'period': 4}],
    [{'period': 4, 'wcet': 5}],
    ['4:1'],
    42,
])
def test_load_bad_systems(tmp_path, doc):
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps(doc))
    with pytest.raises(InvalidTaskSet):
        load_systems(path)
