"""Run the experiments comparing the Liu & Layland bound with the exact
completion-time and scheduling-point tests.

"""

import pathlib
import sys
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import scipy.stats
from attr import dataclass

from rmfeas.sched_test.completion_time import completion_times
from rmfeas.sched_test.lub import feasible_by_lub
from rmfeas.sched_test.scheduling_point import scheduling_points
from rmfeas.system.generate_random import generate_system


@dataclass
class Perf:
    num_iterations: int = 0


def acceptance(generate_system, num_systems: int, data_fn: Optional[str]):
    """Run the three tests on randomly generated systems.

    Args:

        generate_system: a function that returns a random system

        num_systems: number of randomly generated systems

        data_fn: filename of npz file that will store the measurements. if the
                 name is None, then the data is not stored.

    Returns: (lub, exact, ct_iters, sp_iters): numpy arrays holding, per
        system, the LUB verdict, the exact verdict, the number of
        completion-time iterations and the number of scheduling points
        evaluated.

    """
    lub = np.zeros(num_systems, dtype=bool)
    exact = np.zeros(num_systems, dtype=bool)
    ct_iters = np.zeros(num_systems)
    sp_iters = np.zeros(num_systems)
    for i in range(num_systems):
        tsks = generate_system()
        perf1 = Perf()
        perf2 = Perf()

        ct = completion_times(tsks, perf1)
        sp = scheduling_points(tsks, perf2)
        ct_ok = all(t is not None for t in ct)
        sp_ok = all(p is not None for p in sp)
        assert ct_ok == sp_ok, str(tsks)

        lub[i] = feasible_by_lub(tsks)
        exact[i] = ct_ok
        ct_iters[i] = perf1.num_iterations
        sp_iters[i] = perf2.num_iterations
    if data_fn:
        np.savez(data_fn, lub=lub, exact=exact, ct_iters=ct_iters,
                 sp_iters=sp_iters)
    return lub, exact, ct_iters, sp_iters


def load(data_fn):
    """Load data from npz file.

    Args:
        data_fn: the filename

    Returns: (lub, exact, ct_iters, sp_iters)
    """
    npzfile = np.load(data_fn)
    return (npzfile['lub'], npzfile['exact'], npzfile['ct_iters'],
            npzfile['sp_iters'])


plt.rc('xtick', labelsize=10)
plt.rc('ytick', labelsize=10)
plt.style.use('tableau-colorblind10')


def acceptance_plot(utils: np.ndarray, lub_ratio: np.ndarray,
                    exact_ratio: np.ndarray, image_fn: Optional[str]):
    """Plot the fraction of systems accepted by each test against the total
    utilization.

    Args:

        utils: total utilizations of the sweep

        lub_ratio, exact_ratio: acceptance ratio of each test

        image_fn: filename of pdf file that stores the plot. if name is None,
                  then the plot is simply displayed.

    """
    plt.plot(utils, lub_ratio, marker='o', label='RM LUB')
    plt.plot(utils, exact_ratio, marker='s', label='exact (CT / SP)')
    plt.xlabel('total utilization', fontsize=15)
    plt.ylabel('acceptance ratio', fontsize=15)
    plt.legend(loc='lower left', prop={'size': 12})
    plt.tight_layout()
    if image_fn:
        plt.savefig(f"{image_fn}.pdf", format="pdf")
    else:
        plt.show()
    plt.clf()


def two_histograms(data1: np.ndarray, label1: str, data2: np.ndarray,
                   label2: str, xlabel: str, ylabel: str,
                   image_fn: Optional[str]):
    """Draw histograms of work counters for the two exact tests."""
    a = min(0, np.amin(data1), np.amin(data2))
    b = max(np.amax(data1), np.amax(data2)) + 1
    bins = np.arange(start=a, stop=b, step=1)
    plt.hist(data1, bins, label=label1, alpha=0.5, density=True)
    plt.hist(data2, bins, label=label2, alpha=0.5, density=True)
    plt.xlabel(xlabel, fontsize=15)
    plt.ylabel(ylabel, fontsize=15)
    plt.legend(loc='upper right', prop={'size': 12})
    plt.tight_layout()
    if image_fn:
        plt.savefig(f"{image_fn}.pdf", format="pdf")
    else:
        plt.show()
    plt.clf()


def exp_1(n: int = 8, num_systems: int = 1000, seed: int = 1234):
    """Acceptance ratio of the LUB test and the exact tests over a sweep of
    total utilization.

    """
    dir = pathlib.Path('exp1')
    dir.mkdir(exist_ok=True)

    rng = np.random.default_rng(seed=seed)
    utils = np.round(np.arange(0.5, 1.0001, 0.05), 2)
    lub_ratio = np.zeros(len(utils))
    exact_ratio = np.zeros(len(utils))
    all_ct = []
    all_sp = []
    for j, u in enumerate(utils):
        def gen():
            return generate_system(rng, n, min_period=10, max_period=1000,
                                   sum_util=float(u), abs_tol=0.01)
        lub, exact, ct_iters, sp_iters = acceptance(
            gen, num_systems, data_fn=(dir / f'data_{u:.2f}.npz'))
        lub_ratio[j] = lub.mean()
        exact_ratio[j] = exact.mean()
        all_ct.append(ct_iters)
        all_sp.append(sp_iters)
        print(f'U={u:.2f}: LUB accepts {lub_ratio[j]:.3f}, '
              f'exact accepts {exact_ratio[j]:.3f}')

    acceptance_plot(utils, lub_ratio, exact_ratio,
                    image_fn=dir / 'acceptance')

    ct = np.concatenate(all_ct)
    sp = np.concatenate(all_sp)
    print('statistics for completion-time iterations')
    print('-' * 80)
    print()
    print(scipy.stats.describe(ct))
    print()
    print('statistics for scheduling points evaluated')
    print('-' * 80)
    print()
    print(scipy.stats.describe(sp))
    print()
    two_histograms(ct, 'completion time', sp, 'scheduling point',
                   xlabel='work per system', ylabel='normalized frequencies',
                   image_fn=dir / 'work')


def replot_1(dir_name: str = 'exp1'):
    """Redraw the plots of exp_1 from its stored npz files, without
    rerunning the tests.

    """
    dir = pathlib.Path(dir_name)
    data_fns = sorted(dir.glob('data_*.npz'))
    assert data_fns, f'no data in {dir}'
    utils = np.zeros(len(data_fns))
    lub_ratio = np.zeros(len(data_fns))
    exact_ratio = np.zeros(len(data_fns))
    all_ct = []
    all_sp = []
    for j, data_fn in enumerate(data_fns):
        lub, exact, ct_iters, sp_iters = load(data_fn)
        utils[j] = float(data_fn.stem[len('data_'):])
        lub_ratio[j] = lub.mean()
        exact_ratio[j] = exact.mean()
        all_ct.append(ct_iters)
        all_sp.append(sp_iters)
    acceptance_plot(utils, lub_ratio, exact_ratio,
                    image_fn=dir / 'acceptance')
    two_histograms(np.concatenate(all_ct), 'completion time',
                   np.concatenate(all_sp), 'scheduling point',
                   xlabel='work per system', ylabel='normalized frequencies',
                   image_fn=dir / 'work')


if __name__ == "__main__":
    if sys.argv[1:] == ['replot']:
        replot_1()
    else:
        exp_1()
