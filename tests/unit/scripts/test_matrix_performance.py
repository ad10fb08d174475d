"""
Smoke tests for the multiplication benchmark helpers.

Sizes are kept tiny so the tests stay fast; they check the shape of the
results, not the timings.
"""
import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from sparse_matrix_calc.scripts.matrix_performance import (
    analyze_complexity,
    benchmark_memory,
    benchmark_runtime,
    generate_markdown_table,
    generate_random_sparse_matrix,
    plot_results,
)


def test_random_matrix_density_and_reproducibility():
    """
    The generator places the requested number of nonzeros and is seeded.
    """
    first = generate_random_sparse_matrix(20, 0.1, seed=7)
    second = generate_random_sparse_matrix(20, 0.1, seed=7)

    assert first.shape == (20, 20)
    assert first.nnz == 40
    assert first == second
    assert all(value != 0 for _, _, value in first.items())


def test_random_matrix_rejects_bad_density():
    """
    Density must lie in [0, 1].
    """
    with pytest.raises(ValueError):
        generate_random_sparse_matrix(5, 1.5)


def test_runtime_benchmark_requires_a_trial():
    """
    At least one multiplication per size is needed to report a result.
    """
    with pytest.raises(ValueError, match="num_trials"):
        benchmark_runtime([4], num_trials=0)


def test_analyze_complexity_recovers_exponent():
    """
    Exact power-law timings give back their exponent.
    """
    sizes = [10, 20, 40, 80]
    times = [1e-6 * n ** 2 for n in sizes]

    k, fitted = analyze_complexity(sizes, times)

    assert k == pytest.approx(2.0)
    np.testing.assert_allclose(fitted, times, rtol=1e-6)


def test_benchmarks_and_report(tmp_path):
    """
    A tiny end-to-end run produces consistent result dictionaries, a table and a plot.
    """
    sizes = [10, 20]
    runtime = benchmark_runtime(sizes, density=0.2, num_trials=2)
    memory = benchmark_memory(sizes, density=0.2)

    assert runtime['sizes'] == sizes
    assert len(runtime['mean_times']) == len(runtime['dense_times']) == 2
    assert len(memory['peak_memory_mb']) == 2

    table = generate_markdown_table(runtime, memory)
    assert table.count("\n") == 3

    fitted = np.array(runtime['mean_times'])
    figure = plot_results(runtime, memory, fitted, 2.0, output_dir=tmp_path)
    assert figure.exists()
