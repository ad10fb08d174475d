#!/usr/bin/env python3
"""
Performance evaluation script for sparse matrix multiplication.

This script benchmarks the runtime and peak memory of `SparseMatrix.multiply`
on random square matrices of fixed density across a range of sizes, estimates
the empirical complexity exponent and plots the results. A dense NumPy product
of the same operands is timed alongside as a reference point.
"""

import logging
import random
import time
import tracemalloc
from pathlib import Path
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from sparse_matrix_calc.structures.sparse_matrix import SparseMatrix
from sparse_matrix_calc.utils.logging_utils import setup_logger

logger = logging.getLogger(__name__)


def generate_random_sparse_matrix(size: int, density: float, seed: Optional[int] = None, value_range: int = 9) -> SparseMatrix:
    """
    Generate a random square sparse matrix.

    Parameters
    ----------
    size : int
        Number of rows and columns ($N$).
    density : float
        Fraction of cells that receive a nonzero value, in $[0, 1]$.
    seed : int, optional
        Seed for the random number generator for reproducibility.
    value_range : int, optional
        Nonzero values are drawn from `-value_range..value_range`.

    Returns
    -------
    SparseMatrix
        A `size x size` matrix with about `density * size**2` nonzero entries.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density}")

    rng = random.Random(seed)
    values = [v for v in range(-value_range, value_range + 1) if v != 0]
    num_cells = size * size
    num_nonzero = int(round(density * num_cells))

    matrix = SparseMatrix(size, size)
    for cell in rng.sample(range(num_cells), num_nonzero):
        matrix.set_element(cell // size, cell % size, rng.choice(values))

    return matrix


def benchmark_runtime(sizes: list[int], density: float = 0.01, num_trials: int = 3) -> dict:
    """
    Benchmark the mean multiplication runtime across matrix sizes ($N$).

    Parameters
    ----------
    sizes : list of int
        Matrix sizes ($N$) to test.
    density : float, optional
        Density of both operands. The default is 0.01.
    num_trials : int, optional
        Number of multiplications per size for averaging. The default is 3.

    Returns
    -------
    dict
        'sizes', 'mean_times', 'std_times', 'dense_times' (mean NumPy time)
        and 'result_nnz' (nonzeros of the last product per size).
    """
    if num_trials < 1:
        raise ValueError(f"num_trials must be at least 1, got {num_trials}")

    results = {
        'sizes': sizes,
        'mean_times': [],
        'std_times': [],
        'dense_times': [],
        'result_nnz': []
    }

    for n in sizes:
        logger.info(f"Benchmarking N={n}...")
        trial_times = []
        dense_times = []

        for trial in tqdm(range(num_trials), desc=f"N={n}", leave=False):
            # Operands change per trial to avoid caching effects
            left = generate_random_sparse_matrix(n, density, seed=42 + trial)
            right = generate_random_sparse_matrix(n, density, seed=1042 + trial)

            start = time.perf_counter()
            product = left.multiply(right)
            trial_times.append(time.perf_counter() - start)

            left_dense, right_dense = left.to_dense(), right.to_dense()
            start = time.perf_counter()
            dense_product = left_dense @ right_dense
            dense_times.append(time.perf_counter() - start)

            if not np.array_equal(product.to_dense(), dense_product):
                raise AssertionError(f"Sparse and dense products differ for N={n}, trial {trial}")

        results['mean_times'].append(float(np.mean(trial_times)))
        results['std_times'].append(float(np.std(trial_times)))
        results['dense_times'].append(float(np.mean(dense_times)))
        results['result_nnz'].append(product.nnz)

        logger.info(f"  Sparse mean: {results['mean_times'][-1]:.4f}s ± {results['std_times'][-1]:.4f}s")
        logger.info(f"  Dense mean:  {results['dense_times'][-1]:.4f}s")

    return results


def benchmark_memory(sizes: list[int], density: float = 0.01) -> dict:
    """
    Benchmark peak memory allocated by one multiplication per size ($N$).

    Uses `tracemalloc` around the `multiply` call only.

    Returns
    -------
    dict
        'sizes' and 'peak_memory_mb'.
    """
    results = {
        'sizes': sizes,
        'peak_memory_mb': []
    }

    for n in tqdm(sizes, desc="Memory"):
        left = generate_random_sparse_matrix(n, density, seed=42)
        right = generate_random_sparse_matrix(n, density, seed=1042)

        tracemalloc.start()
        left.multiply(right)
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        results['peak_memory_mb'].append(peak / 1024 ** 2)
        logger.info(f"  N={n} peak memory: {results['peak_memory_mb'][-1]:.3f} MB")

    return results


def analyze_complexity(sizes: list[int], times: list[float]) -> tuple[float, np.ndarray]:
    """
    Fit runtimes to $T = c N^{k}$ by linear regression in log-log space.

    Returns
    -------
    tuple of (float, numpy.ndarray)
        The exponent $k$ and the fitted times for each size.
    """
    log_n = np.log(sizes)
    log_time = np.log(times)

    k, c = np.polyfit(log_n, log_time, 1)
    fitted_times = np.exp(c) * np.array(sizes, dtype=float) ** k

    logger.info(f"Empirical complexity: O(N^{k:.2f}) (dense reference: O(N^3))")

    return float(k), fitted_times


def plot_results(runtime_results: dict, memory_results: dict, fitted_times: np.ndarray, complexity_k: float,
                 output_dir: Path = Path('performance_results')) -> Path:
    """
    Save runtime and memory plots to `output_dir/performance_analysis.png`.

    Returns
    -------
    Path
        The path of the saved figure.
    """
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    ax1 = axes[0]
    sizes = runtime_results['sizes']
    ax1.errorbar(sizes, runtime_results['mean_times'], yerr=runtime_results['std_times'], fmt='o-',
                 capsize=5, label='Sparse multiply', linewidth=2, markersize=8)
    ax1.plot(sizes, fitted_times, '--', label=f'Fitted $O(N^{{{complexity_k:.2f}}})$', linewidth=2, alpha=0.7)
    ax1.plot(sizes, runtime_results['dense_times'], 's:', label='NumPy dense', linewidth=2)
    ax1.set_xlabel('Matrix Size ($N$)', fontsize=12)
    ax1.set_ylabel('Runtime (seconds)', fontsize=12)
    ax1.set_title('Runtime Performance (Log-Log)', fontsize=14, fontweight='bold')
    ax1.legend(fontsize=10)
    ax1.grid(True, alpha=0.3)
    ax1.set_yscale('log')
    ax1.set_xscale('log')

    ax2 = axes[1]
    ax2.plot(sizes, memory_results['peak_memory_mb'], 's-', linewidth=2, markersize=8, color='orange')
    ax2.set_xlabel('Matrix Size ($N$)', fontsize=12)
    ax2.set_ylabel('Peak Memory (MB)', fontsize=12)
    ax2.set_title('Memory Usage (Log-Log)', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)
    ax2.set_yscale('log')
    ax2.set_xscale('log')

    plt.tight_layout()

    output_dir.mkdir(parents=True, exist_ok=True)
    figure_path = output_dir / 'performance_analysis.png'
    fig.savefig(figure_path, dpi=300, bbox_inches='tight')
    plt.close(fig)
    logger.info(f"Plot saved to: {figure_path}")

    return figure_path


def generate_markdown_table(runtime_results: dict, memory_results: dict) -> str:
    """Render the benchmark results as a Markdown table."""
    lines = [
        "| Size ($N$) | Sparse (s) | Dense (s) | Peak Memory (MB) | Result nnz |",
        "|------------|------------|-----------|------------------|------------|",
    ]
    for i, n in enumerate(runtime_results['sizes']):
        lines.append(
            f"| {n:10d} | {runtime_results['mean_times'][i]:.4f} ± {runtime_results['std_times'][i]:.4f} "
            f"| {runtime_results['dense_times'][i]:.4f} | {memory_results['peak_memory_mb'][i]:16.3f} "
            f"| {runtime_results['result_nnz'][i]:10d} |"
        )
    return "\n".join(lines)


def main():
    """
    Main performance evaluation workflow.

    Executes runtime and memory benchmarks, analyzes the empirical complexity,
    generates plots, and prints the results table.
    """
    setup_logger(__name__, level=logging.INFO, enable_file_logging=False)

    sizes = [100, 200, 400, 800]  # Adjust based on time constraints
    density = 0.01
    num_trials = 3

    logger.info(f"Sizes: {sizes}, density: {density}, trials per size: {num_trials}")

    with logging_redirect_tqdm():
        runtime_results = benchmark_runtime(sizes, density, num_trials)
        memory_results = benchmark_memory(sizes, density)

    complexity_k, fitted_times = analyze_complexity(runtime_results['sizes'], runtime_results['mean_times'])
    plot_results(runtime_results, memory_results, fitted_times, complexity_k)

    print(generate_markdown_table(runtime_results, memory_results))


if __name__ == "__main__":
    main()
