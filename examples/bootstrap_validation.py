"""
Validation of the Nadaraya-Watson estimate and its bootstrap intervals

Uses synthetic data where the TRUE function is known. We verify:

1. CONSISTENCY: With h = O(n^(-1/5)), MSE decreases as n grows
2. CONFIDENCE INTERVAL COVERAGE: 95% bootstrap bands cover the truth
   at most interior points
3. BIAS-VARIANCE TRADEOFF: Wider bandwidth gives narrower bands
4. REPRODUCIBILITY: Seeded bootstrap is identical with 1 or 4 threads
"""

import logging
from dataclasses import dataclass

import numpy as np

from nadaraya_watson import nadaraya_watson


@dataclass
class ValidationResult:
    """Result of a validation check."""
    check_name: str
    passed: bool
    metric: float
    threshold: float
    details: str


def true_function(x: np.ndarray) -> np.ndarray:
    """Known test function: sin(x) on [0, 10]."""
    return np.sin(x)


def generate_data(
    n: int,
    noise_std: float = 0.2,
    seed: int | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Sorted uniform design with Gaussian noise around sin(x)."""
    rng = np.random.default_rng(seed)
    x = np.sort(rng.uniform(0, 10, n))
    y = true_function(x) + rng.normal(scale=noise_std, size=n)
    return x, y


def check_consistency() -> ValidationResult:
    """
    Verify that MSE → 0 as n → ∞ with h ∝ n^(-1/5).
    """
    print("\n" + "="*70)
    print("CHECK 1: CONSISTENCY (MSE decreases with sample size)")
    print("="*70)

    x_eval = np.linspace(1, 9, 200)
    sample_sizes = [50, 200, 800, 3200]
    mse_values = []

    for n in sample_sizes:
        x, y = generate_data(n, seed=42)
        bandwidth = 1.5 * n ** (-1 / 5)
        y_pred = nadaraya_watson(x, y, x_eval, bandwidth)["y_pred"]
        mse = np.mean((y_pred - true_function(x_eval)) ** 2)
        mse_values.append(mse)
        print(f"  n={n:5d}: MSE = {mse:.6f}, bandwidth = {bandwidth:.4f}")

    improvement_ratio = mse_values[0] / mse_values[-1]
    passed = improvement_ratio > 2.0

    print(f"\n  MSE improvement: {improvement_ratio:.2f}x (first to last)")
    print(f"  Result: {'PASS' if passed else 'FAIL'}")

    return ValidationResult(
        check_name="Consistency",
        passed=passed,
        metric=improvement_ratio,
        threshold=2.0,
        details=f"MSE improved {improvement_ratio:.2f}x from n=50 to n=3200"
    )


def check_interval_coverage() -> ValidationResult:
    """
    Pointwise coverage of the true function by 95% bootstrap bands.

    The percentile bootstrap captures variance, not smoothing bias, so a
    small bandwidth is used to keep bias minor.
    """
    print("\n" + "="*70)
    print("CHECK 2: CONFIDENCE INTERVAL COVERAGE (target 95%)")
    print("="*70)

    x_eval = np.linspace(1, 9, 40)
    n_trials = 20
    covered = []

    for trial in range(n_trials):
        x, y = generate_data(300, seed=trial)
        result = nadaraya_watson(
            x, y, x_eval, 0.3, n_boot=200, conf_level=0.95, random_state=trial
        )
        truth = true_function(x_eval)
        covered.append((result["lower"] <= truth) & (truth <= result["upper"]))

    coverage = float(np.mean(covered))
    passed = coverage > 0.8

    print(f"  Empirical coverage: {coverage:.1%} over {n_trials} trials")
    print(f"  Result: {'PASS' if passed else 'FAIL'}")

    return ValidationResult(
        check_name="CI Coverage",
        passed=passed,
        metric=coverage,
        threshold=0.8,
        details=f"Coverage {coverage:.1%} (nominal 95%)"
    )


def check_bias_variance_tradeoff() -> ValidationResult:
    """
    Larger bandwidth averages more points, so the bands narrow.
    """
    print("\n" + "="*70)
    print("CHECK 3: BIAS-VARIANCE TRADEOFF (band width vs bandwidth)")
    print("="*70)

    x, y = generate_data(200, seed=7)
    x_eval = np.linspace(1, 9, 50)
    widths = []

    for bandwidth in [0.1, 0.3, 1.0]:
        result = nadaraya_watson(x, y, x_eval, bandwidth, n_boot=200, random_state=0)
        width = float(np.mean(result["upper"] - result["lower"]))
        widths.append(width)
        print(f"  bandwidth={bandwidth:.1f}: mean band width = {width:.4f}")

    passed = widths[0] > widths[1] > widths[2]
    ratio = widths[0] / widths[-1]

    print(f"  Result: {'PASS' if passed else 'FAIL'}")

    return ValidationResult(
        check_name="Bias-Variance",
        passed=passed,
        metric=ratio,
        threshold=1.0,
        details=f"Band width ratio h=0.1 / h=1.0 = {ratio:.2f}"
    )


def check_reproducibility() -> ValidationResult:
    """
    Seeded bootstrap does not depend on the number of threads.
    """
    print("\n" + "="*70)
    print("CHECK 4: REPRODUCIBILITY (sequential vs 4 threads)")
    print("="*70)

    x, y = generate_data(150, seed=3)
    x_eval = np.linspace(0, 10, 30)

    sequential = nadaraya_watson(x, y, x_eval, 0.5, n_boot=300, random_state=99)
    threaded = nadaraya_watson(
        x, y, x_eval, 0.5, n_boot=300, random_state=99, n_jobs=4
    )
    max_diff = float(
        max(
            np.max(np.abs(sequential["lower"] - threaded["lower"])),
            np.max(np.abs(sequential["upper"] - threaded["upper"])),
        )
    )
    passed = max_diff == 0.0

    print(f"  Max difference: {max_diff:.3g}")
    print(f"  Result: {'PASS' if passed else 'FAIL'}")

    return ValidationResult(
        check_name="Reproducibility",
        passed=passed,
        metric=max_diff,
        threshold=0.0,
        details="Bounds identical" if passed else f"Max difference {max_diff:.3g}"
    )


def run_full_validation():
    """Run all validation checks and produce summary report."""
    print("\n" + "="*70)
    print("NADARAYA-WATSON VALIDATION SUITE")
    print("="*70)

    results = [
        check_consistency(),
        check_interval_coverage(),
        check_bias_variance_tradeoff(),
        check_reproducibility(),
    ]

    print("\n" + "="*70)
    print("VALIDATION SUMMARY")
    print("="*70)

    n_passed = sum(r.passed for r in results)
    n_total = len(results)

    print(f"\n{'Check':<30} {'Result':<10} {'Details'}")
    print("-" * 70)

    for r in results:
        status = "PASS" if r.passed else "FAIL"
        print(f"{r.check_name:<30} {status:<10} {r.details}")

    print("-" * 70)
    print(f"\nOverall: {n_passed}/{n_total} checks passed")

    return results


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    results = run_full_validation()
