# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

import numpy as np


def gemm_golden(lhs, rhs):
    assert (
        len(lhs.shape) == 2 and len(rhs.shape) == 2
    ), f"gemm_golden only computes 2D @ 2D GEMM. Received {lhs.shape} @ {rhs.shape}"
    M, K = lhs.shape
    _K, N = rhs.shape
    assert K == _K, f"lhs and rhs shape mismatch: {lhs.shape}, {rhs.shape}"
    result = np.matmul(lhs.astype(np.float64), rhs.astype(np.float64))
    return result.astype(np.float32)


def check_correctness(desired, actual, atol, rtol):
    """Raise AssertionError with mismatch statistics when ``actual`` is not close to ``desired``."""
    assert desired.shape == actual.shape, f"Shape mismatch: desired {desired.shape}, actual {actual.shape}"
    desired = desired.astype(np.float64)
    actual = actual.astype(np.float64)
    abs_diff = np.abs(actual - desired)
    # Avoid division by zero in relative difference calculation
    rel_diff = np.divide(abs_diff, np.abs(desired), out=np.zeros_like(abs_diff), where=np.abs(desired) != 0)

    # Calculate tolerance threshold using numpy's allclose formula
    tolerance = atol + rtol * np.abs(desired)
    mismatches = abs_diff > tolerance
    total_mismatches = int(np.sum(mismatches))
    total_elements = desired.size

    if total_mismatches > 0:
        mismatch_percentage = (total_mismatches / total_elements) * 100
        rows, cols = np.where(mismatches)
        r, c = rows[0], cols[0]
        err_msg = (
            f"Mismatched elements: {total_mismatches} / {total_elements} ({mismatch_percentage:.6f}%)\n"
            f"Max absolute difference: {np.max(abs_diff)}\n"
            f"Max relative difference: {np.max(rel_diff)}\n"
            f"First mismatch at [{r}, {c}]\n  Desired: {desired[r, c]}\n  Actual:  {actual[r, c]}"
        )
        raise AssertionError(err_msg)
