import matplotlib

matplotlib.use("Agg")

import pytest

from nonoline.placements import min_span


def all_constraints(length):
    """长度为 length 的行上所有放得下的约束（含空约束）。"""
    results = [()]

    def extend(prefix):
        for run in range(1, length + 1):
            candidate = prefix + (run,)
            if min_span(candidate) > length:
                break
            results.append(candidate)
            extend(candidate)

    extend(())
    return results


@pytest.fixture
def constraints_for():
    return all_constraints
