"""Worker pool sizing."""

import os

MAX_CPUS = 4


def get_num_cpu() -> int:
    """Return the number of workers: one less than the CPUs, at most four."""
    return min((os.cpu_count() or 1) - 1, MAX_CPUS)