"""Multiset counting: keep a count of how often objects are observed."""

from counters.counter import (
    Counter,
    clean,
    counter,
    csv_print,
    incr,
    mean,
    show_all,
)

__all__ = ["Counter", "clean", "counter", "csv_print", "incr", "mean", "show_all"]
