"""A Counter keeps a count of how often various objects are observed."""

import logging
import numbers
from collections.abc import Iterable
from copy import deepcopy
from typing import Any, Mapping, TextIO, get_args, get_origin

import sympy as sp

logger = logging.getLogger(__name__)

SHOW_ALL_SEPARATOR = " ==> "
CSV_SEPARATOR = ", "


class Counter[T](dict[T, int]):
    """A multiset of hashable items, created with a key type such as
    `c = Counter[str]()`. A bare `Counter()` counts keys of any type.

    Counts are retrieved with square brackets like a dictionary: `c["hello"]`.
    It is safe to retrieve the count of an object never encountered, e.g.
    `c["goodbye"]`; in this case `0` is returned and no entry is created.

    Counts may be assigned with `c[key] = amount` (negative amounts are stored
    as zero), but the more likely use case is `c[key] += 1` or `c.incr(key)`
    to count each time `key` is encountered.
    """

    def __init__(self, counts: Mapping[T, int] | Iterable[T] | None = None) -> None:
        super().__init__()
        if counts is None:
            return
        if isinstance(counts, Mapping):
            for key, value in counts.items():
                self[key] = value
        elif isinstance(counts, Iterable):
            self.update(counts)
        else:
            raise TypeError(
                f"Counter expects a mapping of counts or an iterable of keys, "
                f"got {type(counts).__name__}"
            )

    def __missing__(self, key: T) -> int:
        "The count of elements not in the Counter is zero."
        # Needed so that self[missing_item] does not raise KeyError
        return 0

    def __setitem__(self, key: T, value: int) -> None:
        if not isinstance(value, numbers.Integral):
            raise TypeError(
                f"Counts must be integers, got {type(value).__name__} for {key!r}"
            )
        if value < 0:
            logger.debug(f"Clamping negative count {value} for {key!r} to zero")
            value = 0
        super().__setitem__(key, int(value))

    def get(self, key: T, default: int = 0) -> int:
        return super().get(key, default)

    def setdefault(self, key: T, default: int = 0) -> int:
        if key not in self:
            self[key] = default
        return self[key]

    @property
    def key_type(self) -> Any:
        """The key type the Counter was created with, `Any` if none was given."""
        # Set by the generic alias when created as Counter[T]()
        alias = self.__dict__.get("__orig_class__")
        if alias is not None and (args := get_args(alias)):
            return args[0]
        return Any

    @property
    def type_name(self) -> str:
        key_type = self.key_type
        return getattr(key_type, "__name__", None) or repr(key_type)

    def _is_single_key(self, x: object) -> bool:
        """Decide whether `incr(x)` counts `x` itself or the items it yields."""
        if isinstance(x, (str, bytes)) or not isinstance(x, Iterable):
            return True
        key_type = get_origin(self.key_type) or self.key_type
        return (
            key_type is not Any
            and isinstance(key_type, type)
            and isinstance(x, key_type)
        )

    def incr(self, x: Any) -> None:
        """`c.incr(x)` increments the count for `x` by 1. This is equivalent
        to `c[x] += 1`.

        `c.incr(items)` is more useful. Here `items` is an iterable collection
        of keys and the count of each element in `items` is incremented.

        `c.incr(d)` where `d` is another Counter increments `c` by the amounts
        held in `d`.

        A string, or a value of the Counter's own key type, is always counted
        as a single key. Use `update` to force the bulk form.
        """
        if not isinstance(x, Mapping) and self._is_single_key(x):
            self[x] += 1
        else:
            self.update(x)

    def update(self, other: Mapping[T, int] | Iterable[T]) -> None:
        """Merge a Counter (or any mapping of counts), or count every item of an iterable."""
        if isinstance(other, Mapping):
            for key in other.keys():
                self[key] += other[key]
        else:
            for key in other:
                self[key] += 1

    def total(self) -> int:
        """The total of the counts for all things in the Counter."""
        return sum(self.values())

    def nnz(self) -> int:
        """The number of keys with nonzero count."""
        return sum(1 for value in self.values() if value != 0)

    def collect(self) -> list[T]:
        """A list holding every key repeated according to its multiplicity."""
        result: list[T] = []
        for key, count in self.items():
            result.extend([key] * count)
        return result

    def mean(self, exact: bool = False) -> Any:
        """The weighted average of the counted objects, which must be numbers;
        the multiplicity of each acts as its weight.

        With `exact=True` the average is computed with sympy, giving a
        `Rational` for integer or rational keys instead of a float.
        Raises `ZeroDivisionError` when the total count is zero.
        """
        for key in self.keys():
            if not isinstance(key, numbers.Number):
                raise TypeError(
                    f"Cannot take the mean of non-numeric key {key!r} "
                    f"in Counter{{{self.type_name}}}"
                )
        size = self.total()
        if size == 0:
            raise ZeroDivisionError(
                f"Mean of Counter{{{self.type_name}}} with total count zero"
            )

        weighted = sum((key * count for key, count in self.items()), 0)
        if exact:
            return sp.sympify(weighted) / sp.Integer(size)
        return weighted / size

    def clean(self) -> None:
        """Remove all keys whose count is zero. Lookups are unaffected.

        Generally it is not necessary to invoke this unless one suspects that
        the Counter holds *a lot* of keys associated with a zero value.
        """
        zeros = [key for key, value in self.items() if value == 0]
        for key in zeros:
            del self[key]
        if zeros:
            logger.debug(f"Removed {len(zeros)} zero entries from {self!r}")

    def copy(self) -> "Counter[T]":
        """A deep copy which keeps the key type."""
        return deepcopy(self)

    def _sorted_keys(self) -> list[T]:
        keys = list(self.keys())
        try:
            return sorted(keys)
        except (TypeError, ArithmeticError):
            # Unorderable keys are listed in storage order
            logger.debug(f"Keys of {self!r} are not orderable, keeping storage order")
            return keys

    def show_all(self, file: TextIO | None = None) -> None:
        """Print every object held in the Counter with a nonzero count."""
        print(f"Counter{{{self.type_name}}} with these nonzero values:", file=file)
        for key in self._sorted_keys():
            if self[key] != 0:
                print(f"{key}{SHOW_ALL_SEPARATOR}{self[key]}", file=file)

    def csv_print(self, file: TextIO | None = None) -> None:
        """Print the Counter in a manner suitable for import into a spreadsheet.

        Zero entries are included; keys are not quoted."""
        for key in self._sorted_keys():
            print(f"{key}{CSV_SEPARATOR}{self[key]}", file=file)

    def __repr__(self) -> str:
        n = len(self)
        word = "entry" if n == 1 else "entries"
        return f"Counter{{{self.type_name}}} with {n} {word}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        for key in self.keys() | other.keys():
            if self.get(key, 0) != other.get(key, 0):
                return False
        return True

    # dict brings its own __ne__, which would compare zero entries
    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        """Hashing a Counter first applies `clean` to it, so that equal
        Counters hash the same.

        Note that this MUTATES the Counter: its zero entries are deleted.
        """
        self.clean()
        return hash(frozenset(self.items()))

    def __add__(self, other: "Counter[T]") -> "Counter[T]":
        if not isinstance(other, Counter):
            return NotImplemented
        result = self.copy()
        result.update(other)
        return result

    def __iadd__(self, other: "Counter[T]") -> "Counter[T]":
        if not isinstance(other, Counter):
            return NotImplemented
        self.update(other)
        return self

    # Union replaces counts like dict does, but every count goes through __setitem__
    def __or__(self, other: Mapping[T, int]) -> "Counter[T]":
        if not isinstance(other, Mapping):
            return NotImplemented
        result = self.copy()
        result |= other
        return result

    def __ior__(self, other: Mapping[T, int]) -> "Counter[T]":
        if not isinstance(other, Mapping):
            return NotImplemented
        for key, value in other.items():
            self[key] = value
        return self


def counter(items: Iterable[Any]) -> Counter[Any]:
    """Create a Counter whose elements are the members of `items` with the
    appropriate multiplicities. `items` may also be a set, in which case the
    multiplicities will all be 1.

    The key type is the type shared by all items, or `Any` for mixed input."""
    items = list(items)
    item_types = {type(item) for item in items}
    key_type = item_types.pop() if len(item_types) == 1 else Any
    result = Counter[key_type]()
    result.update(items)
    return result


def incr(c: Counter[Any], x: Any) -> None:
    c.incr(x)


def clean(c: Counter[Any]) -> None:
    c.clean()


def mean(c: Counter[Any], exact: bool = False) -> Any:
    return c.mean(exact=exact)


def show_all(c: Counter[Any], file: TextIO | None = None) -> None:
    c.show_all(file=file)


def csv_print(c: Counter[Any], file: TextIO | None = None) -> None:
    c.csv_print(file=file)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    c = counter(["a", "b", "a", "c", "a"])
    c["z"] = 0
    print(c)
    c.show_all()
    c.csv_print()
    print(counter([1, 2, 2, 3]).mean(exact=True))
