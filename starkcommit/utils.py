"""Index permutations and small algebraic helpers shared across the package."""

from __future__ import annotations

import functools
import itertools
import operator
from typing import Any, Callable, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

__all__ = [
    "bit_reverse_index",
    "previous_bit_reversed_circle_domain_index",
    "offset_bit_reversed_circle_domain_index",
    "circle_domain_order_to_coset_order",
    "coset_order_to_circle_domain_order",
    "bit_reverse",
    "generate_powers",
    "shifted_secure_combination",
    "fold",
    "repeat_value",
]


def bit_reverse_index(i: int, log_size: int) -> int:
    """Return `i` with its lowest `log_size` bits reversed.

    A `log_size` of zero leaves `i` untouched.
    """
    if log_size == 0:
        return i
    bits = format(i & ((1 << log_size) - 1), f"0{log_size}b")
    return int(bits[::-1], 2)


def previous_bit_reversed_circle_domain_index(
    i: int, domain_log_size: int, eval_log_size: int
) -> int:
    """Index of the previous element of a bit reversed evaluation relative to a smaller domain."""
    return offset_bit_reversed_circle_domain_index(i, domain_log_size, eval_log_size, -1)


def offset_bit_reversed_circle_domain_index(
    i: int, domain_log_size: int, eval_log_size: int, offset: int
) -> int:
    """Index of the element `offset` steps away in a bit reversed evaluation.

    Steps are measured in the smaller domain of log size `domain_log_size`.
    """
    index = bit_reverse_index(i, eval_log_size)
    half_size = 1 << (eval_log_size - 1)
    step_size = offset * (1 << (eval_log_size - domain_log_size - 1))
    if index < half_size:
        index = (index + step_size) % half_size
    else:
        index = (index - step_size) % half_size + half_size
    return bit_reverse_index(index, eval_log_size)


def circle_domain_order_to_coset_order(values: Sequence[T]) -> list[T]:
    """Reorder values given in circle domain order into coset order."""
    half = len(values) // 2
    pairs = zip(values[:half], reversed(values))
    return [value for pair in pairs for value in pair]


def coset_order_to_circle_domain_order(values: Sequence[T]) -> list[T]:
    """Reorder values given in coset order into circle domain order."""
    half = len(values) // 2
    first = list(values[0 : 2 * half : 2])
    second = list(itertools.islice(reversed(values), 0, None, 2))[:half]
    return first + second


def bit_reverse(values: MutableSequence[Any]) -> None:
    """Apply the bit-reversal permutation to `values` in place.

    Raises ValueError if the length is not a power of two.
    """
    n = len(values)
    if n == 0 or n & (n - 1):
        raise ValueError(f"length {n} is not a power of two")
    log_n = n.bit_length() - 1
    values[:] = [values[bit_reverse_index(i, log_n)] for i in range(n)]


def generate_powers(felt: T, n_powers: int, one: T) -> list[T]:
    """Return `[one, felt, felt**2, ...]` with `n_powers` elements."""
    powers = itertools.accumulate(itertools.repeat(felt), operator.mul, initial=one)
    return list(itertools.islice(powers, n_powers))


def shifted_secure_combination(values: Sequence[Any], alpha: T, z: T, zero: T) -> T:
    """Combine `values` Horner-style with `alpha`, then subtract `z`."""
    combined = functools.reduce(lambda acc, value: acc * alpha + value, values, zero)
    return combined - z


def fold(values: Sequence[Any], folding_factors: Sequence[Any]) -> Any:
    """Fold values hierarchically, one folding factor per tree level.

    The first factor combines the two halves, the last combines adjacent pairs.
    Raises ValueError unless there are exactly `2 ** len(folding_factors)` values.
    """
    n = len(values)
    if n != 1 << len(folding_factors):
        raise ValueError(
            f"{n} values cannot be folded with {len(folding_factors)} factors"
        )
    if n == 1:
        return values[0]
    factor, rest = folding_factors[0], folding_factors[1:]
    half = n // 2
    return fold(values[:half], rest) + fold(values[half:], rest) * factor


def repeat_value(values: Sequence[T], duplicity: int) -> list[T]:
    """Repeat each value `duplicity` times in sequence."""
    return [value for value in values for _ in range(duplicity)]


_Combine = Callable[[Any, Any], Any]