"""
Frequency axis of a directivity table.

Maps a requested frequency to the column holding its attenuation: exact
values resolve through a dict, anything else resolves to the nearest
supported band.
"""
import bisect
import math
from typing import Dict, Iterable, List, Sequence

import numpy as np

from noise_directivity.utils.exceptions import FrequencyAxisError


class FrequencyAxis:
    """
    Immutable ascending sequence of supported frequencies (Hz).

    Args:
        frequencies: Supported band frequencies, ascending, no duplicates
        validate: If True, reject malformed axes with FrequencyAxisError.
            If False the caller guarantees a well-formed axis; on duplicates
            the exact map keeps the last column.

    Example:
        >>> axis = FrequencyAxis([100.0, 200.0, 400.0])
        >>> axis.index_of(200.0)
        1
        >>> axis.index_of(290.0)
        1
    """

    def __init__(self, frequencies: Sequence[float], validate: bool = True):
        values = [float(f) for f in frequencies]
        if validate:
            _validate_axis(values)

        self._values: List[float] = values
        array = np.asarray(values, dtype=float)
        array.flags.writeable = False
        self._array = array
        self._exact: Dict[float, int] = {}
        for index, frequency in enumerate(values):
            self._exact[frequency] = index

    @property
    def frequencies(self) -> np.ndarray:
        """Read-only array of supported frequencies."""
        return self._array

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, frequency) -> bool:
        return float(frequency) in self._exact

    def __repr__(self) -> str:
        return f"FrequencyAxis({self._values!r})"

    def index_of(self, frequency: float) -> int:
        """
        Column index for a requested frequency.

        Exact matches use the precomputed map. Otherwise the insertion
        point in the ascending axis is found and the closer of its two
        neighbours wins, clamped at both ends. An equidistant frequency
        resolves to the lower band.
        """
        frequency = float(frequency)
        index = self._exact.get(frequency)
        if index is not None:
            return index

        values = self._values
        last = min(bisect.bisect_left(values, frequency), len(values) - 1)
        first = max(last - 1, 0)
        if abs(values[first] - frequency) <= abs(values[last] - frequency):
            return first
        return last

    def indices_of(self, frequencies: Iterable[float]) -> List[int]:
        """Column indices for each requested frequency, in request order."""
        return [self.index_of(f) for f in frequencies]


def _validate_axis(values: List[float]) -> None:
    if not values:
        raise FrequencyAxisError("Frequency axis is empty", values)

    non_finite = [f for f in values if not math.isfinite(f)]
    if non_finite:
        raise FrequencyAxisError(f"Frequency axis holds non-finite values: {non_finite}", values)

    for previous, current in zip(values, values[1:]):
        if current == previous:
            raise FrequencyAxisError(f"Duplicate frequency in axis: {current}", values)
        if current < previous:
            raise FrequencyAxisError(
                f"Frequency axis is not ascending: {current} follows {previous}", values
            )
