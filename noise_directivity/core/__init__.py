"""
Core directivity modules.

Contains the directivity store and resolver, the frequency axis and the
spherical and decibel helpers they rely on.
"""
from noise_directivity.core.spherical import (
    angular_distance,
    db_to_w,
    w_to_db,
)
from noise_directivity.core.frequency import FrequencyAxis
from noise_directivity.core.directivity import (
    DirectionAttributes,
    DirectivityRecord,
    DiscreteDirectionAttributes,
    InterpolationMethod,
    coerce_interpolation_method,
)

__all__ = [
    'angular_distance',
    'db_to_w',
    'w_to_db',
    'FrequencyAxis',
    'DirectionAttributes',
    'DirectivityRecord',
    'DiscreteDirectionAttributes',
    'InterpolationMethod',
    'coerce_interpolation_method',
]
