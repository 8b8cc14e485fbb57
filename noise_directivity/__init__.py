"""
Discrete sound source directivity for noise propagation.

Stores measured attenuation spectra over the sphere and answers
attenuation queries in any direction and at any frequency.
"""
from noise_directivity.core.directivity import (
    DirectionAttributes,
    DirectivityRecord,
    DiscreteDirectionAttributes,
    InterpolationMethod,
)
from noise_directivity.core.frequency import FrequencyAxis
from noise_directivity.utils.config import DirectivityConfig, load_config
from noise_directivity.utils.logging_config import configure_logging_from_config
from noise_directivity.utils.exceptions import (
    DirectivityError,
    DataValidationError,
    FrequencyAxisError,
)

__version__ = "0.1.0"

__all__ = [
    'DirectionAttributes',
    'DirectivityRecord',
    'DiscreteDirectionAttributes',
    'InterpolationMethod',
    'FrequencyAxis',
    'DirectivityConfig',
    'load_config',
    'configure_logging_from_config',
    'DirectivityError',
    'DataValidationError',
    'FrequencyAxisError',
]
