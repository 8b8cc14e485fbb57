"""
Data input module.

Provides Pydantic schemas for directivity samples and spectrum
parameters, and adapters building directivity stores from DataFrames.
"""
from noise_directivity.data.schemas import DirectivitySample, SpectreParameters
from noise_directivity.data.adapters import (
    records_from_dataframe,
    directivity_from_dataframe,
)

__all__ = [
    'DirectivitySample',
    'SpectreParameters',
    'records_from_dataframe',
    'directivity_from_dataframe',
]
