"""
Pydantic schemas for directivity inputs and source spectrum parameters.

Defines data models for a single directivity sample and for the
vehicle spectrum parameters carried alongside emission data.
"""
import math
from typing import List
from pydantic import BaseModel, Field, field_validator


class DirectivitySample(BaseModel):
    """
    Schema for one measured directivity sample.

    Angles are radians: theta in (-pi/2, pi/2], phi in [0, 2pi). The
    attenuation list holds one dB value per supported frequency band.

    Example:
        >>> sample = DirectivitySample(theta=0.0, phi=1.5708, attenuation=[-3.0, -4.5, -6.0])
    """
    theta: float = Field(..., gt=-math.pi / 2, le=math.pi / 2, description="Elevation angle (radians)")
    phi: float = Field(..., ge=0.0, lt=2 * math.pi, description="Azimuth angle (radians)")
    attenuation: List[float] = Field(..., min_length=1, description="Attenuation per band (dB)")

    @field_validator('attenuation')
    @classmethod
    def validate_finite(cls, v: List[float]) -> List[float]:
        """Attenuation values must be finite numbers."""
        if not all(math.isfinite(a) for a in v):
            raise ValueError("Attenuation values must be finite")
        return v

    model_config = {
        "frozen": True,
    }


class SpectreParameters(BaseModel):
    """
    Schema for vehicle emission spectrum parameters.

    Example:
        >>> params = SpectreParameters(
        ...     type_vehicle='1',
        ...     ref='ref_1',
        ...     running_condition=1,
        ...     source_height='0.05',
        ...     spectre_ver=2,
        ...     freq_id=3
        ... )
    """
    type_vehicle: str = Field(..., min_length=1, description="Vehicle category")
    ref: str = Field(..., description="Reference of the emission law")
    running_condition: int = Field(..., ge=0, description="Running condition code")
    source_height: str = Field(..., description="Source height label")
    spectre_ver: int = Field(..., ge=0, description="Spectrum version")
    freq_id: int = Field(..., ge=0, description="Frequency band identifier")

    model_config = {
        "frozen": True,
        "str_strip_whitespace": True,
    }
