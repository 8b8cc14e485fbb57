"""
Discrete source directivity over a sphere.

A directivity table holds attenuation spectra (dB per frequency band)
measured at a set of (theta, phi) directions. Queries at arbitrary
directions resolve to the four stored samples bounding the query and are
answered either by the nearest of them or by bilinear interpolation in
the power domain.

Angles are radians. theta is in (-pi/2, pi/2], 0 horizontal and pi/2
straight up; phi is in [0, 2pi), 0 front.

The store is populated once and then only read. Query methods never
mutate it, so a populated store can be shared across worker threads
without locking.
"""
import bisect
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from noise_directivity.core.frequency import FrequencyAxis
from noise_directivity.core.spherical import angular_distance, db_to_w, w_to_db
from noise_directivity.utils.exceptions import ConfigurationError, DataValidationError
from noise_directivity.utils.logging_config import get_logger

logger = get_logger(__name__)


class InterpolationMethod(IntEnum):
    """How a query between samples is resolved."""
    NEAREST = 0
    BILINEAR = 1


def _angle_key(value: float) -> Tuple[float, float]:
    # sign breaks the -0.0 / 0.0 tie, -0.0 first
    return value, math.copysign(1.0, value)


@dataclass(frozen=True, eq=False)
class DirectivityRecord:
    """
    Attenuation spectrum at one direction.

    Equality and hashing use theta and phi only, compared bit-exactly:
    -0.0 and 0.0 are different angles.

    Example:
        >>> DirectivityRecord(0.0, 0.0, [1.0, 2.0]) == DirectivityRecord(0.0, 0.0, [5.0, 5.0])
        True
    """
    theta: float
    phi: float
    attenuation: np.ndarray = field(compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'theta', float(self.theta))
        object.__setattr__(self, 'phi', float(self.phi))
        attenuation = np.array(self.attenuation, dtype=float)
        attenuation.flags.writeable = False
        object.__setattr__(self, 'attenuation', attenuation)

    def __eq__(self, other):
        if not isinstance(other, DirectivityRecord):
            return NotImplemented
        return _theta_key(self) == _theta_key(other)

    def __hash__(self):
        return hash(_theta_key(self))

    def __str__(self):
        return (
            f"DirectivityRecord{{theta={self.theta:.2f} ({math.degrees(self.theta):.2g}°), "
            f"phi={self.phi:.2f} ({math.degrees(self.phi):.2g}°), "
            f"attenuation={self.attenuation.tolist()}}}"
        )


def _theta_key(record: DirectivityRecord) -> Tuple[float, ...]:
    return _angle_key(record.theta) + _angle_key(record.phi)


def _phi_key(record: DirectivityRecord) -> Tuple[float, ...]:
    return _angle_key(record.phi) + _angle_key(record.theta)


def _wrap(index: int, size: int) -> int:
    # cyclic position: -1 -> size - 1, size -> 0
    if index < 0:
        return size + index
    if index >= size:
        return index - size
    return index


def _unit_fraction(distance: float, length: float) -> float:
    """distance / length clamped to [0, 1]; a zero-length cell edge gives 0 or 1."""
    if length == 0.0:
        return 1.0 if distance > 0.0 else 0.0
    return max(0.0, min(1.0, distance / length))


def coerce_interpolation_method(method: Union[InterpolationMethod, int, str]) -> InterpolationMethod:
    """
    Accept an InterpolationMethod, its integer code or its name.

    Raises:
        ConfigurationError: If the method is unknown
    """
    try:
        if isinstance(method, str):
            return InterpolationMethod[method.strip().upper()]
        return InterpolationMethod(method)
    except (KeyError, ValueError) as e:
        raise ConfigurationError(f"Unknown interpolation method: {method!r}") from e


class DirectionAttributes(ABC):
    """Attenuation of a sound source as a function of emission direction."""

    @abstractmethod
    def get_attenuation(self, frequency: float, phi: float, theta: float) -> float:
        """Attenuation in dB at one frequency."""

    @abstractmethod
    def get_attenuation_array(self, frequencies: Sequence[float], phi: float, theta: float) -> np.ndarray:
        """Attenuation in dB for each requested frequency."""


class DiscreteDirectionAttributes(DirectionAttributes):
    """
    Directivity table with nearest or bilinear resolution between samples.

    Records are kept in two orderings over the same set: by (theta, phi)
    and by (phi, theta). The first locates the theta bounds of a query and
    resolves corners exactly; the second locates the phi bounds.

    Args:
        direction_identifier: Identifier of this directivity pattern
        frequencies: Supported band frequencies (Hz), ascending
        interpolation_method: NEAREST (0) or BILINEAR (1, default)
        validate_frequencies: Reject malformed frequency axes

    Example:
        >>> attributes = DiscreteDirectionAttributes(1, [100.0, 200.0, 400.0])
        >>> for theta in (0.0, math.pi / 2):
        ...     for phi in (0.0, math.pi / 2):
        ...         attributes.add_directivity_record(theta, phi, [10.0, 10.0, 10.0])
        >>> round(attributes.get_attenuation(200.0, math.pi / 4, math.pi / 4), 6)
        10.0
    """

    def __init__(
        self,
        direction_identifier: int,
        frequencies: Sequence[float],
        interpolation_method: Union[InterpolationMethod, int, str] = InterpolationMethod.BILINEAR,
        validate_frequencies: bool = True,
    ):
        self._direction_identifier = direction_identifier
        self._axis = FrequencyAxis(frequencies, validate=validate_frequencies)
        self._interpolation_method = coerce_interpolation_method(interpolation_method)
        self._records_theta: List[DirectivityRecord] = []
        self._records_phi: List[DirectivityRecord] = []

    @classmethod
    def from_config(cls, direction_identifier: int, frequencies: Sequence[float], config) -> "DiscreteDirectionAttributes":
        """Build an empty store from a DirectivityConfig."""
        return cls(
            direction_identifier,
            frequencies,
            interpolation_method=config.interpolation,
            validate_frequencies=config.validate_frequencies,
        )

    @property
    def direction_identifier(self) -> int:
        return self._direction_identifier

    @property
    def frequencies(self) -> np.ndarray:
        """Frequencies of the attenuation columns."""
        return self._axis.frequencies

    @property
    def frequency_axis(self) -> FrequencyAxis:
        return self._axis

    @property
    def interpolation_method(self) -> InterpolationMethod:
        return self._interpolation_method

    def set_interpolation_method(self, method: Union[InterpolationMethod, int, str]) -> None:
        """Change the resolution method. Only call while populating the store."""
        self._interpolation_method = coerce_interpolation_method(method)

    @property
    def records_theta(self) -> Tuple[DirectivityRecord, ...]:
        """Records ordered by theta, then phi."""
        return tuple(self._records_theta)

    @property
    def records_phi(self) -> Tuple[DirectivityRecord, ...]:
        """Records ordered by phi, then theta."""
        return tuple(self._records_phi)

    def __len__(self) -> int:
        return len(self._records_theta)

    def __repr__(self) -> str:
        return (
            f"DiscreteDirectionAttributes(direction_identifier={self._direction_identifier!r}, "
            f"bands={len(self._axis)}, records={len(self)}, "
            f"interpolation_method={self._interpolation_method.name})"
        )

    # Population

    def add_directivity_record(self, theta: float, phi: float, attenuation: Sequence[float]) -> bool:
        """
        Add one attenuation sample.

        A sample at an already stored direction is ignored and the stored
        attenuation is kept.

        Args:
            theta: Elevation angle (radians), 0 horizontal, pi/2 top
            phi: Azimuth angle (radians), 0 front
            attenuation: Attenuation in dB, one value per frequency band

        Returns:
            True if the record was inserted, False if the direction exists

        Raises:
            DataValidationError: If angles are not finite or the spectrum
                length does not match the frequency axis
        """
        record = self._validated(DirectivityRecord(theta, phi, attenuation))
        index = self._theta_index(record.theta, record.phi)
        if self._matches(index, record.theta, record.phi):
            logger.debug("duplicate_directivity_record_ignored",
                         direction_id=self._direction_identifier,
                         theta=record.theta, phi=record.phi)
            return False

        phi_index = bisect.bisect_left(self._records_phi, _phi_key(record), key=_phi_key)
        self._records_theta.insert(index, record)
        self._records_phi.insert(phi_index, record)
        return True

    def add_directivity_records(self, records: Iterable[DirectivityRecord]) -> None:
        """
        Add a batch of samples, sorting each ordering once.

        Much faster than repeated add_directivity_record calls. Directions
        are not checked against existing records; the caller guarantees
        uniqueness.

        Raises:
            DataValidationError: If any record is malformed; nothing is added
        """
        batch = [self._validated(record) for record in records]
        self._records_theta.extend(batch)
        self._records_theta.sort(key=_theta_key)
        self._records_phi.extend(batch)
        self._records_phi.sort(key=_phi_key)
        logger.info("directivity_records_added",
                    direction_id=self._direction_identifier,
                    added=len(batch), total=len(self._records_theta))

    def _validated(self, record: DirectivityRecord) -> DirectivityRecord:
        if not isinstance(record, DirectivityRecord):
            raise DataValidationError(
                f"Expected DirectivityRecord, got {type(record).__name__}", invalid_rows=1
            )
        if not (math.isfinite(record.theta) and math.isfinite(record.phi)):
            raise DataValidationError(
                "Directivity angles must be finite",
                invalid_rows=1,
                details={'theta': record.theta, 'phi': record.phi}
            )
        if record.attenuation.shape != (len(self._axis),):
            raise DataValidationError(
                f"Attenuation must hold {len(self._axis)} values, got shape {record.attenuation.shape}",
                invalid_rows=1,
                details={'theta': record.theta, 'phi': record.phi}
            )
        return record

    # Lookup

    def _theta_index(self, theta: float, phi: float) -> int:
        return bisect.bisect_left(self._records_theta, _angle_key(theta) + _angle_key(phi), key=_theta_key)

    def _phi_index(self, theta: float, phi: float) -> int:
        return bisect.bisect_left(self._records_phi, _angle_key(phi) + _angle_key(theta), key=_phi_key)

    def _matches(self, index: int, theta: float, phi: float) -> bool:
        if index >= len(self._records_theta):
            return False
        record = self._records_theta[index]
        return _theta_key(record) == _angle_key(theta) + _angle_key(phi)

    def _find(self, theta: float, phi: float) -> Optional[DirectivityRecord]:
        index = self._theta_index(theta, phi)
        return self._records_theta[index] if self._matches(index, theta, phi) else None

    def _zero_record(self, theta: float, phi: float) -> DirectivityRecord:
        return DirectivityRecord(theta, phi, np.zeros(len(self._axis)))

    def get_record(
        self,
        theta: float,
        phi: float,
        interpolation_method: Optional[Union[InterpolationMethod, int, str]] = None,
    ) -> DirectivityRecord:
        """
        Resolve the attenuation spectrum in direction (theta, phi).

        The query is bounded by the samples either side of it in each
        ordering, wrapping around the ends. The four (theta, phi)
        combinations of those bounds are the cell corners. If any corner
        is not a stored sample, or the store is empty, a record with zero
        attenuation is returned. A query exactly on a stored sample returns
        that sample.

        Args:
            theta: Query theta (radians)
            phi: Query phi (radians)
            interpolation_method: Override of the store's method

        Returns:
            DirectivityRecord at the query angles (or the nearest corner)
        """
        method = (self._interpolation_method if interpolation_method is None
                  else coerce_interpolation_method(interpolation_method))
        size = len(self._records_theta)
        if size == 0:
            logger.debug("empty_directivity_table", direction_id=self._direction_identifier)
            return self._zero_record(theta, phi)

        exact = self._find(theta, phi)
        if exact is not None:
            return exact

        theta_index = self._theta_index(theta, phi)
        theta1 = self._records_theta[_wrap(theta_index, size)].theta
        theta2 = self._records_theta[_wrap(theta_index - 1, size)].theta

        phi_index = self._phi_index(theta, phi)
        phi1 = self._records_phi[_wrap(phi_index, size)].phi
        phi2 = self._records_phi[_wrap(phi_index - 1, size)].phi

        corners = [
            self._find(theta1, phi1),
            self._find(theta2, phi1),
            self._find(theta2, phi2),
            self._find(theta1, phi2),
        ]
        if any(corner is None for corner in corners):
            logger.debug("degenerate_directivity_cell",
                         direction_id=self._direction_identifier,
                         theta=theta, phi=phi)
            return self._zero_record(theta, phi)

        if method == InterpolationMethod.NEAREST:
            return self._closest_record(theta, phi, corners)
        return self._bilinear_interpolation(theta, phi, corners)

    @staticmethod
    def _closest_record(theta: float, phi: float, corners: List[DirectivityRecord]) -> DirectivityRecord:
        closest = corners[0]
        min_distance = math.inf
        for corner in corners:
            distance = angular_distance(theta, phi, corner.theta, corner.phi)
            if distance < min_distance:
                min_distance = distance
                closest = corner
        return closest

    @staticmethod
    def _bilinear_interpolation(theta: float, phi: float, corners: List[DirectivityRecord]) -> DirectivityRecord:
        c0, c1, c2, c3 = corners

        x_length = angular_distance(c1.theta, c0.phi, c0.theta, c0.phi)
        y_length = angular_distance(c0.theta, c2.phi, c0.theta, c0.phi)
        x = _unit_fraction(angular_distance(c0.theta, phi, theta, phi), x_length)
        y = _unit_fraction(angular_distance(theta, c0.phi, theta, phi), y_length)

        # weighted in the power domain
        weights = np.array([(1 - x) * (1 - y), x * (1 - y), x * y, (1 - x) * y])
        powers = db_to_w(np.vstack([c.attenuation for c in corners]))
        return DirectivityRecord(theta, phi, w_to_db(weights @ powers))

    # Query interface

    def get_attenuation(self, frequency: float, phi: float, theta: float) -> float:
        """
        Attenuation in dB at one frequency.

        Unsupported frequencies resolve to the nearest band.
        """
        record = self.get_record(theta, phi, self._interpolation_method)
        return float(record.attenuation[self._axis.index_of(frequency)])

    def get_attenuation_array(self, frequencies: Sequence[float], phi: float, theta: float) -> np.ndarray:
        """
        Attenuation in dB for each requested frequency.

        The direction is resolved once for the whole spectrum.
        """
        record = self.get_record(theta, phi, self._interpolation_method)
        return record.attenuation[self._axis.indices_of(frequencies)].copy()
