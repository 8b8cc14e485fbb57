"""
Tests for data schemas (DirectivitySample and SpectreParameters).
"""
import math
import pytest
from pydantic import ValidationError
from noise_directivity.data.schemas import DirectivitySample, SpectreParameters


class TestDirectivitySample:
    """Tests for DirectivitySample schema."""

    def test_valid_sample(self):
        """Test valid sample creation."""
        sample = DirectivitySample(theta=0.2, phi=3.0, attenuation=[-1.0, -2.0])

        assert sample.theta == 0.2
        assert sample.attenuation == [-1.0, -2.0]

    def test_zenith_and_front_bounds(self):
        """The zenith and the front direction are accepted."""
        DirectivitySample(theta=math.pi / 2, phi=0.0, attenuation=[0.0])

    def test_nadir_rejected(self):
        """Theta is open at -pi/2."""
        with pytest.raises(ValidationError):
            DirectivitySample(theta=-math.pi / 2, phi=0.0, attenuation=[0.0])

    def test_full_turn_rejected(self):
        """Phi is open at 2pi, which is the front direction again."""
        with pytest.raises(ValidationError):
            DirectivitySample(theta=0.0, phi=2 * math.pi, attenuation=[0.0])

    def test_theta_out_of_range(self):
        """Theta above the zenith is rejected."""
        with pytest.raises(ValidationError):
            DirectivitySample(theta=2.0, phi=0.0, attenuation=[0.0])

    def test_negative_phi(self):
        """Negative phi is rejected."""
        with pytest.raises(ValidationError):
            DirectivitySample(theta=0.0, phi=-0.1, attenuation=[0.0])

    def test_empty_attenuation(self):
        """At least one band is required."""
        with pytest.raises(ValidationError):
            DirectivitySample(theta=0.0, phi=0.0, attenuation=[])

    def test_non_finite_attenuation(self):
        """Infinite attenuation is rejected."""
        with pytest.raises(ValidationError, match="finite"):
            DirectivitySample(theta=0.0, phi=0.0, attenuation=[1.0, float("inf")])

    def test_frozen(self):
        """Samples are immutable."""
        sample = DirectivitySample(theta=0.0, phi=0.0, attenuation=[0.0])
        with pytest.raises(ValidationError):
            sample.theta = 0.5


class TestSpectreParameters:
    """Tests for SpectreParameters schema."""

    def test_valid_parameters(self):
        """Test valid parameter record."""
        params = SpectreParameters(
            type_vehicle=' 1 ',
            ref='ref_1',
            running_condition=2,
            source_height='0.05',
            spectre_ver=2,
            freq_id=4
        )

        assert params.type_vehicle == '1'  # Whitespace stripped
        assert params.running_condition == 2
        assert params.freq_id == 4

    def test_immutable(self):
        """Parameter records cannot be modified."""
        params = SpectreParameters(
            type_vehicle='2', ref='r', running_condition=0,
            source_height='0.5', spectre_ver=1, freq_id=0
        )
        with pytest.raises(ValidationError):
            params.freq_id = 3

    def test_negative_running_condition(self):
        """Codes must be non-negative."""
        with pytest.raises(ValidationError):
            SpectreParameters(
                type_vehicle='2', ref='r', running_condition=-1,
                source_height='0.5', spectre_ver=1, freq_id=0
            )

    def test_missing_field(self):
        """All fields are required."""
        with pytest.raises(ValidationError):
            SpectreParameters(type_vehicle='2', ref='r')
