"""
Tests for DataFrame adapters (records_from_dataframe and directivity_from_dataframe).
"""
import math
import numpy as np
import pandas as pd
import pytest
from noise_directivity.core.directivity import InterpolationMethod
from noise_directivity.data.adapters import records_from_dataframe, directivity_from_dataframe
from noise_directivity.utils.config import DirectivityConfig
from noise_directivity.utils.exceptions import DataValidationError

FREQUENCIES = [100.0, 200.0, 400.0]


@pytest.fixture
def grid_frame():
    """2 x 2 grid of samples with text frequency columns."""
    return pd.DataFrame({
        'theta': [0.0, 0.0, math.pi / 2, math.pi / 2],
        'phi': [0.0, math.pi / 2, 0.0, math.pi / 2],
        '100': [10.0, 10.0, 10.0, 10.0],
        '200': [10.0, 10.0, 10.0, 10.0],
        '400': [10.0, 10.0, 10.0, 10.0],
    })


@pytest.fixture
def degree_frame():
    """Samples in degrees with numeric frequency columns."""
    return pd.DataFrame({
        'theta': [0.0, 0.0, 45.0, 45.0],
        'phi': [0.0, 90.0, 0.0, 90.0],
        100.0: [-1.0, -2.0, -3.0, -4.0],
        200.0: [-5.0, -6.0, -7.0, -8.0],
        400.0: [-9.0, -10.0, -11.0, -12.0],
    })


class TestRecordsFromDataframe:
    """Tests for records_from_dataframe function."""

    def test_text_frequency_columns(self, grid_frame):
        """Frequency columns labelled as text are matched."""
        records = records_from_dataframe(grid_frame, FREQUENCIES)

        assert len(records) == 4
        assert records[1].phi == pytest.approx(math.pi / 2)
        np.testing.assert_array_equal(records[0].attenuation, [10.0, 10.0, 10.0])

    def test_numeric_frequency_columns_in_degrees(self, degree_frame):
        """Numeric labels are matched and degrees converted to radians."""
        records = records_from_dataframe(degree_frame, FREQUENCIES, degrees=True)

        assert records[2].theta == pytest.approx(math.pi / 4)
        assert records[1].phi == pytest.approx(math.pi / 2)
        np.testing.assert_array_equal(records[3].attenuation, [-4.0, -8.0, -12.0])

    def test_column_order_follows_frequencies(self, degree_frame):
        """Spectra are ordered by the requested frequencies."""
        records = records_from_dataframe(degree_frame, [400.0, 100.0], degrees=True, validate=False)
        np.testing.assert_array_equal(records[0].attenuation, [-9.0, -1.0])

    def test_missing_angle_column(self, grid_frame):
        """A frame without phi is rejected."""
        with pytest.raises(DataValidationError, match="Missing required columns"):
            records_from_dataframe(grid_frame.drop(columns=['phi']), FREQUENCIES)

    def test_missing_frequency_column(self, grid_frame):
        """A frame without one band is rejected."""
        with pytest.raises(DataValidationError, match="400.0"):
            records_from_dataframe(grid_frame.drop(columns=['400']), FREQUENCIES)

    def test_empty_frame(self):
        """An empty frame is rejected."""
        empty = pd.DataFrame(columns=['theta', 'phi', '100', '200', '400'])
        with pytest.raises(DataValidationError, match="empty"):
            records_from_dataframe(empty, FREQUENCIES)

    def test_non_finite_values(self, grid_frame):
        """NaN attenuation is rejected with the row count."""
        grid_frame.loc[2, '200'] = np.nan
        with pytest.raises(DataValidationError) as exc_info:
            records_from_dataframe(grid_frame, FREQUENCIES)
        assert exc_info.value.invalid_rows == 1

    def test_repeated_direction(self, grid_frame):
        """Two rows at the same direction are rejected."""
        frame = pd.concat([grid_frame, grid_frame.iloc[[0]]], ignore_index=True)
        with pytest.raises(DataValidationError, match="repeated directions"):
            records_from_dataframe(frame, FREQUENCIES)

    def test_signed_zero_is_not_repeated(self, grid_frame):
        """A row at theta -0.0 is a different direction from theta 0.0."""
        extra = grid_frame.iloc[[0]].copy()
        extra['theta'] = -0.0
        frame = pd.concat([grid_frame, extra], ignore_index=True)

        records = records_from_dataframe(frame, FREQUENCIES)
        assert len(records) == 5
        assert math.copysign(1.0, records[4].theta) == -1.0

    def test_out_of_range_angle(self, grid_frame):
        """Theta beyond the zenith fails schema validation."""
        grid_frame.loc[0, 'theta'] = 2.5
        with pytest.raises(DataValidationError, match="1 invalid rows"):
            records_from_dataframe(grid_frame, FREQUENCIES)

    def test_out_of_range_angle_without_validation(self, grid_frame):
        """Schema validation can be skipped."""
        grid_frame.loc[0, 'theta'] = 2.5
        records = records_from_dataframe(grid_frame, FREQUENCIES, validate=False)
        assert records[0].theta == 2.5

    def test_not_a_dataframe(self):
        """Non-DataFrame input is rejected."""
        with pytest.raises(DataValidationError, match="must be a pandas DataFrame"):
            records_from_dataframe({'theta': [0.0]}, FREQUENCIES)


class TestDirectivityFromDataframe:
    """Tests for directivity_from_dataframe function."""

    def test_builds_populated_store(self, grid_frame):
        """The store holds every row and answers queries."""
        attributes = directivity_from_dataframe(7, grid_frame, FREQUENCIES)

        assert len(attributes) == 4
        assert attributes.direction_identifier == 7
        assert attributes.interpolation_method == InterpolationMethod.BILINEAR
        assert attributes.get_attenuation(200.0, math.pi / 4, math.pi / 4) == pytest.approx(10.0, abs=1e-6)

    def test_config_applied(self, degree_frame):
        """Config selects the method and the angle unit."""
        config = DirectivityConfig(interpolation="nearest", degrees=True)
        attributes = directivity_from_dataframe(1, degree_frame, FREQUENCIES, config=config)

        assert attributes.interpolation_method == InterpolationMethod.NEAREST
        value = attributes.get_attenuation(100.0, math.radians(88.0), math.radians(44.0))
        assert value == -4.0
