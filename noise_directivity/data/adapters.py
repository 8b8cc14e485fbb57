"""
Tabular adapters for directivity samples.

Turns an already-parsed pandas DataFrame into directivity records. The
frame has one row per direction with columns ``theta``, ``phi`` and one
attenuation column per frequency band, named by the frequency value
(e.g. ``100``, ``100.0`` or ``"100"``).
"""
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import ValidationError

from noise_directivity.core.directivity import DirectivityRecord, DiscreteDirectionAttributes
from noise_directivity.data.schemas import DirectivitySample
from noise_directivity.utils.config import DirectivityConfig, get_default_config
from noise_directivity.utils.error_handling import (
    require_columns,
    validate_dataframe_not_empty,
    validate_finite_rows,
    log_dataframe_summary,
)
from noise_directivity.utils.exceptions import DataValidationError
from noise_directivity.utils.logging_config import get_logger

logger = get_logger(__name__)


def _frequency_columns(df: pd.DataFrame) -> Dict[float, Any]:
    """Map each column whose label parses as a number to that label."""
    columns = {}
    for label in df.columns:
        try:
            columns.setdefault(float(label), label)
        except (TypeError, ValueError):
            continue
    return columns


@require_columns(['theta', 'phi'], df_param='df')
def records_from_dataframe(
    df: pd.DataFrame,
    frequencies: Sequence[float],
    degrees: bool = False,
    validate: bool = True
) -> List[DirectivityRecord]:
    """
    Convert a DataFrame of directivity samples to records.

    Args:
        df: One row per direction with theta, phi and one column per band
        frequencies: Supported band frequencies (Hz), defines column order
        degrees: If True, theta and phi are given in degrees
        validate: If True, check every row against DirectivitySample

    Returns:
        List of DirectivityRecord in frame order

    Raises:
        DataValidationError: If columns are missing, the frame is empty,
            values are not finite, directions repeat or rows are invalid

    Example:
        >>> df = pd.DataFrame({'theta': [0.0], 'phi': [0.0], '100': [-3.0]})
        >>> records = records_from_dataframe(df, [100.0])
    """
    validate_dataframe_not_empty(df, "Directivity frame")

    available = _frequency_columns(df)
    missing = [f for f in frequencies if float(f) not in available]
    if missing:
        raise DataValidationError(
            f"Directivity frame missing attenuation columns for frequencies: {missing}. "
            f"Available columns: {[str(c) for c in df.columns]}"
        )

    band_columns = [available[float(f)] for f in frequencies]
    validate_finite_rows(df, ['theta', 'phi'] + band_columns, "Directivity frame")
    log_dataframe_summary(df, "directivity_frame", include_columns=False)

    angles = df[['theta', 'phi']].to_numpy(dtype=float)
    if degrees:
        angles = np.radians(angles)
    attenuation = df[band_columns].to_numpy(dtype=float)

    # signbit keeps -0.0 and 0.0 apart, as the store does
    duplicated = pd.DataFrame({
        'theta': angles[:, 0],
        'phi': angles[:, 1],
        'theta_sign': np.signbit(angles[:, 0]),
        'phi_sign': np.signbit(angles[:, 1]),
    }).duplicated()
    if duplicated.any():
        raise DataValidationError(
            "Directivity frame holds repeated directions",
            invalid_rows=int(duplicated.sum()),
            details={'sample_rows': df.index[duplicated.to_numpy()].tolist()[:5]}
        )

    if validate:
        validation_errors = []
        for position, (angle_row, attenuation_row) in enumerate(zip(angles, attenuation)):
            try:
                DirectivitySample(
                    theta=angle_row[0],
                    phi=angle_row[1],
                    attenuation=attenuation_row.tolist()
                )
            except ValidationError as e:
                validation_errors.append({
                    'row_index': df.index[position],
                    'errors': e.errors(),
                })
        if validation_errors:
            logger.warning(
                "directivity_validation_errors",
                total_rows=len(df),
                invalid_rows=len(validation_errors)
            )
            raise DataValidationError(
                f"Directivity validation failed: {len(validation_errors)} invalid rows",
                invalid_rows=len(validation_errors),
                details={'sample_errors': validation_errors[:5]}
            )

    return [
        DirectivityRecord(theta, phi, values)
        for (theta, phi), values in zip(angles, attenuation)
    ]


def directivity_from_dataframe(
    direction_identifier: int,
    df: pd.DataFrame,
    frequencies: Sequence[float],
    config: Optional[DirectivityConfig] = None
) -> DiscreteDirectionAttributes:
    """
    Build a populated directivity store from a DataFrame.

    Args:
        direction_identifier: Identifier of the directivity pattern
        df: Sample frame, see records_from_dataframe
        frequencies: Supported band frequencies (Hz), ascending
        config: Engine configuration, defaults to get_default_config()

    Returns:
        DiscreteDirectionAttributes holding every row of the frame
    """
    config = config or get_default_config()
    attributes = DiscreteDirectionAttributes.from_config(direction_identifier, frequencies, config)
    records = records_from_dataframe(df, attributes.frequencies.tolist(), degrees=config.degrees)
    attributes.add_directivity_records(records)

    logger.info(
        "directivity_loaded",
        direction_id=direction_identifier,
        records=len(attributes),
        bands=len(attributes.frequencies),
        interpolation=attributes.interpolation_method.name
    )
    return attributes
