"""
Collaborators of the propagation engine that consumes directivity.
"""
from noise_directivity.propagation.collector import (
    PropagationProcessOut,
    PropagationResultPtRecord,
    PropagationResultTriRecord,
    PropagationStatistics,
)

__all__ = [
    'PropagationProcessOut',
    'PropagationResultPtRecord',
    'PropagationResultTriRecord',
    'PropagationStatistics',
]
