"""
Thread-safe sink for propagation results.

Many worker threads push computed receiver levels and bump counters
concurrently, so every accessor takes the same lock.
"""
import threading
from dataclasses import dataclass
from typing import List, Optional, Union

from noise_directivity.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PropagationResultTriRecord:
    """Level computed at a triangle vertex of the output mesh."""
    tri_id: int
    cell_id: int
    value: float


@dataclass(frozen=True)
class PropagationResultPtRecord:
    """Level computed at a receiver point."""
    receiver_record_row: int
    cell_id: int
    value: float


@dataclass(frozen=True)
class PropagationStatistics:
    """Consistent copy of the collector counters."""
    receiver_source_couples: int
    obstruction_tests: int
    image_receivers: int
    reflection_paths: int
    diffraction_paths: int
    cells_computed: int
    sum_receiver_computation_time: int
    minimal_receiver_computation_time: Optional[int]
    maximal_receiver_computation_time: int
    tri_results: int
    pt_results: int


PropagationResult = Union[PropagationResultTriRecord, PropagationResultPtRecord]


class PropagationProcessOut:
    """
    Store data computed by propagation threads.

    Multiple threads share one instance; every method is atomic with
    respect to all others.

    Args:
        tri_to_driver: Optional list receiving triangle results
        pt_to_driver: Optional list receiving receiver point results

    Example:
        >>> out = PropagationProcessOut()
        >>> out.add_values(PropagationResultPtRecord(0, 1, 54.2))
        >>> out.append_source_count(12)
        >>> out.snapshot().receiver_source_couples
        12
    """

    def __init__(
        self,
        tri_to_driver: Optional[List[PropagationResultTriRecord]] = None,
        pt_to_driver: Optional[List[PropagationResultPtRecord]] = None,
    ):
        self._lock = threading.Lock()
        self._tri_to_driver = tri_to_driver if tri_to_driver is not None else []
        self._pt_to_driver = pt_to_driver if pt_to_driver is not None else []

        self._nb_couple_receiver_src = 0
        self._nb_obstr_test = 0
        self._nb_image_receiver = 0
        self._nb_reflexion_path = 0
        self._nb_diffraction_path = 0
        self._cell_computed = 0
        # None until the first receiver time is reported
        self._minimal_receiver_computation_time: Optional[int] = None
        self._maximal_receiver_computation_time = 0
        self._sum_receiver_computation_time = 0

    # Results

    def add_values(self, record: PropagationResult) -> None:
        """
        Push a computed result onto its stack.

        Raises:
            TypeError: If the record is neither a triangle nor a point result
        """
        if isinstance(record, PropagationResultTriRecord):
            target = self._tri_to_driver
        elif isinstance(record, PropagationResultPtRecord):
            target = self._pt_to_driver
        else:
            raise TypeError(f"Unsupported propagation result: {type(record).__name__}")
        with self._lock:
            target.append(record)

    def tri_results(self) -> List[PropagationResultTriRecord]:
        """Copy of the triangle results pushed so far."""
        with self._lock:
            return list(self._tri_to_driver)

    def pt_results(self) -> List[PropagationResultPtRecord]:
        """Copy of the receiver point results pushed so far."""
        with self._lock:
            return list(self._pt_to_driver)

    # Receiver computation time

    def add_sum_receiver_computation_time(self, value: int) -> None:
        with self._lock:
            self._sum_receiver_computation_time += value

    def update_minimal_receiver_computation_time(self, value: int) -> None:
        with self._lock:
            current = self._minimal_receiver_computation_time
            self._minimal_receiver_computation_time = value if current is None else min(current, value)

    def update_maximal_receiver_computation_time(self, value: int) -> None:
        with self._lock:
            self._maximal_receiver_computation_time = max(self._maximal_receiver_computation_time, value)

    def record_receiver_computation_time(self, value: int) -> None:
        """Add one receiver duration to the sum, minimum and maximum at once."""
        with self._lock:
            self._sum_receiver_computation_time += value
            current = self._minimal_receiver_computation_time
            self._minimal_receiver_computation_time = value if current is None else min(current, value)
            self._maximal_receiver_computation_time = max(self._maximal_receiver_computation_time, value)

    def get_sum_receiver_computation_time(self) -> int:
        with self._lock:
            return self._sum_receiver_computation_time

    def get_minimal_receiver_computation_time(self) -> Optional[int]:
        with self._lock:
            return self._minimal_receiver_computation_time

    def get_maximal_receiver_computation_time(self) -> int:
        with self._lock:
            return self._maximal_receiver_computation_time

    # Path counters

    def append_source_count(self, src_count: int) -> None:
        with self._lock:
            self._nb_couple_receiver_src += src_count

    def append_free_field_test_count(self, free_field_test_count: int) -> None:
        with self._lock:
            self._nb_obstr_test += free_field_test_count

    def append_image_receiver(self, added: int) -> None:
        with self._lock:
            self._nb_image_receiver += added

    def append_reflexion_path(self, added: int) -> None:
        with self._lock:
            self._nb_reflexion_path += added

    def append_diffraction_path(self, added: int) -> None:
        with self._lock:
            self._nb_diffraction_path += added

    def append_cell_computed(self) -> None:
        """Increment cell computed counter by 1."""
        with self._lock:
            self._cell_computed += 1

    def get_nb_couple_receiver_src(self) -> int:
        with self._lock:
            return self._nb_couple_receiver_src

    def get_nb_obstr_test(self) -> int:
        with self._lock:
            return self._nb_obstr_test

    def get_nb_image_receiver(self) -> int:
        with self._lock:
            return self._nb_image_receiver

    def get_nb_reflexion_path(self) -> int:
        with self._lock:
            return self._nb_reflexion_path

    def get_nb_diffraction_path(self) -> int:
        with self._lock:
            return self._nb_diffraction_path

    def get_cell_computed(self) -> int:
        with self._lock:
            return self._cell_computed

    def snapshot(self) -> PropagationStatistics:
        """All counters read under one lock acquisition."""
        with self._lock:
            return PropagationStatistics(
                receiver_source_couples=self._nb_couple_receiver_src,
                obstruction_tests=self._nb_obstr_test,
                image_receivers=self._nb_image_receiver,
                reflection_paths=self._nb_reflexion_path,
                diffraction_paths=self._nb_diffraction_path,
                cells_computed=self._cell_computed,
                sum_receiver_computation_time=self._sum_receiver_computation_time,
                minimal_receiver_computation_time=self._minimal_receiver_computation_time,
                maximal_receiver_computation_time=self._maximal_receiver_computation_time,
                tri_results=len(self._tri_to_driver),
                pt_results=len(self._pt_to_driver),
            )

    def log(self, message: str, **context) -> None:
        """Forward a progress message from a worker thread to the log."""
        logger.info(message, **context)

    def log_summary(self) -> PropagationStatistics:
        """Log the current counters and return them."""
        stats = self.snapshot()
        logger.info(
            "propagation_statistics",
            receiver_source_couples=stats.receiver_source_couples,
            obstruction_tests=stats.obstruction_tests,
            image_receivers=stats.image_receivers,
            reflection_paths=stats.reflection_paths,
            diffraction_paths=stats.diffraction_paths,
            cells_computed=stats.cells_computed,
            results=stats.tri_results + stats.pt_results,
        )
        return stats
