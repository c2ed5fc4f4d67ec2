"""
Executors for data-parallel pair reductions.

A reduction over ``n_items`` independent pair (or particle) indices is
cut into contiguous chunks. Each chunk is one unit of work that returns
its own partial energy; the partials land in a result list with one
slot per chunk and are summed once every unit has finished. No unit
writes shared state, so no locking is needed.
"""
import logging
import math
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

#: kernel(start, stop) -> partial energy of items [start, stop)
Kernel = Callable[[int, int], float]

DEFAULT_CHUNK_SIZE = 4096


class PairExecutor(ABC):
    """
    Abstract base for reduction executors (Strategy Pattern).

    Attributes:
        chunk_size: Maximum number of items per unit of work.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError(f"Chunk size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size

    def chunks(self, n_items: int) -> List[Tuple[int, int]]:
        """Split ``[0, n_items)`` into consecutive (start, stop) chunks."""
        return [
            (start, min(start + self.chunk_size, n_items))
            for start in range(0, n_items, self.chunk_size)
        ]

    def map_reduce(self, kernel: Kernel, n_items: int) -> float:
        """
        Run ``kernel`` over all chunks and sum the partial results.

        Args:
            kernel: Callable computing the energy of items [start, stop).
            n_items: Total number of items.

        Returns:
            Sum of all partial energies (0.0 when there are no items).
        """
        if n_items <= 0:
            return 0.0
        partials = self._run(kernel, self.chunks(n_items))
        return math.fsum(partials)

    @abstractmethod
    def _run(self, kernel: Kernel, chunks: List[Tuple[int, int]]) -> List[float]:
        """Evaluate every chunk, returning partials in chunk order."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get executor name."""
        pass


class SerialExecutor(PairExecutor):
    """Evaluate chunks one after another in the calling thread."""

    def _run(self, kernel: Kernel, chunks: List[Tuple[int, int]]) -> List[float]:
        return [kernel(start, stop) for start, stop in chunks]

    def get_name(self) -> str:
        return "Serial"


class ThreadedExecutor(PairExecutor):
    """
    Evaluate chunks on a thread pool.

    A fresh ``ThreadPoolExecutor`` is created per reduction, so the
    executor object itself holds no scheduling state. The numpy
    kernels release the GIL for the bulk of the arithmetic.

    Example:
        >>> executor = ThreadedExecutor(max_workers=4, chunk_size=1024)
        >>> evaluator = EnergyEvaluator(LJParameters(1.0, 1.0), executor)
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        super().__init__(chunk_size)
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        logger.debug(
            f"ThreadedExecutor initialized with max_workers={max_workers}, "
            f"chunk_size={chunk_size}"
        )

    def _run(self, kernel: Kernel, chunks: List[Tuple[int, int]]) -> List[float]:
        if len(chunks) == 1:
            start, stop = chunks[0]
            return [kernel(start, stop)]
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(kernel, start, stop) for start, stop in chunks]
            return [future.result() for future in futures]

    def get_name(self) -> str:
        return f"Threaded(max_workers={self.max_workers})"
