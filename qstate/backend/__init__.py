"""Gate application and measurement engines."""

from .apply import apply, clear_index_cache, group_indices, index_cache_info
from .measure import MeasurementResult, marginal_probabilities, measure, sample_counts

__all__ = [
    "apply",
    "group_indices",
    "clear_index_cache",
    "index_cache_info",
    "measure",
    "marginal_probabilities",
    "sample_counts",
    "MeasurementResult",
]
