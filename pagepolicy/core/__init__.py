from pagepolicy.core.result_set import ResultSet, SequenceResultSet
from pagepolicy.core.strategies import (
    STRATEGIES,
    compute,
    effective_size,
    paginate_cursor,
    paginate_limit_offset,
    paginate_page_number,
)
from pagepolicy.core.policy import PaginationPolicy, as_result_set

__all__ = [
    "ResultSet",
    "SequenceResultSet",
    "STRATEGIES",
    "compute",
    "effective_size",
    "paginate_cursor",
    "paginate_limit_offset",
    "paginate_page_number",
    "PaginationPolicy",
    "as_result_set",
]
