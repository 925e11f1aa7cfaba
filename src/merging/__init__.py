"""Library merging: many single-table files into one multi-table file."""

from .table_merger import TableMerger, MergeResult, is_table_count_field, patch_table_count

__all__ = [
    "TableMerger",
    "MergeResult",
    "is_table_count_field",
    "patch_table_count",
]
