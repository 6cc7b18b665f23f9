from .record_table import build_record_table

__all__ = ["build_record_table"]
