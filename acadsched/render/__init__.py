from .csv_out import csv_blocks, write_csv_blocks

__all__ = ["csv_blocks", "write_csv_blocks"]
