"""Output file writers for join results and the run log."""

from bim_inner_join.writers.join_files import JoinFileWriter, format_bim_line
from bim_inner_join.writers.log import print_summary, write_log_file

__all__ = ["JoinFileWriter", "format_bim_line", "print_summary", "write_log_file"]
