"""Output layer: report files and session transcripts."""

from gsloth.output.writer import (
    ReportWriter,
    append_to_file,
    resolve_output_path,
    standard_file_name,
    write_file_if_not_exists,
)

__all__ = [
    "ReportWriter",
    "append_to_file",
    "resolve_output_path",
    "standard_file_name",
    "write_file_if_not_exists",
]
