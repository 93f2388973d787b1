"""
Utility functions for coordination operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json
import posixpath
import sys
from typing import Any


def work_path(cluster_name: str, work_root: str, work_id: str) -> str:
    """
    Build the deterministic path of a work record.

    Args:
        cluster_name: Cluster name (first path segment)
        work_root: Work root segment (e.g., 'work')
        work_id: Work identifier

    Returns:
        Absolute path (e.g., '/clusterX/work/job1')

    Raises:
        ValueError: If any segment is empty, contains '/', or is '.' or '..'
    """
    validate_segment(cluster_name, "Cluster name")
    validate_segment(work_root, "Work path")
    validate_segment(work_id, "Work id")
    return posixpath.join("/", cluster_name, work_root, work_id)


def work_root_path(cluster_name: str, work_root: str) -> str:
    """Path of the node holding all work records of a cluster."""
    validate_segment(cluster_name, "Cluster name")
    validate_segment(work_root, "Work path")
    return posixpath.join("/", cluster_name, work_root)


def validate_segment(segment: str, label: str) -> bool:
    """
    Validate a single path segment.

    Args:
        segment: Segment to validate
        label: Human-readable name used in the error message

    Returns:
        True if valid

    Raises:
        ValueError: If segment is empty, contains '/', or is '.' or '..'
    """
    if not segment:
        raise ValueError(f"{label} cannot be empty")
    if "/" in segment:
        raise ValueError(f"{label} cannot contain '/', got '{segment}'")
    if segment in (".", ".."):
        raise ValueError(f"{label} cannot be '{segment}'")
    return True


def validate_path(path: str) -> bool:
    """
    Validate an absolute node path.

    Raises:
        ValueError: If path is not absolute
    """
    if not path or not path.startswith("/"):
        raise ValueError(f"Path must be absolute, got '{path}'")
    return True


def output_json(data: dict[str, Any], quiet: bool = False) -> None:
    """
    Output JSON to stdout.

    Args:
        data: Data to output as JSON
        quiet: If True, suppress output
    """
    if not quiet:
        print(json.dumps(data), flush=True)


def output_text(message: str, quiet: bool = False) -> None:
    """
    Output text to stdout.

    Args:
        message: Message to output
        quiet: If True, suppress output
    """
    if not quiet:
        print(message, flush=True)


def error_json(error: str, solution: str, exit_code: int) -> dict[str, Any]:
    """
    Format error as JSON.

    Args:
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code

    Returns:
        Error dictionary
    """
    return {"error": error, "solution": solution, "exit_code": exit_code}


def error_text(error: str, solution: str) -> str:
    """
    Format error as human-readable text.

    Args:
        error: Error message
        solution: Solution suggestion

    Returns:
        Formatted error message
    """
    return f"❌ Error: {error}\n\n💡 Solution: {solution}"


def output_error(error: str, solution: str, exit_code: int, text_format: bool = False) -> None:
    """
    Output error message to stderr.

    Args:
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code reported in the JSON body
        text_format: If True, output as text; otherwise JSON
    """
    if text_format:
        sys.stderr.write(error_text(error, solution) + "\n")
    else:
        sys.stderr.write(json.dumps(error_json(error, solution, exit_code)) + "\n")
