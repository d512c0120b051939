"""
Helper Utilities Module.

Generic helpers shared by the uploader modules.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - generate_timestamp: Generate formatted timestamps
    - to_pretty_json: Render diagnostics for log output
    - keyword_in_name: Case-insensitive keyword match on filenames
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.
    
    Args:
        path: Directory path to ensure exists.
        
    Returns:
        Path object pointing to the directory.
        
    Raises:
        PermissionError: If directory cannot be created due to permissions.
        
    Example:
        >>> ensure_directory("outputs/reports")
        PosixPath('outputs/reports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.
    
    Args:
        format_str: strftime format string.
        
    Returns:
        Formatted timestamp string.
        
    Example:
        >>> generate_timestamp("%Y-%m-%d")
        "2026-01-21"
    """
    return datetime.now().strftime(format_str)


def to_pretty_json(data: Any) -> str:
    """
    Render a value as indented JSON for log output.
    
    Non-serializable values (exceptions, paths) are rendered with str().
    
    Args:
        data: Value to render.
        
    Returns:
        Indented JSON text.
    """
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def keyword_in_name(name: str, keywords: Iterable[str]) -> bool:
    """
    Check whether a filename contains any of the keywords, ignoring case.
    
    Example:
        >>> keyword_in_name("Fatura_2025.PDF", ["fatura", "invoice"])
        True
    """
    folded = name.casefold()
    return any(keyword.casefold() in folded for keyword in keywords)
