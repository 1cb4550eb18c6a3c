"""
Credential scrubbing for log records and displayed settings, plus
housekeeping of rotated log files.
"""

import re
import time
from pathlib import Path
from typing import Any, Dict, List, Tuple

from gemini_cli.constants import LOG_FILE_NAME

MASK = "***"

_SECRET_PATTERNS = (
    # Google API keys
    (re.compile(r"AIza[0-9A-Za-z\-_]{35}"), f"AIza{MASK}"),
    # OAuth access tokens
    (re.compile(r"ya29\.[0-9A-Za-z\-_.]+"), f"ya29.{MASK}"),
    (re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE), f"Bearer {MASK}"),
    (re.compile(r"([?&](?:key|api_key|token|access_token)=)[^&\s]+", re.IGNORECASE), rf"\1{MASK}"),
)


def is_sensitive_key(key: Any, sensitive_keys: Tuple[str, ...]) -> bool:
    """``GEMINI_API_KEY``, ``apiKey`` and ``api-key`` all match ``api_key``/``apikey``"""
    normalized = str(key).lower().replace("-", "_")
    return any(pattern.replace("-", "_") in normalized for pattern in sensitive_keys)


def mask_value(value: Any) -> str:
    # Long values keep their last four characters so keys can be told apart
    if isinstance(value, str) and len(value) > 8:
        return f"{MASK}{value[-4:]}"
    return MASK


def sanitize_data(data: Any, sensitive_keys: Tuple[str, ...]) -> Any:
    """
    Recursively replace credentials in dicts, lists and strings.

    Args:
        data: Value to sanitize; other types are returned unchanged
        sensitive_keys: Key fragments whose values are masked

    Returns:
        Any: A sanitized copy
    """
    if isinstance(data, dict):
        return sanitize_dict(data, sensitive_keys)
    if isinstance(data, list):
        return sanitize_list(data, sensitive_keys)
    if isinstance(data, str):
        return sanitize_string(data)
    return data


def sanitize_dict(data: Dict[Any, Any], sensitive_keys: Tuple[str, ...]) -> Dict[Any, Any]:
    return {
        key: mask_value(value) if is_sensitive_key(key, sensitive_keys)
        else sanitize_data(value, sensitive_keys)
        for key, value in data.items()
    }


def sanitize_list(data: List[Any], sensitive_keys: Tuple[str, ...]) -> List[Any]:
    return [sanitize_data(item, sensitive_keys) for item in data]


def sanitize_string(data: str) -> str:
    """Mask credentials embedded in free text (URLs, headers, pasted keys)"""
    for pattern, replacement in _SECRET_PATTERNS:
        data = pattern.sub(replacement, data)
    return data


def cleanup_old_logs(log_directory: Path, retention_days: int = 30) -> int:
    """
    Delete rotated log files older than ``retention_days``.

    Only ``gemini-cli.log.<date>`` files are considered; the active log
    and unrelated files are left alone.

    Returns:
        int: Number of files removed
    """
    if not log_directory.exists():
        return 0

    cutoff = time.time() - retention_days * 24 * 60 * 60
    removed = 0
    for log_file in log_directory.glob(f"{LOG_FILE_NAME}.log.*"):
        if log_file.stat().st_mtime < cutoff:
            log_file.unlink()
            removed += 1
    return removed
