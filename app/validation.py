"""
Input validation rules shared by the task store and the task client.

The title rule is deliberately a narrow blocklist, not a general HTML
sanitizer: titles are escaped on output, and the store only refuses the
two literal substrings below.
"""

import re
from typing import Any

from app.errors import InvalidTaskIdError, TaskValidationError

TITLE_MAX_LENGTH = 200
FORBIDDEN_TITLE_SUBSTRINGS = ("<script", "javascript:")

_TASK_ID_PATTERN = re.compile(r"[0-9]+")


def validate_title(title: Any) -> tuple[bool, str | None]:
    """
    Check a candidate task title.

    Args:
        title: Raw value received from the caller.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not title or not isinstance(title, str):
        return False, "'title' is required"

    trimmed = title.strip()
    if not trimmed:
        return False, "'title' must not be blank"

    if len(trimmed) > TITLE_MAX_LENGTH:
        return False, f"Title must be {TITLE_MAX_LENGTH} characters or less"

    for fragment in FORBIDDEN_TITLE_SUBSTRINGS:
        if fragment in trimmed:
            return False, f"Title must not contain '{fragment}'"

    return True, None


def clean_title(title: Any) -> str:
    """
    Validate a title and return its trimmed form.

    Raises:
        TaskValidationError: If the title breaks any rule.
    """
    is_valid, error = validate_title(title)
    if not is_valid:
        raise TaskValidationError(error)
    return title.strip()


def parse_task_id(raw_id: Any) -> int:
    """
    Convert a boundary-supplied id into an integer.

    Only plain decimal digits are accepted; signs, whitespace and
    decimal points are request-format errors.

    Raises:
        InvalidTaskIdError: If the id is not a digit string or int.
    """
    if isinstance(raw_id, bool):
        raise InvalidTaskIdError()
    if isinstance(raw_id, int):
        if raw_id < 0:
            raise InvalidTaskIdError()
        return raw_id
    if not isinstance(raw_id, str) or not _TASK_ID_PATTERN.fullmatch(raw_id):
        raise InvalidTaskIdError()
    return int(raw_id)
