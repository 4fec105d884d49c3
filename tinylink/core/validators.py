"""
Input Validators

Client-side checks that run before any network call, so invalid input
never reaches the server.

- Short codes: empty (server generates one) or 6-8 base62 characters
- Target URLs: only "not blank"; format checks are left to the server
"""

import re

CODE_MIN_LENGTH = 6
CODE_MAX_LENGTH = 8

# Only base62 characters: [A-Za-z0-9]
CODE_PATTERN = re.compile(rf"^[A-Za-z0-9]{{{CODE_MIN_LENGTH},{CODE_MAX_LENGTH}}}$")


def validate_code(code: str) -> bool:
    """
    Check a user-supplied short code.

    The code is used as-is: no trimming and no case folding.

    Args:
        code: The requested short code ("" means "let the server pick")

    Returns:
        True if the code is empty or 6-8 alphanumeric characters
    """
    if code == "":
        return True
    return CODE_PATTERN.fullmatch(code) is not None


def validate_url(url: str) -> bool:
    """
    Check a target URL.

    Args:
        url: The long URL to shorten

    Returns:
        True if the URL is not blank
    """
    return bool(url and url.strip())
