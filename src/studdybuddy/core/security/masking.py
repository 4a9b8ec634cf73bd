"""
Mask bearer credentials before they reach logs or the terminal.
"""

from typing import Optional


def mask_token(token: Optional[str], visible_chars: int = 4) -> str:
    """
    Mask a token for display/logging purposes.

    Args:
        token: Access or refresh token to mask
        visible_chars: Number of characters to show at the end

    Returns:
        Masked token string
    """
    if not token:
        return "[empty]"

    if len(token) <= visible_chars:
        return "*" * len(token)

    return "*" * min(len(token) - visible_chars, 8) + token[-visible_chars:]
