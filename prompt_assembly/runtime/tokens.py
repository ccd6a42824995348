import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Rough estimation: 1 token ~ 4 characters of English text."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)
