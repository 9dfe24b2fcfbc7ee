from __future__ import annotations

PREVIEW_LEN = 25

def quote(s: str) -> str:
    """Quote a key or context for messages; the empty context is the document root."""
    return f"'{s}'" if s else "root"

def dotted(context: str, key: str) -> str:
    if context:
        return quote(f"{context}.{key}")
    return quote(key)

def is_blank(s: str) -> bool:
    """True for the empty string and for strings made only of whitespace."""
    return not s.strip()

def is_url_like(s: str) -> bool:
    # Simplistic on purpose: no real URL parsing.
    return s.startswith(("https://", "http://", "www"))

def rune_len(s: str) -> int:
    # str is a sequence of code points, so len() is the rune count, not the UTF-8 byte count
    return len(s)

def preview(s: str, length: int = PREVIEW_LEN) -> str:
    return s[:length]
