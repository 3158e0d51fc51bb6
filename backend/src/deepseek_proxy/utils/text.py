from __future__ import annotations


def preview_text(text: str, *, limit: int = 160) -> str:
    """Return a single-line preview capped at ``limit`` characters."""
    compact = " ".join((text or "").split())
    if len(compact) <= limit:
        return compact
    cutoff = max(limit - 3, 1)
    return f"{compact[:cutoff]}..."
