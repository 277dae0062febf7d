from __future__ import annotations


def format_short_name(full_name: str) -> str:
    """Abbreviate every name but the last to its initial.

    ``"Kamal Perera Silva"`` -> ``"K P Silva"``.
    """
    if not full_name:
        return ""
    parts = full_name.split()
    if len(parts) <= 1:
        return parts[0] if parts else ""
    *given, surname = parts
    initials = [p[0].upper() for p in given]
    return f"{' '.join(initials)} {surname}"
