from __future__ import annotations

import re


def is_valid_cuit(cuit: str) -> bool:
    """A CUIT is valid when it has exactly 11 digits once dashes and spaces go."""
    if not cuit:
        return False
    cleaned = re.sub(r"[-\s]", "", cuit)
    return re.fullmatch(r"[0-9]{11}", cleaned) is not None


def format_cuit(cuit: str) -> str:
    """'20123456789' -> '20-12345678-9'; anything without 11 digits is returned as is."""
    cleaned = re.sub(r"\D", "", cuit)
    if len(cleaned) != 11:
        return cuit
    return f"{cleaned[:2]}-{cleaned[2:10]}-{cleaned[10:]}"
