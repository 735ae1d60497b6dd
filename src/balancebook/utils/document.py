"""Taxpayer document helpers."""

import re
from typing import Optional

_NON_DIGITS = re.compile(r"\D")


def normalize_document(document: Optional[str]) -> Optional[str]:
    """Strip everything but digits from a CPF/CNPJ-style document.

    Returns None when nothing is left, so blank documents never collide.
    """
    if document is None:
        return None
    digits = _NON_DIGITS.sub("", document)
    return digits or None
