"""Brazilian tax document helpers (CPF/CNPJ): length checks only, no check digits."""

import re

DOCUMENT_LENGTHS = {"cpf": 11, "cnpj": 14}

_NON_DIGITS = re.compile(r"\D")


def normalize_document(document: str) -> str:
    """Strip punctuation: ``"123.456.789-00"`` -> ``"12345678900"``."""
    return _NON_DIGITS.sub("", document or "")


def validate_document(document: str, document_type: str) -> bool:
    expected = DOCUMENT_LENGTHS.get(document_type)
    if expected is None:
        return False
    return len(normalize_document(document)) == expected


def document_label(document_type: str) -> str:
    return document_type.upper()
