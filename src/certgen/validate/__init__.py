"""Field validators and formatters for certificate submissions."""

from .validators import (
    CPF_LENGTH,
    format_cpf,
    is_valid_cpf,
    is_valid_email,
    mask_cpf_partial,
    strip_cpf,
)

__all__ = [
    "CPF_LENGTH",
    "format_cpf",
    "is_valid_cpf",
    "is_valid_email",
    "mask_cpf_partial",
    "strip_cpf",
]
