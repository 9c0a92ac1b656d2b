"""
Gate between the collected form fields and the renderers.

A submission is checked field by field in a fixed order and the first failure is
reported as a user-facing message. A passing submission becomes an immutable
`CertificateData` record, which is all the renderers ever see.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import re
from typing import Iterator, Optional, Sequence, Tuple

from ..config import CourseType
from ..validate.validators import format_cpf, is_valid_cpf, is_valid_email, strip_cpf


# User-facing messages, in check order.
MSG_CPF_REQUIRED = "O CPF é obrigatório"
MSG_CPF_INVALID = "CPF inválido"
MSG_NAME_REQUIRED = "O nome é obrigatório"
MSG_EMAIL_REQUIRED = "O e-mail é obrigatório"
MSG_EMAIL_INVALID = "E-mail inválido"
MSG_COURSE_REQUIRED = "Selecione um curso/palestra/treinamento"
MSG_COURSE_UNKNOWN = "Curso/palestra/treinamento desconhecido"

DEFAULT_LABEL = "Certificado"

_WHITESPACE = re.compile(r"\s+")
_UNSAFE_FILENAME = re.compile(r"[^\w.-]")


class SubmissionError(ValueError):
    """Raised when a submission fails one of the form checks."""


@dataclass(frozen=True)
class CertificateData:
    """
    Everything printed on a certificate.

    Attributes:
        cpf:            Canonical CPF (11 digits, no punctuation).
        name:           Holder's full name as typed.
        email:          Holder's email; shown only outside the certificate body.
        course_type:    Id of a `CourseType` from the catalog.
        generated_date: Date of issue.
    """
    cpf: str
    name: str
    email: str
    course_type: str
    generated_date: date


def validate_submission(
    cpf: Optional[str],
    name: Optional[str],
    email: Optional[str],
    course_type: Optional[str],
    courses: Sequence[CourseType],
) -> Optional[str]:
    """Return the first failing check's message, or None when everything passes."""
    cpf = (cpf or "").strip()
    name = (name or "").strip()
    email = (email or "").strip()
    course_type = (course_type or "").strip()

    if not cpf:
        return MSG_CPF_REQUIRED
    if not is_valid_cpf(cpf):
        return MSG_CPF_INVALID
    if not name:
        return MSG_NAME_REQUIRED
    if not email:
        return MSG_EMAIL_REQUIRED
    if not is_valid_email(email):
        return MSG_EMAIL_INVALID
    if not course_type:
        return MSG_COURSE_REQUIRED
    if course_type not in {c.id for c in courses}:
        return MSG_COURSE_UNKNOWN
    return None


def build_certificate(
    cpf: Optional[str],
    name: Optional[str],
    email: Optional[str],
    course_type: Optional[str],
    courses: Sequence[CourseType],
    today: Optional[date] = None,
) -> CertificateData:
    """
    Validate a submission and turn it into `CertificateData`.

    Raises:
        SubmissionError: with the first failing check's message.
    """
    error = validate_submission(cpf, name, email, course_type, courses)
    if error:
        raise SubmissionError(error)
    return CertificateData(
        cpf=strip_cpf(cpf),
        name=name.strip(),
        email=email.strip(),
        course_type=course_type.strip(),
        generated_date=today or date.today(),
    )


def course_label(
    course_id: str, courses: Sequence[CourseType], fallback: str = DEFAULT_LABEL
) -> str:
    for c in courses:
        if c.id == course_id:
            return c.label
    return fallback


def format_date(d: date) -> str:
    """pt-BR short date: dd/mm/yyyy."""
    return d.strftime("%d/%m/%Y")


def certificate_filename(name: str, ext: str = "pdf") -> str:
    """
    Download filename for a holder's certificate.
      'Maria  da Silva' -> 'certificado-maria-da-silva.pdf'
      'x/../y'          -> 'certificado-x-..-y.pdf'

    Path separators and other characters unsafe in filenames become dashes,
    so the result always names a file directly inside the output directory.
    """
    slug = _WHITESPACE.sub("-", name.strip().lower())
    slug = _UNSAFE_FILENAME.sub("-", slug).lstrip(".")
    return f"certificado-{slug}.{ext}"


def certificate_lines(
    data: CertificateData,
    courses: Sequence[CourseType],
    workload_hours: int = 40,
    fallback: str = DEFAULT_LABEL,
) -> Iterator[Tuple[str, str]]:
    """
    Yield the certificate body top to bottom as (role, text) pairs.

    Roles are layout hints shared by the renderers:
      kicker, title, body, name, highlight, footer, signature
    """
    label = course_label(data.course_type, courses, fallback)
    yield "kicker", "Certificado de Conclusão"
    yield "title", label
    yield "body", "Certificamos que"
    yield "name", data.name
    yield "body", f"portador(a) do CPF {format_cpf(data.cpf)}"
    yield "body", "participou e concluiu com sucesso o"
    yield "highlight", label
    yield "body", f"com carga horária total de {workload_hours} horas."
    yield "footer", f"Documento emitido em {format_date(data.generated_date)}"
    yield "signature", "Assinatura do Responsável"
