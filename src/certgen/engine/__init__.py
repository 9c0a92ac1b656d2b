"""Submission gate and certificate record."""

from .form import (
    CertificateData,
    SubmissionError,
    build_certificate,
    certificate_filename,
    certificate_lines,
    course_label,
    format_date,
    validate_submission,
)

__all__ = [
    "CertificateData",
    "SubmissionError",
    "build_certificate",
    "certificate_filename",
    "certificate_lines",
    "course_label",
    "format_date",
    "validate_submission",
]
