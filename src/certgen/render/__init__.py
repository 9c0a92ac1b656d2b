"""Certificate renderers: HTML via Jinja2, PNG/PDF via Pillow."""

from .document import CertificateRenderer, ExportResult, a4_page_size
from .html import render_certificate_html, write_certificate_html

__all__ = [
    "CertificateRenderer",
    "ExportResult",
    "a4_page_size",
    "render_certificate_html",
    "write_certificate_html",
]
