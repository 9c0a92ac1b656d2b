from __future__ import annotations

from pathlib import Path
from typing import Optional
from jinja2 import Environment, PackageLoader, select_autoescape

from ..config import CertgenConfig
from ..engine.form import CertificateData, certificate_lines


def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("certgen.render", "templates"),
        autoescape=select_autoescape(default_for_string=True, default=True),
    )


def render_certificate_html(data: CertificateData, cfg: Optional[CertgenConfig] = None) -> str:
    cfg = cfg or CertgenConfig()
    tmpl = _environment().get_template("certificate.html.j2")
    lines = list(
        certificate_lines(data, cfg.courses, cfg.workload_hours, cfg.fallback_label)
    )
    return tmpl.render(data=data, lines=lines, render=cfg.render)


def write_certificate_html(
    data: CertificateData, path: Path, cfg: Optional[CertgenConfig] = None
) -> None:
    html = render_certificate_html(data, cfg)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
