from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import yaml
from pydantic import BaseModel, Field

# ---- Course / event catalog ----
class CourseType(BaseModel):
    id: str
    label: str


def _default_courses() -> List[CourseType]:
    return [
        CourseType(id="curso-react", label="Curso de React"),
        CourseType(id="curso-node", label="Curso de Node.js"),
        CourseType(id="workshop-ux", label="Workshop de UX/UI Design"),
        CourseType(id="palestra-ia", label="Palestra sobre Inteligência Artificial"),
        CourseType(id="treinamento-gestao", label="Treinamento em Gestão de Projetos"),
    ]


# ---- Rendering (tune the exported document without code changes) ----
class RenderConfig(BaseModel):
    width: int = Field(800, gt=0)    # card size in CSS-like px, 16:9
    height: int = Field(450, gt=0)
    scale: int = Field(2, ge=1)      # rasterization multiplier
    background: str = "#ffffff"
    page_dpi: int = Field(150, ge=72)
    font_path: Optional[str] = None  # TrueType serif; Pillow default when missing


# ---- Root config ----
class CertgenConfig(BaseModel):
    courses: List[CourseType] = Field(default_factory=_default_courses)
    workload_hours: int = Field(40, gt=0)
    fallback_label: str = "Certificado"
    render: RenderConfig = Field(default_factory=RenderConfig)

    def course_ids(self) -> List[str]:
        return [c.id for c in self.courses]


# ---- Loader ----
def load_config(path: Optional[Path]) -> CertgenConfig:
    if not path:
        return CertgenConfig()
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    return CertgenConfig.model_validate(data)
