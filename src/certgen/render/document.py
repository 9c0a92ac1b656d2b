"""
Raster export of a certificate.

The certificate card is painted into a Pillow image (frame, centered text lines,
signature rule) at `scale` times its nominal size, then either saved as a PNG
or placed at the top of an A4 portrait page and saved as a single-page PDF.
The resulting PDF is image-based: its text is not selectable.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
import logging

from PIL import Image, ImageDraw, ImageFont

from ..config import CertgenConfig
from ..engine.form import CertificateData, certificate_lines

logger = logging.getLogger(__name__)

A4_MM = (210.0, 297.0)
MM_PER_INCH = 25.4

RGB = Tuple[int, int, int]

_PRIMARY: RGB = (30, 58, 138)
_MUTED: RGB = (107, 114, 128)
_TEXT: RGB = (75, 85, 99)
_RULE: RGB = (209, 213, 219)

# role -> (font size, color, gap below), sizes in nominal px
_STYLE: Dict[str, Tuple[int, RGB, int]] = {
    "kicker": (12, _MUTED, 10),
    "title": (28, _PRIMARY, 30),
    "body": (14, _TEXT, 10),
    "name": (24, _PRIMARY, 12),
    "highlight": (18, _PRIMARY, 14),
    "footer": (11, _MUTED, 40),
    "signature": (11, _TEXT, 0),
}

_FALLBACK_FONTS = ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf")


@dataclass
class ExportResult:
    """Result of an export operation."""
    success: bool
    output_path: str
    error_message: str = ""
    file_size_bytes: int = 0


def a4_page_size(dpi: int) -> Tuple[int, int]:
    """A4 portrait page in pixels at `dpi`."""
    return (
        round(A4_MM[0] / MM_PER_INCH * dpi),
        round(A4_MM[1] / MM_PER_INCH * dpi),
    )


class CertificateRenderer:
    """
    Paint certificates and export them as PNG or image-based PDF.

    Fonts are resolved once per size and cached for the renderer's lifetime.
    """

    def __init__(self, cfg: Optional[CertgenConfig] = None) -> None:
        self.cfg = cfg or CertgenConfig()
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    # -- Painting -----------------------------------------------------------------

    def _font(self, size: int) -> ImageFont.ImageFont:
        font = self._fonts.get(size)
        if font is not None:
            return font
        candidates: List[str] = []
        if self.cfg.render.font_path:
            candidates.append(self.cfg.render.font_path)
        candidates.extend(_FALLBACK_FONTS)
        for name in candidates:
            try:
                font = ImageFont.truetype(name, size)
                break
            except OSError:
                continue
        else:
            logger.warning("No TrueType serif font found; using Pillow default font")
            font = ImageFont.load_default(size=size)
        self._fonts[size] = font
        return font

    def render_image(self, data: CertificateData) -> Image.Image:
        """Paint the certificate card for `data`."""
        r = self.cfg.render
        s = r.scale
        width, height = r.width * s, r.height * s
        img = Image.new("RGB", (width, height), r.background)
        draw = ImageDraw.Draw(img)

        # Outer padding, then a thin frame around the content.
        pad = 40 * s
        frame = (pad, pad, width - pad, height - pad)
        draw.rectangle(frame, outline=_RULE, width=max(1, s))

        lines = list(
            certificate_lines(
                data, self.cfg.courses, self.cfg.workload_hours, self.cfg.fallback_label
            )
        )

        # Measure first so the whole block can be centered inside the frame.
        measured = []
        total = 0
        for role, text in lines:
            size, color, gap = _STYLE[role]
            font = self._font(size * s)
            left, top, right, bottom = font.getbbox(text)
            line_h = bottom - top
            measured.append((role, text, font, color, line_h, top, gap * s))
            total += line_h + gap * s

        cx = width // 2
        y = frame[1] + max(0, (frame[3] - frame[1] - total) // 2)
        prev_gap = 0
        for role, text, font, color, line_h, top, gap in measured:
            # Rules sit halfway into the gap above their line.
            rule_y = y - prev_gap // 2
            if role == "footer":
                draw.line((frame[0] + 24 * s, rule_y, frame[2] - 24 * s, rule_y),
                          fill=_RULE, width=max(1, s // 2))
            elif role == "signature":
                half = 96 * s
                draw.line((cx - half, rule_y, cx + half, rule_y), fill=_MUTED, width=max(1, s // 2))
            text_w = draw.textlength(text, font=font)
            draw.text((cx - text_w / 2, y - top), text, font=font, fill=color)
            y += line_h + gap
            prev_gap = gap

        return img

    # -- Export -------------------------------------------------------------------

    def export_png(self, data: CertificateData, output_path: Union[str, Path]) -> ExportResult:
        """Save the painted card as a PNG."""
        try:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self.render_image(data).save(path, format="PNG")
            return self._result(path)
        except (OSError, ValueError) as e:
            logger.exception("PNG export failed: %s", e)
            return ExportResult(success=False, output_path="", error_message=str(e))

    def export_pdf(self, data: CertificateData, output_path: Union[str, Path]) -> ExportResult:
        """
        Save the card as a single A4 portrait PDF page.

        The card is scaled to the full page width and anchored at the top-left
        corner, keeping its aspect ratio.
        """
        try:
            path = Path(output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            dpi = self.cfg.render.page_dpi
            page_w, page_h = a4_page_size(dpi)

            card = self.render_image(data)
            card_h = round(card.height * page_w / card.width)
            card = card.resize((page_w, card_h), Image.Resampling.LANCZOS)

            page = Image.new("RGB", (page_w, page_h), "#ffffff")
            page.paste(card, (0, 0))
            page.save(path, format="PDF", resolution=float(dpi))
            return self._result(path)
        except (OSError, ValueError) as e:
            logger.exception("PDF export failed: %s", e)
            return ExportResult(success=False, output_path="", error_message=str(e))

    @staticmethod
    def _result(path: Path) -> ExportResult:
        size = path.stat().st_size
        logger.info("Certificate written to %s (%d bytes)", path, size)
        return ExportResult(success=True, output_path=str(path), file_size_bytes=size)
