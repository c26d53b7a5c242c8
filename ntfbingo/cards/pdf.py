#!/usr/bin/env python3
"""
Render bingo card pages to a print-ready PDF.

Geometry comes in PDF points (72 per inch) from cards.grid; pages are drawn
with Pillow at DPI and saved as a multi-page letter-size PDF.

Usage:
  python -m ntfbingo.cards.pdf --out test-output.pdf
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Iterable

from PIL import Image, ImageDraw, ImageFont

from ntfbingo.cards.batch import Card, generate, synthetic_pool
from ntfbingo.cards.filler import KIND_TITLE, FilledCell
from ntfbingo.cards.grid import GridLayout, calculate_grids

logger = logging.getLogger(__name__)

# Page geometry
DPI = 150
POINTS_PER_INCH = 72
LETTER_WIDTH_PT = 612
LETTER_HEIGHT_PT = 792

TITLE_FILL_COLOR = "#dddddd"
STROKE_COLOR = "#555555"
TEXT_COLOR = "#333333"
LINE_WIDTH_PT = 1

TITLE_FONT_PT = 20
CELL_FONT_PT = 10


def _load_font(names: list[str], size_px: int):
    """Try a few TrueType fonts, falling back to Pillow's bundled default."""
    font_dirs = [
        Path(__file__).resolve().parent.parent / "fonts",
        Path("/usr/share/fonts/truetype/dejavu"),
        Path("/usr/share/fonts/truetype"),
        Path("C:/Windows/Fonts"),
    ]
    for name in names:
        for font_dir in font_dirs:
            path = font_dir / f"{name}.ttf"
            if path.exists():
                try:
                    return ImageFont.truetype(str(path), size_px)
                except OSError:
                    continue
        try:
            return ImageFont.truetype(name, size_px)
        except OSError:
            continue
    return ImageFont.load_default(size_px)


class PdfPageRenderer:
    """Minimal drawing surface: pages, rectangles, lines, centred text, save."""

    def __init__(self, width_pt: float = LETTER_WIDTH_PT, height_pt: float = LETTER_HEIGHT_PT, dpi: int = DPI):
        self.dpi = dpi
        self.scale = dpi / POINTS_PER_INCH
        self.size_px = (self._px(width_pt), self._px(height_pt))
        self.pages: list[Image.Image] = []
        self._draw: ImageDraw.ImageDraw | None = None

    def _px(self, points: float) -> int:
        return int(round(points * self.scale))

    def new_page(self, background: str = "white") -> None:
        page = Image.new("RGB", self.size_px, background)
        self.pages.append(page)
        self._draw = ImageDraw.Draw(page)

    @property
    def draw(self) -> ImageDraw.ImageDraw:
        if self._draw is None:
            raise RuntimeError("No page open. Call new_page() first.")
        return self._draw

    def rect(self, x: float, y: float, w: float, h: float, fill: str | None = None, outline: str | None = None) -> None:
        self.draw.rectangle(
            (self._px(x), self._px(y), self._px(x + w), self._px(y + h)),
            fill=fill,
            outline=outline,
            width=max(1, self._px(LINE_WIDTH_PT)) if outline else 0,
        )

    def line(self, x1: float, y1: float, x2: float, y2: float, color: str = STROKE_COLOR) -> None:
        self.draw.line(
            [(self._px(x1), self._px(y1)), (self._px(x2), self._px(y2))],
            fill=color,
            width=max(1, self._px(LINE_WIDTH_PT)),
        )

    def _wrap(self, text: str, font, max_width_px: int) -> list[str]:
        words = text.split()
        lines: list[str] = []
        current: list[str] = []
        for word in words:
            candidate = " ".join(current + [word])
            bbox = self.draw.textbbox((0, 0), candidate, font=font)
            if bbox[2] - bbox[0] <= max_width_px or not current:
                current.append(word)
            else:
                lines.append(" ".join(current))
                current = [word]
        if current:
            lines.append(" ".join(current))
        return lines or [""]

    def centered_text(self, text: str, x: float, y: float, w: float, h: float, font, fill: str = TEXT_COLOR) -> None:
        """Draw text wrapped to the box, centred horizontally and vertically."""
        padding = self._px(4)
        lines = self._wrap(text, font, self._px(w) - 2 * padding)
        line_height = int(getattr(font, "size", 12) * 1.2)
        total_height = line_height * len(lines)
        top = self._px(y) + (self._px(h) - total_height) // 2
        center_x = self._px(x) + self._px(w) // 2
        for i, line in enumerate(lines):
            bbox = self.draw.textbbox((0, 0), line, font=font)
            text_width = bbox[2] - bbox[0]
            self.draw.text((center_x - text_width // 2, top + i * line_height), line, font=font, fill=fill)

    def save(self, out_path: str | Path) -> Path:
        """Write all pages to one PDF."""
        if not self.pages:
            raise RuntimeError("Nothing to save: no pages were drawn")
        out_path = Path(out_path)
        os.makedirs(out_path.parent, exist_ok=True)
        self.pages[0].save(
            out_path,
            "PDF",
            resolution=self.dpi,
            save_all=True,
            append_images=self.pages[1:],
        )
        logger.info(f"Saved PDF: {out_path} ({len(self.pages)} pages)")
        return out_path


def draw_boxes(renderer: PdfPageRenderer, layout: GridLayout) -> None:
    """Draw both card outlines with a filled title row and the cell lines."""
    g = layout.geometry
    for origin in (layout.top[0], layout.bottom[0]):
        x, y = origin.x, origin.y
        renderer.rect(x, y, g.box_width, g.box_height, outline=STROKE_COLOR)
        renderer.rect(x, y, g.box_width, g.cell_height, fill=TITLE_FILL_COLOR, outline=STROKE_COLOR)
        for col in range(1, g.cols):
            cx = x + col * g.cell_width
            renderer.line(cx, y, cx, y + g.box_height)
        for row in range(1, g.rows):
            ry = y + row * g.cell_height
            renderer.line(x, ry, x + g.box_width, ry)


def draw_cells(renderer: PdfPageRenderer, cells: Iterable[FilledCell], title_font, cell_font) -> None:
    for cell in cells:
        r = cell.rect
        font = title_font if cell.kind == KIND_TITLE else cell_font
        renderer.centered_text(cell.text, r.x, r.y, r.width, r.height, font)


def render_cards(cards: list[Card], layout: GridLayout, out_path: str | Path, dpi: int = DPI) -> Path:
    """Render card pages (two cards per page) to a PDF."""
    renderer = PdfPageRenderer(dpi=dpi)
    scale = dpi / POINTS_PER_INCH
    title_font = _load_font(["OpenSans-Bold", "DejaVuSans-Bold", "arialbd"], int(TITLE_FONT_PT * scale))
    cell_font = _load_font(["OpenSans-Regular", "DejaVuSans", "arial"], int(CELL_FONT_PT * scale))

    for card in cards:
        renderer.new_page()
        draw_boxes(renderer, layout)
        draw_cells(renderer, card.top, title_font, cell_font)
        draw_cells(renderer, card.bottom, title_font, cell_font)
    return renderer.save(out_path)


def write_test_cards(out_path: str | Path = "test-output.pdf") -> Path:
    """Two cards from a synthetic 200-entry pool, for checking print output."""
    layout = calculate_grids()
    cards = generate(2, synthetic_pool(), layout=layout)
    return render_cards(cards, layout, out_path)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    parser = argparse.ArgumentParser(description="Render sample bingo cards from synthetic data")
    parser.add_argument("--out", default="test-output.pdf", help="Output PDF path")
    args = parser.parse_args()
    print(f"Generated: {write_test_cards(args.out)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
