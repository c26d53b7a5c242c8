#!/usr/bin/env python3
"""
Slideshow of movie stills, one per slide, in call sheet order.

Slides are 16:9 (13.33" x 7.5", black). Each still is scaled to fit
MAX_IMAGE_WIDTH_PT x MAX_IMAGE_HEIGHT_PT keeping its aspect ratio, centred,
with the slide number boxed in the lower-right corner. Saved as a PDF so it
can be presented full screen from any viewer.
"""

import logging
import os
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

POINTS_PER_INCH = 72
SLIDE_WIDTH_PT = 960    # 13.33"
SLIDE_HEIGHT_PT = 540   # 7.5"
MAX_IMAGE_WIDTH_PT = 958
MAX_IMAGE_HEIGHT_PT = 540
DPI = 72              # 960x540 px slides; every slide is held in memory until save

NUMBER_BOX_PT = 18
NUMBER_MARGIN_PT = 36
NUMBER_FONT_PT = 20
BACKGROUND = (0, 0, 0)
NUMBER_COLOR = (255, 255, 255)


def image_size(path: str | Path) -> tuple[int, int]:
    """Intrinsic pixel (width, height) of an image.

    Raises:
        OSError: missing or unreadable image
    """
    try:
        with Image.open(path) as img:
            return img.size
    except OSError as e:
        raise OSError(f"Could not read image metadata for {path}: {e}") from e


def contain_size(width: int, height: int, max_width: float, max_height: float) -> tuple[float, float]:
    """Largest (w, h) with the same aspect ratio that fits inside the box."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid image size {width}x{height}")
    scale = min(max_width / width, max_height / height)
    return width * scale, height * scale


def _number_font(size_px: int):
    for name in ("arial", "DejaVuSans", "Arial"):
        try:
            return ImageFont.truetype(name, size_px)
        except OSError:
            continue
    return ImageFont.load_default(size_px)


def render_slide(still_path: str | Path, number: int, dpi: int = DPI) -> Image.Image:
    scale = dpi / POINTS_PER_INCH
    slide = Image.new("RGB", (int(SLIDE_WIDTH_PT * scale), int(SLIDE_HEIGHT_PT * scale)), BACKGROUND)

    img_w, img_h = image_size(still_path)
    fit_w, fit_h = contain_size(img_w, img_h, MAX_IMAGE_WIDTH_PT, MAX_IMAGE_HEIGHT_PT)
    target = (max(1, int(fit_w * scale)), max(1, int(fit_h * scale)))
    with Image.open(still_path) as img:
        still = img.convert("RGB").resize(target, Image.Resampling.LANCZOS)
    slide.paste(still, ((slide.width - target[0]) // 2, (slide.height - target[1]) // 2))

    draw = ImageDraw.Draw(slide)
    box = int(NUMBER_BOX_PT * scale)
    x = slide.width - int(NUMBER_MARGIN_PT * scale)
    y = slide.height - int(NUMBER_MARGIN_PT * scale)
    draw.rectangle((x, y, x + box, y + box), fill=BACKGROUND)
    font = _number_font(int(NUMBER_FONT_PT * scale))
    label = str(number)
    bbox = draw.textbbox((0, 0), label, font=font)
    draw.text(
        (x + (box - (bbox[2] - bbox[0])) // 2 - bbox[0], y + (box - (bbox[3] - bbox[1])) // 2 - bbox[1]),
        label,
        font=font,
        fill=NUMBER_COLOR,
    )
    return slide


def write_slideshow(stills: Sequence[str | Path], output_dir: str | Path, stamp: str, dpi: int = DPI) -> Path:
    """Render every still to NtF-<stamp>.pdf, slide numbers starting at 1."""
    if not stills:
        raise ValueError("write_slideshow: no stills to show")

    slides = []
    for idx, still in enumerate(stills, 1):
        slides.append(render_slide(still, idx, dpi=dpi))
        logger.debug(f"  Slide {idx}: {still}")

    path = Path(output_dir) / f"NtF-{stamp}.pdf"
    os.makedirs(path.parent, exist_ok=True)
    slides[0].save(path, "PDF", resolution=dpi, save_all=True, append_images=slides[1:])
    logger.info(f"Saved slideshow: {path} ({len(slides)} slides)")
    return path
