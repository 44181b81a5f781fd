# cinema_brew/lib/pdf.py
from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from PIL import Image as PILImage
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Flowable, Image, Paragraph, SimpleDocTemplate, Spacer

from cinema_brew import logger

log = logger.get_logger(__name__)

_styles = getSampleStyleSheet()
TITLE = _styles["Title"]
HEADING = _styles["Heading2"]
SUBHEADING = _styles["Heading4"]
BODY = _styles["BodyText"]

PAGE_SIZE = letter
MARGIN = inch
FRAME_WIDTH = PAGE_SIZE[0] - 2 * MARGIN
FRAME_HEIGHT = PAGE_SIZE[1] - 3 * MARGIN  # leave room for a caption


def text(value, style=BODY) -> Paragraph:
    """Paragraph from untrusted text (model output is not valid reportlab markup)."""
    return Paragraph(escape(str(value)).replace("\n", "<br/>"), style)

def labelled(label: str, value) -> Paragraph:
    return Paragraph(f"<b>{escape(label)}:</b> {escape(str(value))}", BODY)

def gap(height: float = 0.15 * inch) -> Spacer:
    return Spacer(1, height)

def picture(img: PILImage.Image, max_width: float = FRAME_WIDTH, max_height: float = FRAME_HEIGHT) -> Image:
    """Embed a PIL image scaled to fit max_width x max_height, keeping its ratio."""
    buf = BytesIO()
    img.save(buf, format="JPEG", quality=98)
    buf.seek(0)
    scale = min(max_width / img.width, max_height / img.height)
    return Image(buf, width=img.width * scale, height=img.height * scale)


def make_pdf(title: str, story: List[Flowable]) -> bytes:
    """Lay out `story` under a title on letter pages with 1in margins."""
    log.info(f"Rendering PDF '{title}' ({len(story)} blocks)")
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=PAGE_SIZE,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=title,
    )
    doc.build([Paragraph(escape(title), TITLE), gap()] + list(story))
    return buf.getvalue()
