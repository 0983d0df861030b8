import os
import logging
from io import BytesIO
from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4
from reportlab.lib.colors import HexColor
from reportlab.pdfbase.pdfmetrics import stringWidth

from certificate import PlacedRule, PlacedText, RenderError, layout_certificate


def render_certificate(name, course, date, image_path=None):
    """Build the single-page A4 certificate and return the complete PDF bytes.

    The background image (when present on disk) is stretched over the whole
    page and painted before any text. Raises RenderError if reportlab fails,
    e.g. on a corrupt image.
    """
    page_width, page_height = A4
    packet = BytesIO()
    try:
        can = canvas.Canvas(packet, pagesize=A4)
        can.setTitle(f"Certificate of Completion - {name}")

        if image_path and os.path.exists(image_path):
            can.drawImage(image_path, 0, 0, width=page_width, height=page_height)
        elif image_path:
            logging.warning('[CERTIFICATE] Background image %s not found, rendering without it', image_path)

        for item in layout_certificate(name, course, date, page_width, page_height, stringWidth):
            if isinstance(item, PlacedText):
                can.setFont(item.font, item.size)
                can.setFillColor(HexColor(item.color))
                can.drawString(item.x, item.y, item.text)
            elif isinstance(item, PlacedRule):
                can.setStrokeColor(HexColor(item.color))
                can.setLineWidth(item.line_width)
                can.line(item.x1, item.y, item.x2, item.y)

        can.showPage()
        can.save()
    except Exception as e:
        raise RenderError('Error generating certificate') from e
    return packet.getvalue()
