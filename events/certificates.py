"""
Workshop completion certificates, drawn with reportlab.
"""
import io

from django.utils import timezone
from reportlab.lib.colors import HexColor, white
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

ACCENT = HexColor("#5b2bbf")
INK = HexColor("#202124")
MUTED = HexColor("#6b6f76")

MARGIN = 22 * mm
BAND_HEIGHT = 48 * mm


def _detail_rows(registration):
    workshop = registration.workshop
    held_on = timezone.localtime(workshop.date)
    return [
        ("Workshop", workshop.title),
        ("Date", held_on.strftime("%d %B %Y")),
        ("Venue", workshop.location),
        ("Organization", registration.organization or "-"),
    ]


def render_certificate(registration):
    """Return a BytesIO holding a one page portrait PDF for an attended registration."""
    buffer = io.BytesIO()
    width, height = A4
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(f"Certificate {registration.get_certificate_id()}")

    pdf.setFillColor(ACCENT)
    pdf.rect(0, height - BAND_HEIGHT, width, BAND_HEIGHT, stroke=0, fill=1)
    pdf.setFillColor(white)
    pdf.setFont("Helvetica-Bold", 26)
    pdf.drawString(MARGIN, height - 26 * mm, "REvamp")
    pdf.setFont("Helvetica", 12)
    pdf.drawString(MARGIN, height - 35 * mm, "Certificate of Completion")

    y = height - BAND_HEIGHT - 30 * mm
    pdf.setFillColor(MUTED)
    pdf.setFont("Helvetica", 12)
    pdf.drawString(MARGIN, y, "Awarded to")
    y -= 14 * mm
    pdf.setFillColor(INK)
    pdf.setFont("Helvetica-Bold", 30)
    pdf.drawString(MARGIN, y, registration.name)
    y -= 6 * mm
    pdf.setStrokeColor(ACCENT)
    pdf.setLineWidth(2)
    pdf.line(MARGIN, y, width - MARGIN, y)

    y -= 16 * mm
    for label, value in _detail_rows(registration):
        pdf.setFillColor(MUTED)
        pdf.setFont("Helvetica", 11)
        pdf.drawString(MARGIN, y, label.upper())
        pdf.setFillColor(INK)
        pdf.setFont("Helvetica-Bold", 14)
        pdf.drawString(MARGIN + 45 * mm, y, value)
        y -= 11 * mm

    pdf.setFillColor(MUTED)
    pdf.setFont("Helvetica", 9)
    pdf.drawString(MARGIN, MARGIN, f"Certificate ID {registration.get_certificate_id()}")
    pdf.drawRightString(width - MARGIN, MARGIN, "Issued by the REvamp student community")

    pdf.showPage()
    pdf.save()
    buffer.seek(0)
    return buffer
