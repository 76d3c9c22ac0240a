# activities/certificate_generator.py

from io import BytesIO

from reportlab.pdfgen import canvas
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.lib import colors

ACCENT = colors.HexColor("#8b5cf6")
ACCENT_LIGHT = colors.HexColor("#a78bfa")
BACKGROUND = colors.HexColor("#f0f0fa")
INK = colors.HexColor("#1e1e32")
MUTED = colors.HexColor("#646478")

# Layout, in millimetres measured from the top edge of the page
TITLE_TOP = 105
TITLE_LINE_HEIGHT = 7
TITLE_SIDE_MARGIN = 60


def render_certificate(
    faculty_name,
    activity_title,
    activity_type,
    duration,
    issue_date,
    score,
    certificate_id,
) -> bytes:
    """
    Render the certificate of achievement for one approved activity.

    Layout is fixed: landscape A4, double border, emblem, title block, the
    faculty name in capitals, the wrapped activity title, a summary line
    that moves down with the number of title lines, a score badge, and a
    footer with the issue date, certificate id and signature rule.

    Returns the PDF bytes. ReportLab errors are not caught here; the caller
    decides how a failed render is reported.
    """
    buffer = BytesIO()

    page_size = landscape(A4)
    # invariant=1 keeps the output byte-stable for identical input
    p = canvas.Canvas(buffer, pagesize=page_size, invariant=1)
    p.setTitle(f"Certificate {certificate_id}")
    p.setSubject(activity_title or "")
    width, height = page_size

    def y(top_mm):
        return height - top_mm * mm

    centre = width / 2.0

    # ---------- Background ----------
    p.setFillColor(BACKGROUND)
    p.rect(0, 0, width, height, stroke=0, fill=1)

    # ---------- Border ----------
    p.setStrokeColor(ACCENT)
    p.setLineWidth(2 * mm)
    p.rect(10 * mm, 10 * mm, width - 20 * mm, height - 20 * mm, stroke=1, fill=0)

    p.setStrokeColor(ACCENT_LIGHT)
    p.setLineWidth(0.5 * mm)
    p.rect(12 * mm, 12 * mm, width - 24 * mm, height - 24 * mm, stroke=1, fill=0)

    # ---------- Emblem ----------
    p.setFillColor(ACCENT)
    p.circle(centre, y(30), 8 * mm, stroke=0, fill=1)
    p.setFillColor(colors.white)
    p.setFont("Helvetica-Bold", 16)
    p.drawCentredString(centre, y(32), "FDP")

    # ---------- Title ----------
    p.setFillColor(ACCENT)
    p.setFont("Helvetica-Bold", 36)
    p.drawCentredString(centre, y(55), "CERTIFICATE OF ACHIEVEMENT")

    p.setFillColor(MUTED)
    p.setFont("Helvetica", 12)
    p.drawCentredString(centre, y(70), "This is to certify that")

    # ---------- Recipient ----------
    p.setFillColor(INK)
    p.setFont("Helvetica-Bold", 28)
    p.drawCentredString(centre, y(85), str(faculty_name).upper())

    p.setFillColor(MUTED)
    p.setFont("Helvetica", 12)
    p.drawCentredString(centre, y(95), "has successfully completed")

    # ---------- Activity title (wrapped) ----------
    p.setFillColor(INK)
    p.setFont("Helvetica-Bold", 18)
    max_width = width - TITLE_SIDE_MARGIN * mm
    title_lines = simpleSplit(str(activity_title or ""), "Helvetica-Bold", 18, max_width) or [""]
    for index, line in enumerate(title_lines):
        p.drawCentredString(centre, y(TITLE_TOP + index * TITLE_LINE_HEIGHT), line)

    y_offset = TITLE_TOP + len(title_lines) * TITLE_LINE_HEIGHT

    # ---------- Type and duration ----------
    p.setFillColor(MUTED)
    p.setFont("Helvetica", 12)
    p.drawCentredString(
        centre,
        y(y_offset + 10),
        f"Activity Type: {activity_type} | Duration: {duration}",
    )

    # ---------- Score badge ----------
    badge_width, badge_height = 50 * mm, 15 * mm
    p.setFillColor(ACCENT)
    p.roundRect(
        centre - badge_width / 2,
        y(y_offset + 18) - badge_height,
        badge_width,
        badge_height,
        3 * mm,
        stroke=0,
        fill=1,
    )
    p.setFillColor(colors.white)
    p.setFont("Helvetica-Bold", 16)
    p.drawCentredString(centre, y(y_offset + 28), f"{score} Points")

    # ---------- Footer ----------
    # Footer and signature sit at fixed distances from the bottom edge
    footer_y = 25 * mm
    p.setFillColor(MUTED)
    p.setFont("Helvetica", 10)
    p.drawString(30 * mm, footer_y, f"Date: {issue_date}")
    p.drawRightString(width - 30 * mm, footer_y, f"Certificate ID: {certificate_id}")

    # ---------- Signature ----------
    p.setStrokeColor(MUTED)
    p.setLineWidth(0.5 * mm)
    p.line(centre - 30 * mm, 35 * mm, centre + 30 * mm, 35 * mm)
    p.drawCentredString(centre, 30 * mm, "Authorized Signature")

    p.showPage()
    p.save()

    return buffer.getvalue()
