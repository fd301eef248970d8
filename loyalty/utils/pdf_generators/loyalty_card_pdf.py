# loyalty/utils/pdf_generators/loyalty_card_pdf.py
import re
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A6
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Image
from reportlab.lib.styles import getSampleStyleSheet

from loyalty.utils.qr_code import generate_qr_png


def card_filename(customer_name: str) -> str:
    # Header-safe ASCII only
    slug = re.sub(r"[^a-z0-9]+", "-", customer_name.lower()).strip("-") or "customer"
    return f"loyalty-card-{slug}.pdf"


def build_loyalty_card_pdf(
    *,
    customer_id: str,
    customer_name: str,
    business_name: str,
    welcome_message: str,
) -> bytes:
    """
    Build a printable A6 loyalty card: business header, customer name,
    the customer's QR code and its identifier underneath.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A6,
        leftMargin=8 * mm,
        rightMargin=8 * mm,
        topMargin=8 * mm,
        bottomMargin=8 * mm,
        title=f"Loyalty card - {customer_name}",
    )

    styles = getSampleStyleSheet()
    story = []

    # -----------------------------
    # HEADER
    # -----------------------------
    story.append(Paragraph(f"<b>{escape(business_name)}</b>", styles["Title"]))
    if welcome_message:
        story.append(Paragraph(escape(welcome_message), styles["Normal"]))
    story.append(Spacer(1, 6))

    # -----------------------------
    # CUSTOMER
    # -----------------------------
    story.append(Paragraph(f"<b>{escape(customer_name)}</b>", styles["Heading3"]))
    story.append(Spacer(1, 4))

    qr_image = Image(BytesIO(generate_qr_png(customer_id)), width=45 * mm, height=45 * mm)
    story.append(qr_image)
    story.append(Spacer(1, 4))
    story.append(Paragraph(f"Card ID: {customer_id}", styles["Normal"]))

    doc.build(story)
    return buffer.getvalue()

