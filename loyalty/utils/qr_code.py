# loyalty/utils/qr_code.py

import base64
from io import BytesIO

import qrcode
from qrcode.constants import ERROR_CORRECT_M

QR_BOX_SIZE = 10
QR_BORDER = 2


def generate_qr_png(data: str) -> bytes:
    """Render ``data`` as a black-on-white PNG QR code."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=QR_BOX_SIZE,
        border=QR_BORDER,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def generate_qr_data_url(data: str) -> str:
    encoded = base64.b64encode(generate_qr_png(data)).decode()
    return f"data:image/png;base64,{encoded}"
