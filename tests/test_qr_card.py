import base64

from loyalty.utils.qr_code import generate_qr_png, generate_qr_data_url
from loyalty.utils.pdf_generators.loyalty_card_pdf import build_loyalty_card_pdf, card_filename

PNG_MAGIC = b"\x89PNG\r\n\x1a\n"


def test_qr_png_is_a_png():
    assert generate_qr_png("LC1700000000000ABCD").startswith(PNG_MAGIC)


def test_qr_data_url_embeds_the_png():
    url = generate_qr_data_url("LC1700000000000ABCD")
    prefix = "data:image/png;base64,"
    assert url.startswith(prefix)
    assert base64.b64decode(url[len(prefix):]) == generate_qr_png("LC1700000000000ABCD")


def test_card_filename_is_header_safe():
    assert card_filename("Dana Smith") == "loyalty-card-dana-smith.pdf"
    assert card_filename("Zoë & Co") == "loyalty-card-zo-co.pdf"
    assert card_filename("李") == "loyalty-card-customer.pdf"


def test_card_pdf_handles_markup_characters():
    content = build_loyalty_card_pdf(
        customer_id="LC1700000000000ABCD",
        customer_name="Tom & <Jerry>",
        business_name="Bean & Leaf",
        welcome_message="",
    )
    assert content.startswith(b"%PDF")
