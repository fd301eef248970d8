# loyalty/services/customers/loyalty_card_service.py

from sqlalchemy.ext.asyncio import AsyncSession

from loyalty.core.exceptions import NotFoundException
from loyalty.constants.error_codes import ErrorCode
from loyalty.models.customers.customer_models import Customer
from loyalty.services.settings.branding_service import get_or_create_branding
from loyalty.utils.pdf_generators.loyalty_card_pdf import build_loyalty_card_pdf, card_filename


async def generate_loyalty_card_pdf(db: AsyncSession, customer_id: str) -> tuple[str, bytes]:
    """Return (filename, pdf bytes) for the customer's printable card."""
    customer = await db.get(Customer, customer_id)
    if not customer:
        raise NotFoundException("Customer not found", ErrorCode.CUSTOMER_NOT_FOUND)

    branding = await get_or_create_branding(db)
    await db.commit()

    content = build_loyalty_card_pdf(
        customer_id=customer.id,
        customer_name=customer.name,
        business_name=branding.business_name,
        welcome_message=branding.welcome_message,
    )
    return card_filename(customer.name), content
