from sqlalchemy import Column, Integer, String
from loyalty.core.db import Base
from loyalty.models.base.mixins import TimestampMixin
from loyalty.constants.branding import (
    DEFAULT_BUSINESS_NAME,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    DEFAULT_LOGO_URL,
    DEFAULT_WELCOME_MESSAGE,
)


class Branding(Base, TimestampMixin):
    __tablename__ = "branding"

    id = Column(Integer, primary_key=True)
    business_name = Column(String(255), nullable=False, default=DEFAULT_BUSINESS_NAME)
    primary_color = Column(String(7), nullable=False, default=DEFAULT_PRIMARY_COLOR)
    secondary_color = Column(String(7), nullable=False, default=DEFAULT_SECONDARY_COLOR)
    logo_url = Column(String(1000), nullable=False, default=DEFAULT_LOGO_URL)
    welcome_message = Column(String(500), nullable=False, default=DEFAULT_WELCOME_MESSAGE)

    def __repr__(self):
        return f"<Branding id={self.id} business_name={self.business_name}>"
