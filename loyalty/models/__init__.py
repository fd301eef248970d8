# Customers
from loyalty.models.customers.customer_models import Customer

# Catalog
from loyalty.models.catalog.item_models import Item

# Points
from loyalty.models.points.ledger_models import CustomerItemPoints
from loyalty.models.points.transaction_models import PointTransaction

# Settings
from loyalty.models.settings.settings_models import Settings
from loyalty.models.settings.branding_models import Branding

#users and auth
from loyalty.models.users.user_models import User, RefreshToken
from loyalty.models.support.activity_models import UserActivity
