from inventory_api.models.product import Product
from inventory_api.models.user import User

__all__ = ["Product", "User"]
