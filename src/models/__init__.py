# Import all models so SQLAlchemy metadata is populated for Alembic autogenerate
from src.models.customer import Customer
from src.models.enums import InvoiceStatus
from src.models.invoice import Invoice
from src.models.user import User

__all__ = [
    "Customer",
    "Invoice",
    "InvoiceStatus",
    "User",
]
