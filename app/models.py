import uuid
from datetime import datetime, timezone
from decimal import Decimal

from app import db

INVOICE_STATUSES = ("pending", "paid")


def _new_id() -> str:
    return str(uuid.uuid4())


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)

    invoices = db.relationship("Invoice", backref="customer", lazy=True)


class Invoice(db.Model):
    __tablename__ = "invoices"

    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    customer_id = db.Column(
        db.String(36), db.ForeignKey("customers.id"), nullable=False, index=True
    )
    # Stored in cents
    amount = db.Column(db.BigInteger, nullable=False)
    status = db.Column(db.String(20), nullable=False)
    # ISO date string, YYYY-MM-DD
    date = db.Column(db.String(10), nullable=False, index=True)

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_invoices_amount_positive"),
        db.CheckConstraint(
            "status IN ('pending', 'paid')", name="ck_invoices_status"
        ),
    )

    def to_dict(self):
        """Serialize the invoice with the amount in dollars for form prefill."""
        return {
            "id": self.id,
            "customerId": self.customer_id,
            "amount": str(Decimal(self.amount) / 100),
            "status": self.status,
            "date": self.date,
        }


class ActivityLog(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    activity = db.Column(db.String(255), nullable=False)
    timestamp = db.Column(
        db.DateTime, default=lambda: datetime.now(timezone.utc), nullable=False
    )
