from flask_wtf import FlaskForm
from wtforms import Field, SelectField, StringField
from wtforms.validators import AnyOf, DataRequired, ValidationError

from app.models import INVOICE_STATUSES
from app.utils.numeric import coerce_amount, is_storable_amount

AMOUNT_MESSAGE = "Please enter an amount greater than $0."
CUSTOMER_MESSAGE = "Please select a customer."
STATUS_MESSAGE = "Please select an invoice status."


class CoercedAmountField(Field):
    """Amount field that coerces its raw text to a Decimal before validation.

    Unlike :class:`wtforms.fields.DecimalField` a value that cannot be
    coerced does not add a processing error of its own; ``data`` becomes
    ``None`` and the field validators report the single amount message.
    """

    def process_formdata(self, valuelist):
        self.data = coerce_amount(valuelist[0] if valuelist else None)


class GreaterThan:
    """Validates that the field data is strictly greater than ``minimum``."""

    def __init__(self, minimum, message=None):
        self.minimum = minimum
        self.message = message

    def __call__(self, form, field):
        if field.data is None or field.data <= self.minimum:
            message = self.message or field.gettext(
                "Number must be greater than %(min)s."
            ) % {"min": self.minimum}
            raise ValidationError(message)


class InvoiceForm(FlaskForm):
    """Fields accepted by the create and update invoice actions.

    ``id`` and ``date`` are not form fields: the id comes from the route
    and the date is stamped server-side.
    """

    customerId = StringField(
        "Customer", validators=[DataRequired(message=CUSTOMER_MESSAGE)]
    )
    amount = CoercedAmountField(
        "Amount", validators=[GreaterThan(0, message=AMOUNT_MESSAGE)]
    )
    status = SelectField(
        "Status",
        choices=[(status, status.title()) for status in INVOICE_STATUSES],
        validate_choice=False,
        validators=[AnyOf(INVOICE_STATUSES, message=STATUS_MESSAGE)],
    )

    def validate_amount(self, field):
        # The amount must also fit in the cents column once rounded.
        if field.data is not None and field.data > 0 and not is_storable_amount(
            field.data
        ):
            raise ValidationError(AMOUNT_MESSAGE)


class DeleteForm(FlaskForm):
    """Empty form used for CSRF protection on delete actions."""
