from datetime import datetime
from datetime import timezone as dt_timezone

from flask import Blueprint, abort, current_app, jsonify, redirect, url_for
from sqlalchemy.exc import SQLAlchemyError

from app import INVOICES_PATH, cache, db, limiter
from app.errors import (
    InvoiceActionError,
    InvoiceDatabaseError,
    InvoiceValidationError,
)
from app.forms import DeleteForm, InvoiceForm
from app.models import Customer, Invoice
from app.utils.activity import log_activity
from app.utils.cache import VIEW_KEY_PREFIX, revalidate_path
from app.utils.numeric import to_cents

invoice = Blueprint("invoice", __name__, url_prefix=INVOICES_PATH)


def _mutation_rate_limit():
    return current_app.config["MUTATION_RATE_LIMIT"]


def _today() -> str:
    """Return the current UTC date as ``YYYY-MM-DD``."""
    return datetime.now(dt_timezone.utc).date().isoformat()


def _validated_fields(form, message):
    """Return ``(customer_id, amount_in_cents, status)`` or raise."""
    if not form.validate_on_submit():
        raise InvoiceValidationError(message, form.errors)
    return form.customerId.data, to_cents(form.amount.data), form.status.data


def _execute(statement, message):
    """Run ``statement`` and commit, mapping failures to a generic error."""
    try:
        result = statement()
        db.session.commit()
    except (SQLAlchemyError, OverflowError) as exc:
        db.session.rollback()
        current_app.logger.exception(message)
        raise InvoiceDatabaseError(message) from exc
    return result


@invoice.errorhandler(InvoiceActionError)
def handle_invoice_action_error(error):
    """Return the error state of a failed action as JSON."""
    return jsonify(error.to_dict()), error.status_code


@invoice.route("", methods=["GET"])
@cache.cached(key_prefix=VIEW_KEY_PREFIX)
def view_invoices():
    """List invoices, newest first, with their customer names."""
    rows = (
        db.session.query(Invoice, Customer.name)
        .outerjoin(Customer, Invoice.customer_id == Customer.id)
        .order_by(Invoice.date.desc(), Invoice.id)
        .all()
    )
    invoices = []
    for row, customer_name in rows:
        data = row.to_dict()
        data["amountInCents"] = row.amount
        data["customerName"] = customer_name
        invoices.append(data)
    return {"invoices": invoices}


@invoice.route("/<invoice_id>", methods=["GET"])
def view_invoice(invoice_id):
    """Return one invoice, used to prefill the edit form."""
    row = db.session.get(Invoice, invoice_id)
    if row is None:
        abort(404)
    return row.to_dict()


@invoice.route("/create", methods=["POST"])
@limiter.limit(_mutation_rate_limit)
def create_invoice():
    """Validate the submitted form, insert an invoice and redirect to the list."""
    form = InvoiceForm()
    customer_id, amount_in_cents, status = _validated_fields(
        form, "Missing Fields. Failed to Create Invoice."
    )

    new_invoice = Invoice(
        customer_id=customer_id,
        amount=amount_in_cents,
        status=status,
        date=_today(),
    )

    def insert():
        db.session.add(new_invoice)
        db.session.flush()

    _execute(insert, "Database Error: Failed to Create Invoice.")
    log_activity(f"Created invoice {new_invoice.id}")

    revalidate_path(INVOICES_PATH)
    return redirect(url_for("invoice.view_invoices"))


@invoice.route("/<invoice_id>/edit", methods=["POST"])
@limiter.limit(_mutation_rate_limit)
def update_invoice(invoice_id):
    """Validate the submitted form, update the invoice and redirect to the list."""
    form = InvoiceForm()
    customer_id, amount_in_cents, status = _validated_fields(
        form, "Missing Fields. Failed to Update Invoice."
    )

    _execute(
        lambda: Invoice.query.filter_by(id=invoice_id).update(
            {
                Invoice.customer_id: customer_id,
                Invoice.amount: amount_in_cents,
                Invoice.status: status,
            },
            synchronize_session=False,
        ),
        "Database Error: Failed to Update Invoice.",
    )
    log_activity(f"Updated invoice {invoice_id}")

    revalidate_path(INVOICES_PATH)
    return redirect(url_for("invoice.view_invoices"))


@invoice.route("/<invoice_id>/delete", methods=["POST"])
@limiter.limit(_mutation_rate_limit)
def delete_invoice(invoice_id):
    """Delete an invoice. The caller is already on the list, so no redirect."""
    form = DeleteForm()
    if not form.validate_on_submit():
        abort(400)

    _execute(
        lambda: Invoice.query.filter_by(id=invoice_id).delete(
            synchronize_session=False
        ),
        "Database Error: Failed to Delete Invoice.",
    )
    log_activity(f"Deleted invoice {invoice_id}")

    revalidate_path(INVOICES_PATH)
    return jsonify({"message": "Deleted Invoice."})
