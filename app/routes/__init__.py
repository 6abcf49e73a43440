"""Flask blueprint package for the invoice routes.

The ``invoice`` blueprint is defined in :mod:`app.routes.invoice_routes` and
registered in :mod:`app.__init__` under ``/dashboard/invoices``.
"""
