# invoicing/errors.py


class DataFetchError(Exception):
    """
    A store/query failure. The message is generic and safe to show to users;
    the underlying driver error is logged where it is caught.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvoiceNotFoundError(Exception):
    def __init__(self, invoice_id: str):
        super().__init__(f"Invoice {invoice_id!r} not found")
        self.invoice_id = invoice_id
