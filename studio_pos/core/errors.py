# studio_pos/core/errors.py
"""Domain errors raised by the POS, customer and ledger services.

Each error carries the HTTP status it maps to and a short notice that is
safe to show to the person at the counter.
"""


class PosError(Exception):
    status_code = 500
    message = "Something went wrong"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(PosError):
    """Rejected locally, before any I/O."""
    status_code = 400
    message = "Invalid input"


class EmptyBillError(ValidationError):
    message = "Bill is empty!"


class MissingCustomerInfoError(ValidationError):
    message = "Customer details required!"


class InvalidItemError(ValidationError):
    message = "Please enter item name and valid rate"


class InvalidDiscountError(ValidationError):
    message = "Discount must be between 0 and 100 percent"


class ConfirmationRequiredError(ValidationError):
    message = "Please confirm before clearing the bill"


class NotFoundError(PosError):
    status_code = 404
    message = "Not found"


class DuplicatePhoneError(PosError):
    status_code = 409
    message = "Phone number already exists"


class PersistenceError(PosError):
    status_code = 503
    message = "Storage is unavailable, please try again"


class TransactionSaveError(PersistenceError):
    message = "Failed to save transaction"


class HistoryLoadError(PersistenceError):
    message = "Failed to load history"


class BillBusyError(ValidationError):
    message = "Bill is being saved"
