# =========================================================
# STOCKWATCH ERRORS
#
# Every failure the ledger or the reference-data routes can
# report is a StockError subclass with a stable code.
# main.py renders them as {"error": code, "detail": message}.
# =========================================================

from decimal import Decimal


class StockError(Exception):
    code = "stock_error"
    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.detail}


class ValidationError(StockError):
    """Malformed or missing input, rejected before the store is touched."""

    code = "validation_error"
    status_code = 400


class InvalidReference(StockError):
    """A referenced item, unit, supplier or menu item does not exist."""

    code = "invalid_reference"
    status_code = 400


class NotFound(StockError):
    code = "not_found"
    status_code = 404


class Conflict(StockError):
    code = "conflict"
    status_code = 409


class InsufficientStock(StockError):
    code = "insufficient_stock"
    status_code = 400

    def __init__(
        self,
        item_id: int,
        item_name: str,
        requested: Decimal,
        available: Decimal,
    ):
        self.item_id = item_id
        self.item_name = item_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for '{item_name}' (item {item_id}): "
            f"requested {requested}, available {available}"
        )

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload.update(
            {
                "item_id": self.item_id,
                "requested": str(self.requested),
                "available": str(self.available),
            }
        )
        return payload


class TransactionFailure(StockError):
    """Unexpected store error. The transaction has been rolled back."""

    code = "transaction_failure"
    status_code = 500
