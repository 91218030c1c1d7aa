"""
Error taxonomy shared by the API and the client.

Every error carries a user-facing message (Spanish, the language of the
inventory UI), the HTTP status the API answers with and a stable `code`
the client uses to rebuild the same exception on its side.
"""

from typing import Optional


class InventoryError(Exception):
    status_code: int = 400
    code: str = "inventory_error"
    default_message: str = "Ocurrió un error. Por favor, intente nuevamente."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"code": self.code, "detail": self.message}


class NotFound(InventoryError):
    status_code = 404
    code = "not_found"
    default_message = "El ítem no existe."


class DuplicateName(InventoryError):
    status_code = 409
    code = "duplicate_name"
    default_message = "Ya existe un ítem con ese nombre."


class InsufficientStock(InventoryError):
    status_code = 409
    code = "insufficient_stock"
    default_message = "No hay suficientes unidades para retirar"


class BackendUnavailable(InventoryError):
    status_code = 503
    code = "backend_unavailable"
    default_message = "No se pudieron cargar los datos. Por favor, intente nuevamente."


class InvalidScanPayload(InventoryError):
    status_code = 422
    code = "invalid_scan_payload"
    default_message = "El código QR no corresponde a un ítem."


class AdjustmentInProgress(InventoryError):
    status_code = 409
    code = "adjustment_in_progress"
    default_message = "Ya hay una actualización en curso para este ítem."


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        InventoryError,
        NotFound,
        DuplicateName,
        InsufficientStock,
        BackendUnavailable,
        InvalidScanPayload,
        AdjustmentInProgress,
    )
}


def error_from_code(code: Optional[str], message: Optional[str] = None) -> InventoryError:
    cls = ERRORS_BY_CODE.get(code or "", InventoryError)
    return cls(message)
