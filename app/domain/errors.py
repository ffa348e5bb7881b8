# app/domain/errors.py


class CartValidationError(ValueError):
    """Niepoprawne dane wejsciowe - zawsze 400, nigdy nie zapisywane."""


class CartNotFoundError(LookupError):
    """Koszyk nie istnieje."""


class ItemNotFoundError(CartNotFoundError):
    """Produktu nie ma w koszyku."""


class StorageUnavailableError(RuntimeError):
    """Baza danych nie odpowiada albo zwrocila blad."""


class CartConflictError(StorageUnavailableError):
    """Koszyk zostal zmodyfikowany przez inna operacje (optimistic locking)."""
