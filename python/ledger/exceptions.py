"""
Ledger Exceptions

Error types raised by validation and the data-access stores.
"""


class LedgerError(Exception):
    """Base class for ledger errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LedgerValidationError(LedgerError):
    """A request field is missing or malformed."""


class NotFoundError(LedgerError):
    """A referenced record does not exist."""


class KhataNotFoundError(NotFoundError):
    def __init__(self, khata_id: int):
        super().__init__("Khata not found")
        self.khata_id = khata_id


class PartyNotFoundError(NotFoundError):
    def __init__(self, party_id: int):
        super().__init__("Party not found")
        self.party_id = party_id


class StorageError(LedgerError):
    """The data-access layer failed."""
