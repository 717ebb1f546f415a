"""Mini README: JSON file ledger store.

Structure:
    * JsonFileLedgerStore - one ``transactions_<user>.json`` file per user.

Each save serialises the complete ledger to a temporary file in the same
directory and atomically swaps it into place with ``os.replace``, so a failed
write never leaves a truncated ledger behind. User identifiers are
percent-encoded before they become part of a file name.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence, Union
from urllib.parse import quote

from ..ledger.errors import PersistenceFailure, ValidationError
from ..ledger.models import Transaction
from ..logging_utils import get_logger
from .base import LedgerStore

if TYPE_CHECKING:
    from ..configuration import LedgerSettings

LOGGER = get_logger(__name__)


class JsonFileLedgerStore(LedgerStore):
    """Persist each user's ledger as a JSON array on disk."""

    backend_name = "json"

    def __init__(self, data_directory: Union[str, Path]) -> None:
        self.data_directory = Path(data_directory).expanduser()
        LOGGER.debug("JSON ledger store rooted at %s", self.data_directory)

    @classmethod
    def from_settings(cls, settings: "LedgerSettings") -> "JsonFileLedgerStore":
        return cls(settings.data_directory)

    def path_for(self, user_id: str) -> Path:
        """Return the file holding ``user_id``'s ledger."""

        if not user_id or not user_id.strip():
            raise ValidationError("User id must not be empty")
        # Percent-encoding is reversible: one file per distinct user id.
        safe_id = quote(user_id.strip(), safe="")
        return self.data_directory / f"transactions_{safe_id}.json"

    def load(self, user_id: str) -> Optional[List[Transaction]]:
        path = self.path_for(user_id)
        if not path.exists():
            LOGGER.debug("No stored ledger for user %s", user_id)
            return None
        try:
            with path.open("r", encoding="utf-8") as ledger_file:
                records = json.load(ledger_file)
        except (OSError, json.JSONDecodeError) as error:
            raise PersistenceFailure(f"Could not read ledger {path}: {error}") from error
        if not isinstance(records, list):
            raise PersistenceFailure(f"Ledger {path} does not contain a list of transactions")
        try:
            transactions = [Transaction.from_dict(record) for record in records]
        except ValidationError as error:
            raise PersistenceFailure(f"Ledger {path} is corrupt: {error}") from error
        LOGGER.info("Loaded %s transactions for user %s", len(transactions), user_id)
        return transactions

    def save(self, user_id: str, transactions: Sequence[Transaction]) -> None:
        path = self.path_for(user_id)
        payload = [transaction.as_dict() for transaction in transactions]
        temp_name: Optional[str] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle, temp_name = tempfile.mkstemp(
                prefix=f".{path.stem}.", suffix=".tmp", dir=str(path.parent)
            )
            with os.fdopen(handle, "w", encoding="utf-8") as temp_file:
                json.dump(payload, temp_file, indent=2)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            os.replace(temp_name, path)
            temp_name = None
        except OSError as error:
            raise PersistenceFailure(f"Could not write ledger {path}: {error}") from error
        finally:
            if temp_name is not None and os.path.exists(temp_name):
                os.unlink(temp_name)
        LOGGER.debug("Wrote %s transactions for user %s to %s", len(payload), user_id, path)
