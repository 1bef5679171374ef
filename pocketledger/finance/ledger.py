"""Mini README: In-memory transaction ledger with persistence on every mutation.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - immutable record stored in the ledger.
    * TransactionDraft - raw user input before an identifier is assigned.
    * LedgerPersistence - protocol the store saves through after each mutation.
    * TransactionStore - ordered collection exposing add/update/remove/clear.

The store keeps transactions in insertion order and hands out identifiers from
a monotonic counter so two records can never share an id. Every mutating call
writes the whole ledger through the persistence adapter before returning; a
failed write is downgraded to a warning because the in-memory state is still
correct for the rest of the session.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

from ..errors import NotFoundError, PersistenceError, ValidationError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_CATEGORY = "Other"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"
MAX_AMOUNT_DIGITS = 15
_CENT = Decimal("0.01")


class TransactionType(str, Enum):
    """Enumerate the supported transaction directions."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = str(value).strip().lower()
            return cls(normalised)
        except ValueError as error:
            raise ValidationError(f"Unsupported transaction type: {value}") from error


@dataclass(frozen=True, slots=True)
class Transaction:
    """Represent a single ledger entry."""

    transaction_id: int
    transaction_type: TransactionType
    description: str
    category: str
    amount: Decimal
    occurred_on: date

    @property
    def display_date(self) -> str:
        return self.occurred_on.strftime(DISPLAY_DATE_FORMAT)

    @property
    def date_month(self) -> str:
        """Year-month key used by the month filter."""

        return f"{self.occurred_on.year:04d}-{self.occurred_on.month:02d}"

    @property
    def is_income(self) -> bool:
        return self.transaction_type is TransactionType.INCOME

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.is_income else -self.amount

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction in its persisted, JSON-friendly shape."""

        return {
            "id": self.transaction_id,
            "description": self.description,
            "amount": str(self.amount),
            "type": self.transaction_type.value,
            "category": self.category,
            "date": self.display_date,
            "dateMonth": self.date_month,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object], *, default_category: str = DEFAULT_CATEGORY) -> "Transaction":
        """Rebuild a transaction from its persisted shape.

        Records written by older versions carry numeric amounts and no
        ``category``/``dateMonth`` keys; both are accepted.
        """

        raw_id = payload.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValidationError(f"Transaction id must be an integer, got {raw_id!r}")
        return cls(
            transaction_id=raw_id,
            transaction_type=TransactionType.from_str(payload.get("type")),
            description=_parse_description(payload.get("description")),
            category=_parse_category(payload.get("category"), default_category),
            amount=_parse_amount(payload.get("amount")),
            occurred_on=_parse_date(payload.get("date")),
        )


@dataclass(slots=True)
class TransactionDraft:
    """User-supplied fields for a transaction, still unvalidated.

    ``None`` means "not supplied"; when a draft is used as an edit patch those
    fields keep their stored values.
    """

    description: Optional[str] = None
    amount: object = None
    transaction_type: object = None
    category: Optional[str] = None
    occurred_on: object = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "TransactionDraft":
        """Build a draft from form-style keys (``type``/``date`` aliases allowed)."""

        return cls(
            description=payload.get("description"),  # type: ignore[arg-type]
            amount=payload.get("amount"),
            transaction_type=payload.get("transaction_type", payload.get("type")),
            category=payload.get("category"),  # type: ignore[arg-type]
            occurred_on=payload.get("occurred_on", payload.get("date")),
        )

    def as_patch(self) -> Dict[str, object]:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }


PatchLike = Union[TransactionDraft, Mapping[str, object]]
Listener = Callable[["TransactionStore"], None]

_EDITABLE_FIELDS = {"description", "amount", "transaction_type", "category", "occurred_on"}
_PATCH_ALIASES = {"type": "transaction_type", "date": "occurred_on"}


class LedgerPersistence(Protocol):
    """Anything able to load and save the whole ledger as one unit."""

    def load(self) -> List[Transaction]:
        ...

    def save(self, transactions: Sequence[Transaction]) -> None:
        ...


def _parse_description(value: object) -> str:
    if value is None or not str(value).strip():
        raise ValidationError("Description must not be empty.")
    return str(value).strip()


def _parse_category(value: object, default_category: str) -> str:
    if value is None or not str(value).strip():
        return default_category
    return str(value).strip()


def _parse_amount(value: object) -> Decimal:
    """Parse a strictly positive decimal amount.

    Strings may use either ``.`` or ``,`` as the decimal separator; when both
    appear the last one wins and the other is treated as a thousands mark.
    """

    if value is None or isinstance(value, bool):
        raise ValidationError("Amount is required.")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        text = str(value).strip().replace(" ", "")
        if "," in text and "." in text:
            if text.rfind(",") > text.rfind("."):
                text = text.replace(".", "").replace(",", ".")
            else:
                text = text.replace(",", "")
        else:
            text = text.replace(",", ".")
        try:
            amount = Decimal(text)
        except InvalidOperation as error:
            raise ValidationError(f"Amount must be a number, got {value!r}") from error
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(f"Amount must be a positive number, got {value!r}")
    if amount.adjusted() >= MAX_AMOUNT_DIGITS or amount != amount.quantize(_CENT):
        raise ValidationError(f"Amount must have at most {MAX_AMOUNT_DIGITS} digits and 2 decimal places, got {value!r}")
    return amount


def _parse_date(value: object) -> date:
    """Parse ``DD/MM/YYYY`` or ISO strings, dates and datetimes."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if "/" in text:
                return datetime.strptime(text, DISPLAY_DATE_FORMAT).date()
            return date.fromisoformat(text)
        except ValueError as error:
            raise ValidationError(f"Unrecognised date: {value!r}") from error
    raise ValidationError("Dates must be provided as strings or date/datetime instances.")


def _coerce_patch(patch: PatchLike, default_category: str) -> Dict[str, object]:
    """Validate and coerce edit payloads before any stored record is touched."""

    raw = patch.as_patch() if isinstance(patch, TransactionDraft) else dict(patch)
    coerced: Dict[str, object] = {}
    for key, value in raw.items():
        name = _PATCH_ALIASES.get(key, key)
        if name not in _EDITABLE_FIELDS:
            raise ValidationError(f"Field '{key}' cannot be edited.")
        if value is None:
            continue
        if name == "description":
            coerced[name] = _parse_description(value)
        elif name == "amount":
            coerced[name] = _parse_amount(value)
        elif name == "transaction_type":
            coerced[name] = TransactionType.from_str(value)
        elif name == "category":
            coerced[name] = _parse_category(value, default_category)
        elif name == "occurred_on":
            coerced[name] = _parse_date(value)
    return coerced


class TransactionStore:
    """Own the ordered ledger and every mutation applied to it."""

    def __init__(
        self,
        persistence: Optional[LedgerPersistence] = None,
        *,
        transactions: Optional[Iterable[Transaction]] = None,
        default_category: str = DEFAULT_CATEGORY,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._persistence = persistence
        self._default_category = default_category
        self._today = today
        self._transactions: Dict[int, Transaction] = {}
        self._sequence = 0
        self._listeners: List[Listener] = []
        self.last_warning: Optional[str] = None

        if transactions is None and persistence is not None:
            transactions = persistence.load()
        for transaction in transactions or ():
            self._register(transaction)
        LOGGER.debug("Transaction store initialised with %s transactions", len(self._transactions))

    @property
    def default_category(self) -> str:
        return self._default_category

    def _next_id(self) -> int:
        self._sequence += 1
        return self._sequence

    def _register(self, transaction: Transaction) -> None:
        """Adopt an existing record, re-numbering it if its id is already taken."""

        if transaction.transaction_id in self._transactions or transaction.transaction_id < 1:
            fresh_id = max(self._sequence, max(self._transactions, default=0)) + 1
            LOGGER.warning(
                "Transaction id %s collides or is invalid; re-numbered as %s",
                transaction.transaction_id,
                fresh_id,
            )
            transaction = replace(transaction, transaction_id=fresh_id)
        self._transactions[transaction.transaction_id] = transaction
        self._sequence = max(self._sequence, transaction.transaction_id)

    def _require(self, transaction_id: int) -> Transaction:
        try:
            return self._transactions[transaction_id]
        except KeyError:
            LOGGER.error("Transaction %s requested but not present in the store", transaction_id)
            raise NotFoundError(transaction_id) from None

    def _commit(self, action: str) -> None:
        """Persist the whole ledger, then notify listeners."""

        self.last_warning = None
        if self._persistence is not None:
            try:
                self._persistence.save(self.all())
            except PersistenceError as error:
                self.last_warning = f"Changes kept for this session but could not be saved: {error}"
                LOGGER.warning("Saving ledger after %s failed: %s", action, error)
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                LOGGER.exception("Ledger listener %r failed after %s", listener, action)

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with the store after every mutation."""

        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def add(self, draft: PatchLike) -> Transaction:
        """Validate ``draft``, assign a fresh id and append it to the ledger."""

        if not isinstance(draft, TransactionDraft):
            draft = TransactionDraft.from_mapping(draft)
        if draft.transaction_type is None or not str(draft.transaction_type).strip():
            raise ValidationError("Transaction type is required.")
        transaction_type = TransactionType.from_str(draft.transaction_type)
        description = _parse_description(draft.description)
        amount = _parse_amount(draft.amount)
        category = _parse_category(draft.category, self._default_category)
        occurred_on = _parse_date(draft.occurred_on) if draft.occurred_on is not None else self._today()

        transaction = Transaction(
            transaction_id=self._next_id(),
            transaction_type=transaction_type,
            description=description,
            category=category,
            amount=amount,
            occurred_on=occurred_on,
        )
        self._transactions[transaction.transaction_id] = transaction
        LOGGER.info(
            "Added %s transaction %s (%s)",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.description,
        )
        self._commit("add")
        return transaction

    def update(self, transaction_id: int, patch: PatchLike) -> Transaction:
        """Merge ``patch`` into an existing record, keeping its id and position."""

        existing = self._require(transaction_id)
        changes = _coerce_patch(patch, self._default_category)
        updated = replace(existing, **changes)
        self._transactions[transaction_id] = updated
        LOGGER.info("Updated transaction %s fields=%s", transaction_id, sorted(changes))
        self._commit("update")
        return updated

    def remove(self, transaction_id: int) -> None:
        self._require(transaction_id)
        del self._transactions[transaction_id]
        LOGGER.info("Removed transaction %s", transaction_id)
        self._commit("remove")

    def clear(self) -> None:
        count = len(self._transactions)
        self._transactions.clear()
        LOGGER.info("Cleared ledger (%s transactions removed)", count)
        self._commit("clear")

    def get(self, transaction_id: int) -> Transaction:
        """Retrieve a transaction, raising ``NotFoundError`` when missing."""

        return self._require(transaction_id)

    def exists(self, transaction_id: int) -> bool:
        return transaction_id in self._transactions

    def all(self) -> Tuple[Transaction, ...]:
        """Return an immutable snapshot in insertion order."""

        return tuple(self._transactions.values())

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._transactions
