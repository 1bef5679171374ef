"""Mini README: Tests for the edit-session state machine.

Structure:
    * submit adds while adding and updates while editing.
    * begin_edit/cancel_edit transitions and their failure modes.
    * confirmed and declined destructive operations.
"""

from __future__ import annotations

import asyncio
from datetime import date

import pytest

from pocketledger.errors import NotFoundError, ValidationError
from pocketledger.finance import EditSession, SessionMode, TransactionDraft, TransactionStore


def _session() -> EditSession:
    store = TransactionStore(today=lambda: date(2024, 3, 1))
    store.add({"description": "Salary", "amount": "1000", "type": "income"})
    return EditSession(store)


def _answer(value: bool):
    prompts = []

    async def confirm(prompt: str) -> bool:
        prompts.append(prompt)
        return value

    return confirm, prompts


def test_submit_while_adding_appends_and_stays_adding() -> None:
    session = _session()
    added = session.submit(TransactionDraft(description="Rent", amount="400", transaction_type="expense"))

    assert session.mode is SessionMode.ADDING
    assert session.store.all()[-1] == added


def test_edit_round_trip_updates_record_and_returns_to_adding() -> None:
    session = _session()
    values = session.begin_edit(1)

    assert values == {
        "id": 1,
        "description": "Salary",
        "amount": "1000",
        "type": "income",
        "category": "Other",
        "date": "2024-03-01",
    }
    assert session.mode is SessionMode.EDITING
    assert session.editing_id == 1

    updated = session.submit({"description": "Salary (March)", "amount": "1200", "type": "income"})

    assert session.mode is SessionMode.ADDING
    assert updated.transaction_id == 1
    assert len(session.store) == 1
    assert session.store.get(1).description == "Salary (March)"


def test_begin_edit_unknown_id_keeps_adding() -> None:
    session = _session()
    with pytest.raises(NotFoundError):
        session.begin_edit(9999)
    assert session.mode is SessionMode.ADDING


def test_invalid_submission_while_editing_stays_in_edit_mode() -> None:
    session = _session()
    session.begin_edit(1)

    with pytest.raises(ValidationError):
        session.submit({"description": "", "amount": "1000", "type": "income"})

    assert session.editing_id == 1
    assert session.store.get(1).description == "Salary"


def test_cancel_edit_returns_to_adding_without_mutation() -> None:
    session = _session()
    before = session.store.all()
    session.begin_edit(1)
    session.cancel_edit()

    assert session.mode is SessionMode.ADDING
    assert session.store.all() == before
    session.cancel_edit()
    assert session.mode is SessionMode.ADDING


def test_stale_edit_target_resets_session() -> None:
    session = _session()
    session.begin_edit(1)
    session.store.remove(1)

    with pytest.raises(NotFoundError):
        session.submit({"description": "Ghost", "amount": "1", "type": "income"})

    assert session.mode is SessionMode.ADDING
    assert session.store.all() == ()


def test_declined_confirmation_leaves_store_untouched() -> None:
    session = _session()
    confirm, prompts = _answer(False)

    assert asyncio.run(session.remove(1, confirm)) is False
    assert asyncio.run(session.clear(confirm)) is False

    assert len(session.store) == 1
    assert prompts == ["Delete 'Salary'?", "Delete all 1 transactions?"]


def test_confirmed_removal_of_edited_record_resets_session() -> None:
    session = _session()
    confirm, _ = _answer(True)
    session.begin_edit(1)

    assert asyncio.run(session.remove(1, confirm)) is True
    assert session.mode is SessionMode.ADDING
    assert session.store.all() == ()


def test_confirmed_clear_empties_store() -> None:
    session = _session()
    session.submit({"description": "Rent", "amount": "400", "type": "expense"})
    confirm, _ = _answer(True)

    assert asyncio.run(session.clear(confirm)) is True
    assert session.store.all() == ()
