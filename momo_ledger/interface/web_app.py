"""Mini README: FastAPI service exposing the merchant ledger.

Structure:
    * create_application - application factory wiring the session, the store
      and the JSON routes.

The service holds one ``LedgerSession``; the identity provider signs the
merchant in elsewhere and forwards the resulting user id to ``POST /session``.
Every ledger route then works against that user's engine until ``DELETE
/session``. Responses are JSON; amounts are decimal strings.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import JSONResponse

from ..configuration import LedgerSettings, get_settings
from ..ledger import (
    LedgerEngine,
    NoActiveSession,
    PersistenceFailure,
    Transaction,
    TransactionAlreadyCancelled,
    ValidationError,
)
from ..ledger.engine import Clock, utc_now
from ..logging_utils import configure_root_logger, get_logger
from ..session import LedgerSession
from ..storage import LedgerStore, build_store

LOGGER = get_logger(__name__)


def _serialise(transactions: List[Transaction]) -> List[Dict[str, object]]:
    return [transaction.as_dict() for transaction in transactions]


def create_application(
    settings: Optional[LedgerSettings] = None,
    store: Optional[LedgerStore] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    store = store or build_store(settings)
    session = LedgerSession(store, clock=clock, date_policy=settings.date_policy)

    app = FastAPI(title="Momo Ledger", version="0.1.0")
    app.state.session = session

    def active_engine() -> LedgerEngine:
        try:
            return session.engine
        except NoActiveSession as error:
            raise HTTPException(status_code=401, detail=str(error)) from error

    def with_status(engine: LedgerEngine, payload: Dict[str, object]) -> Dict[str, object]:
        if engine.persistence_pending:
            payload["persistence_warning"] = engine.last_persistence_error
        return payload

    @app.get("/health")
    async def health() -> JSONResponse:
        """Report the storage backend and whether a user is signed in."""

        return JSONResponse(
            {
                "status": "ok",
                "environment": settings.environment,
                "store": store.metadata(),
                "signed_in": session.is_active,
            }
        )

    @app.post("/session")
    async def start_session(user_id: str = Form(...)) -> JSONResponse:
        """Load the ledger for the user the identity provider signed in."""

        try:
            engine = session.sign_in(user_id)
        except ValidationError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        except PersistenceFailure as error:
            LOGGER.error("Could not load ledger for user %s: %s", user_id, error)
            raise HTTPException(status_code=503, detail=str(error)) from error
        return JSONResponse({"user_id": engine.user_id, "transaction_count": len(engine)})

    @app.delete("/session")
    async def end_session() -> JSONResponse:
        """Unload the active ledger."""

        session.sign_out()
        return JSONResponse({"signed_in": False})

    @app.get("/transactions")
    async def list_transactions(on: Optional[str] = None) -> JSONResponse:
        """Return the ledger, optionally restricted to one day."""

        engine = active_engine()
        try:
            transactions = engine.list_for_date(on) if on else engine.transactions
        except ValidationError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        LOGGER.debug("Returning %s transactions for day=%s", len(transactions), on)
        return JSONResponse(with_status(engine, {"transactions": _serialise(transactions)}))

    @app.post("/transactions", status_code=201)
    async def add_transaction(
        transaction_type: str = Form(...),
        amount: str = Form(...),
        customer_name: str = Form(...),
        customer_phone: str = Form(...),
        reference: str = Form(""),
    ) -> JSONResponse:
        """Record a deposit, withdrawal or airtime sale."""

        engine = active_engine()
        try:
            transaction = engine.add(
                transaction_type, amount, customer_name, customer_phone, reference
            )
        except ValidationError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        return JSONResponse(
            with_status(engine, {"transaction": transaction.as_dict()}), status_code=201
        )

    @app.post("/transactions/{transaction_id}/cancel")
    async def cancel_transaction(transaction_id: str, reason: str = Form(...)) -> JSONResponse:
        """Cancel a transaction, keeping it for the audit trail."""

        engine = active_engine()
        try:
            cancelled = engine.cancel(transaction_id, reason)
        except TransactionAlreadyCancelled as error:
            raise HTTPException(status_code=409, detail=str(error)) from error
        except ValidationError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        if not cancelled:
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        transaction = engine.get_transaction(transaction_id)
        return JSONResponse(with_status(engine, {"transaction": transaction.as_dict()}))

    @app.delete("/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str) -> JSONResponse:
        """Remove a transaction permanently."""

        engine = active_engine()
        if not engine.delete(transaction_id):
            raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
        return JSONResponse(with_status(engine, {"deleted": transaction_id}))

    @app.get("/summary")
    async def daily_summary(on: Optional[str] = None) -> JSONResponse:
        """Return totals for one day (today when omitted)."""

        engine = active_engine()
        try:
            summary = engine.summarise_day(on)
        except ValidationError as error:
            raise HTTPException(status_code=422, detail=str(error)) from error
        return JSONResponse(with_status(engine, {"summary": summary.as_dict()}))

    return app
