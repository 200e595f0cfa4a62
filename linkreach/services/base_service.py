"""Shared service base: one session, one caller, tenant-scoped queries."""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from linkreach.auth.tenant_context import TenantContext, scope_query
from linkreach.core.exceptions import ConflictError, DatabaseError, NotFoundError


class BaseService:
    """Base class for services that operate on a SQLAlchemy session on behalf of one user."""

    def __init__(self, db: Session, context: TenantContext) -> None:
        self.db = db
        self.context = context

    def scoped(self, model: type) -> Query:
        """Query ``model`` through the central company/ownership filter."""
        return scope_query(self.db.query(model), model, self.context)

    def company_scoped(self, model: type) -> Query:
        """Company filter only, for lookups that must ignore rep ownership."""
        return self.db.query(model).filter(model.company_id == self.context.company_id)

    def get_scoped(self, model: type, row_id: int, label: str, *, company_only: bool = False) -> Any:
        """Fetch one visible row or raise ``NotFoundError`` naming ``label``."""
        query = self.company_scoped(model) if company_only else self.scoped(model)
        row = query.filter(model.id == row_id).first()
        if row is None:
            raise NotFoundError(f"{label} not found")
        return row

    def commit(self, conflict: str = "Conflicting record already exists") -> None:
        commit_session(self.db, conflict)


def commit_session(db: Session, conflict: str = "Conflicting record already exists") -> None:
    """Commit, rolling back and translating constraint and driver failures."""
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(conflict) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise DatabaseError("Database error", details=type(exc).__name__) from exc
