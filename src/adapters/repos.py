"""
Entity repositories over a DocumentStorePort.

Slug ownership is recorded in the `slug_reservations` collection whose
document id *is* the slug, so claiming a slug is a single insert-if-absent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import TypeAdapter

from src.domain.entities import Account, Portfolio
from src.ports.store import DocumentStorePort, DuplicateKeyError

PORTFOLIOS = "portfolios"
SLUG_RESERVATIONS = "slug_reservations"
ACCOUNTS = "accounts"

_JSON = TypeAdapter(Any)


class PortfolioDocumentRepo:
    def __init__(self, store: DocumentStorePort):
        self.store = store

    # --- Portfolios ---

    def get_by_id(self, portfolio_id: str) -> Portfolio | None:
        doc = self.store.get_by_id(PORTFOLIOS, portfolio_id)
        return Portfolio.model_validate(doc) if doc else None

    def get_published_by_slug(self, slug: str) -> Portfolio | None:
        holder = self.slug_holder(slug)
        if holder is None:
            return None
        portfolio = self.get_by_id(holder)
        if portfolio is None or not portfolio.is_published or portfolio.slug != slug:
            return None
        return portfolio

    def get_by_slug(self, slug: str) -> Portfolio | None:
        """Any portfolio using the slug, published ones first."""
        published = self.get_published_by_slug(slug)
        if published:
            return published
        doc = self.store.get_one(PORTFOLIOS, {"slug": slug})
        return Portfolio.model_validate(doc) if doc else None

    def list_by_owner(self, owner_id: str) -> list[Portfolio]:
        """Owner's portfolios, most recently updated first."""
        docs = self.store.list_by(PORTFOLIOS, {"owner_id": owner_id})
        portfolios = [Portfolio.model_validate(d) for d in docs]
        # stored timestamps drop zero microseconds, so compare parsed values
        return sorted(portfolios, key=lambda p: p.updated_at, reverse=True)

    def count_by_owner(self, owner_id: str) -> int:
        return len(self.store.list_by(PORTFOLIOS, {"owner_id": owner_id}))

    def create(self, portfolio: Portfolio) -> Portfolio:
        self.store.create(PORTFOLIOS, portfolio.model_dump(mode="json"))
        return portfolio

    def update(self, portfolio_id: str, fields: dict[str, Any]) -> Portfolio:
        """
        Persist a partial update. Values may be pydantic models or plain data.
        Raises DocumentNotFoundError if the portfolio is gone.
        """
        partial = {k: _JSON.dump_python(v, mode="json") for k, v in fields.items()}
        doc = self.store.update(PORTFOLIOS, portfolio_id, partial)
        return Portfolio.model_validate(doc)

    def delete(self, portfolio_id: str) -> bool:
        return self.store.delete(PORTFOLIOS, portfolio_id)

    def increment_views(self, portfolio_id: str) -> int:
        return self.store.atomic_increment(PORTFOLIOS, portfolio_id, "views")

    # --- Slug reservations ---

    def slug_holder(self, slug: str) -> str | None:
        doc = self.store.get_by_id(SLUG_RESERVATIONS, slug)
        return str(doc["portfolio_id"]) if doc else None

    def is_slug_taken(self, slug: str, exclude_portfolio_id: str | None = None) -> bool:
        holder = self.slug_holder(slug)
        return holder is not None and holder != exclude_portfolio_id

    def reserve_slug(self, slug: str, portfolio_id: str, now: datetime) -> bool:
        """
        Claim the slug for portfolio_id with a single conditional insert.

        Returns True if the portfolio now holds the slug (including when it
        already did), False if another portfolio holds it.
        """
        try:
            self.store.create(
                SLUG_RESERVATIONS,
                {
                    "id": slug,
                    "portfolio_id": portfolio_id,
                    "reserved_at": _JSON.dump_python(now, mode="json"),
                },
            )
            return True
        except DuplicateKeyError:
            return self.slug_holder(slug) == portfolio_id

    def release_slug(self, slug: str, portfolio_id: str) -> bool:
        """Drop the reservation if (and only if) portfolio_id holds it."""
        if self.slug_holder(slug) != portfolio_id:
            return False
        return self.store.delete(SLUG_RESERVATIONS, slug)


class AccountDocumentRepo:
    def __init__(self, store: DocumentStorePort):
        self.store = store

    def get_by_id(self, account_id: str) -> Account | None:
        doc = self.store.get_by_id(ACCOUNTS, account_id)
        return Account.model_validate(doc) if doc else None

    def save(self, account: Account) -> Account:
        doc = account.model_dump(mode="json")
        try:
            self.store.create(ACCOUNTS, doc)
        except DuplicateKeyError:
            self.store.update(ACCOUNTS, account.id, doc)
        return account
