import re
import secrets
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ...domain.errors import MalformedIdentifierError, RecordNotFoundError
from ...domain.models import Product, Subscription, SubscriptionStatus
from ...domain.ports.persistence import PersistenceGateway

_IDENTIFIER_PATTERN = re.compile(r"^[0-9a-f]{24}$")


class SQLitePersistence(PersistenceGateway):
    """SQLite-backed implementation of the persistence gateway."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self._initialize()

    def _initialize(self) -> None:
        with self._conn:
            self._conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS products (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    subscription_period INTEGER NOT NULL,
                    price REAL NOT NULL,
                    tax_percentage REAL NOT NULL
                );

                CREATE TABLE IF NOT EXISTS subscriptions (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL,
                    product_name TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT,
                    start_date TEXT NOT NULL,
                    end_date TEXT NOT NULL,
                    price REAL NOT NULL,
                    tax REAL NOT NULL,
                    status TEXT NOT NULL,
                    pause_start_date TEXT
                );
                """
            )

    def close(self) -> None:
        self._conn.close()

    @staticmethod
    def new_identifier() -> str:
        return secrets.token_hex(12)

    # ProductRepository API --------------------------------------------------
    def get_product(self, product_id: str) -> List[Product]:
        query = "SELECT * FROM products"
        params: List[Any] = []
        if product_id:
            self._check_identifier(product_id)
            query += " WHERE id = ?"
            params.append(product_id)
        with self._lock:
            cur = self._conn.execute(query, params)
            rows = cur.fetchall()
        return [self._row_to_product(row) for row in rows]

    def insert_products(self, products: Iterable[Product]) -> int:
        items = list(products)
        for product in items:
            self._check_identifier(product.id)
        with self._lock, self._conn:
            self._conn.executemany(
                """
                INSERT INTO products (id, name, subscription_period, price, tax_percentage)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    subscription_period = excluded.subscription_period,
                    price = excluded.price,
                    tax_percentage = excluded.tax_percentage
                """,
                [
                    (p.id, p.name, p.subscription_period, p.price, p.tax_percentage)
                    for p in items
                ],
            )
        return len(items)

    # SubscriptionRepository API ---------------------------------------------
    def get_subscription_by_id(self, subscription_id: str) -> Subscription:
        self._check_identifier(subscription_id)
        with self._lock:
            cur = self._conn.execute(
                "SELECT * FROM subscriptions WHERE id = ?", (subscription_id,)
            )
            row = cur.fetchone()
        if not row:
            raise RecordNotFoundError(f"subscription {subscription_id} not found")
        return self._row_to_subscription(row)

    def save_subscription(self, subscription: Subscription) -> Subscription:
        if subscription.id:
            self._check_identifier(subscription.id)
            record_id = subscription.id
        else:
            record_id = self.new_identifier()
        with self._lock, self._conn:
            self._conn.execute(
                """
                INSERT OR REPLACE INTO subscriptions (
                    id, email, product_name, created_at, updated_at, start_date,
                    end_date, price, tax, status, pause_start_date
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record_id,
                    subscription.email,
                    subscription.product_name,
                    self._format_datetime(subscription.created_at),
                    self._format_datetime(subscription.updated_at),
                    self._format_datetime(subscription.start_date),
                    self._format_datetime(subscription.end_date),
                    subscription.price,
                    subscription.tax,
                    subscription.status.value,
                    self._format_datetime(subscription.pause_start_date),
                ),
            )
        subscription.id = record_id
        return subscription

    # Helpers ----------------------------------------------------------------
    @staticmethod
    def _check_identifier(value: str) -> None:
        if not _IDENTIFIER_PATTERN.match(value):
            raise MalformedIdentifierError(f"id {value!r} is not a valid identifier")

    @staticmethod
    def _format_datetime(value: Optional[datetime]) -> Optional[str]:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()

    @staticmethod
    def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
        if value is None:
            return None
        result = datetime.fromisoformat(value)
        if result.tzinfo is None:
            return result.replace(tzinfo=timezone.utc)
        return result.astimezone(timezone.utc)

    def _row_to_product(self, row: sqlite3.Row) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            subscription_period=row["subscription_period"],
            price=row["price"],
            tax_percentage=row["tax_percentage"],
        )

    def _row_to_subscription(self, row: sqlite3.Row) -> Subscription:
        return Subscription(
            id=row["id"],
            email=row["email"],
            product_name=row["product_name"],
            created_at=self._parse_datetime(row["created_at"]),
            updated_at=self._parse_datetime(row["updated_at"]),
            start_date=self._parse_datetime(row["start_date"]),
            end_date=self._parse_datetime(row["end_date"]),
            price=row["price"],
            tax=row["tax"],
            status=SubscriptionStatus(row["status"]),
            pause_start_date=self._parse_datetime(row["pause_start_date"]),
        )
