# Feedback Analyzer D1 Store
# Read/write operations against the feedback table in Cloudflare D1

import logging

import httpx

from .config import (
    CLOUDFLARE_ACCOUNT_ID,
    CLOUDFLARE_API_TOKEN,
    CLOUDFLARE_API_BASE,
    D1_DATABASE_ID,
    FEEDBACK_TABLE,
    STORE_TIMEOUT
)
from .errors import StoreError
from .models import FeedbackRecord, RECORD_FIELDS

logger = logging.getLogger(__name__)

INSERT_SQL = (
    f"INSERT INTO {FEEDBACK_TABLE} ({', '.join(RECORD_FIELDS)}) "
    f"VALUES ({', '.join('?' for _ in RECORD_FIELDS)}) "
    "RETURNING id, created_at"
)
LIST_RECENT_SQL = f"SELECT * FROM {FEEDBACK_TABLE} ORDER BY id DESC LIMIT ?"


class D1Store:
    """Feedback store backed by the D1 REST query endpoint.

    One attempt per call. Any HTTP failure or unsuccessful query is
    raised as StoreError.
    """

    def __init__(self, account_id, database_id, api_token, client=None):
        self.query_url = f"{CLOUDFLARE_API_BASE}/accounts/{account_id}/d1/database/{database_id}/query"
        self.api_token = api_token
        self.client = client or httpx.Client(timeout=STORE_TIMEOUT)

    @classmethod
    def from_config(cls):
        if not (CLOUDFLARE_ACCOUNT_ID and D1_DATABASE_ID and CLOUDFLARE_API_TOKEN):
            raise StoreError('D1 is not configured: set CLOUDFLARE_ACCOUNT_ID, D1_DATABASE_ID and CLOUDFLARE_API_TOKEN')
        return cls(CLOUDFLARE_ACCOUNT_ID, D1_DATABASE_ID, CLOUDFLARE_API_TOKEN)

    def _get_headers(self):
        """Get standard Cloudflare API headers"""
        return {
            'Authorization': f'Bearer {self.api_token}',
            'Content-Type': 'application/json'
        }

    def _query(self, sql, params):
        """Run one parameterized statement and return its result rows."""
        try:
            response = self.client.post(
                self.query_url,
                headers=self._get_headers(),
                json={'sql': sql, 'params': list(params)}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise StoreError(f'Feedback store returned HTTP {e.response.status_code}', cause=e) from e
        except httpx.HTTPError as e:
            raise StoreError('Feedback store is unavailable', cause=e) from e
        except ValueError as e:
            raise StoreError('Feedback store returned invalid JSON', cause=e) from e

        if not payload.get('success'):
            errors = '; '.join(err.get('message', '') for err in payload.get('errors') or [])
            raise StoreError(f'Feedback store rejected the query: {errors or "unknown error"}')

        statements = payload.get('result') or []
        if not statements:
            return []
        statement = statements[0]
        if statement.get('success') is False:
            raise StoreError('Feedback store rejected the query')
        return statement.get('results') or []

    # ===================
    # WRITE OPERATIONS
    # ===================

    def insert(self, record):
        """Append one feedback row.

        Returns the record with the store-assigned id and created_at.
        """
        rows = self._query(INSERT_SQL, record.values())
        assigned = rows[0] if rows else {}

        logger.info(f"Stored feedback #{assigned.get('id')} from {record.source}")
        return FeedbackRecord.from_row({**record.as_dict(), **assigned})

    # ===================
    # READ OPERATIONS
    # ===================

    def list_recent(self, limit):
        """Fetch up to `limit` most recent rows, newest first."""
        if limit < 1:
            raise ValueError(f'limit must be positive, got {limit}')

        rows = self._query(LIST_RECENT_SQL, [limit])
        return [FeedbackRecord.from_row(row) for row in rows[:limit]]
