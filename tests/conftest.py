"""
Pytest fixtures for the feedback analyzer tests.

The store and inference adapters are replaced by in-memory fakes and
injected through create_app, so no test talks to Cloudflare or Anthropic.
"""

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from analyzer import StoreError, InferenceError
from feedback.app import create_app


# =============================================================================
# Fakes
# =============================================================================


class FakeStore:
    """In-memory feedback table with auto-increment ids."""

    def __init__(self):
        self.rows = []
        self.fail_with = None
        self.list_calls = []

    def insert(self, record):
        if self.fail_with:
            raise self.fail_with
        stored = replace(
            record,
            id=len(self.rows) + 1,
            created_at=(datetime(2026, 1, 1) + timedelta(minutes=len(self.rows))).strftime('%Y-%m-%d %H:%M:%S'),
        )
        self.rows.append(stored)
        return stored

    def list_recent(self, limit):
        self.list_calls.append(limit)
        if self.fail_with:
            raise self.fail_with
        return sorted(self.rows, key=lambda r: r.id, reverse=True)[:limit]


class FakeInference:
    """Returns a canned reply and records every prompt it was given."""

    def __init__(self, reply='{}'):
        self.reply = reply
        self.prompts = []
        self.fail_with = None

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.fail_with:
            raise self.fail_with
        return self.reply


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def inference():
    return FakeInference(
        '```json\n{"summary": "Users struggle to deploy", "sentiment": "negative", '
        '"theme": "UX", "urgency": "high"}\n```'
    )


@pytest.fixture
def app(store, inference):
    app = create_app(store=store, inference=inference)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store_down():
    return StoreError('Feedback store is unavailable', cause=ConnectionError('refused'))


@pytest.fixture
def inference_down():
    return InferenceError('Inference service call failed', cause=RuntimeError('model overloaded'))
