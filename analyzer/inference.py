# Feedback Analyzer Inference
# Single-message text generation against a hosted model

import json
import logging

import anthropic
import httpx
from anthropic import Anthropic

from .config import (
    ANTHROPIC_API_KEY,
    ANTHROPIC_MODEL,
    CLOUDFLARE_ACCOUNT_ID,
    CLOUDFLARE_API_TOKEN,
    CLOUDFLARE_API_BASE,
    INFERENCE_BACKEND,
    INFERENCE_TIMEOUT,
    WORKERS_AI_MODEL
)
from .errors import InferenceError

logger = logging.getLogger(__name__)


class AnthropicInference:
    """Generate text with Claude via the Anthropic Messages API."""

    def __init__(self, client=None, model=ANTHROPIC_MODEL, max_tokens=1000):
        self.client = client or Anthropic(
            api_key=ANTHROPIC_API_KEY,
            http_client=httpx.Client(timeout=INFERENCE_TIMEOUT, follow_redirects=True)
        )
        self.model = model
        self.max_tokens = max_tokens

    def generate(self, prompt):
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=0.2,
                messages=[
                    {'role': 'user', 'content': prompt}
                ]
            )
        except anthropic.APIError as e:
            raise InferenceError('Inference service call failed', cause=e) from e

        if not response.content:
            raise InferenceError('Inference service returned no content')

        logger.info(f"Claude replied ({self.model}, {len(response.content[0].text)} chars)")
        return response.content[0].text


class WorkersAIInference:
    """Generate text with a Cloudflare Workers AI model over its REST API."""

    def __init__(self, account_id, api_token, model=WORKERS_AI_MODEL, client=None):
        self.run_url = f"{CLOUDFLARE_API_BASE}/accounts/{account_id}/ai/run/{model}"
        self.api_token = api_token
        self.model = model
        self.client = client or httpx.Client(timeout=INFERENCE_TIMEOUT)

    def generate(self, prompt):
        try:
            response = self.client.post(
                self.run_url,
                headers={'Authorization': f'Bearer {self.api_token}'},
                json={'messages': [{'role': 'user', 'content': prompt}]}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise InferenceError(f'Inference service returned HTTP {e.response.status_code}', cause=e) from e
        except httpx.HTTPError as e:
            raise InferenceError('Inference service is unavailable', cause=e) from e
        except ValueError as e:
            raise InferenceError('Inference service returned invalid JSON', cause=e) from e

        logger.info(f"Workers AI replied ({self.model})")
        return extract_workers_ai_text(payload)


def extract_workers_ai_text(payload):
    """Pull the generated text out of a Workers AI reply.

    The text sits at `response` or `result.response` depending on the
    endpoint; otherwise the whole payload is handed on as JSON text.
    """
    if isinstance(payload, dict):
        if payload.get('response'):
            return payload['response']
        result = payload.get('result')
        if isinstance(result, dict) and result.get('response'):
            return result['response']
    return json.dumps(payload)


def build_inference(backend=None):
    """Create the inference adapter selected by INFERENCE_BACKEND."""
    backend = backend or INFERENCE_BACKEND
    if backend == 'anthropic':
        if not ANTHROPIC_API_KEY:
            raise InferenceError('Anthropic is not configured: set ANTHROPIC_API_KEY')
        return AnthropicInference()
    if backend == 'workers-ai':
        if not (CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN):
            raise InferenceError('Workers AI is not configured: set CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_TOKEN')
        return WorkersAIInference(CLOUDFLARE_ACCOUNT_ID, CLOUDFLARE_API_TOKEN)
    raise InferenceError(f"Unknown inference backend '{backend}'")
