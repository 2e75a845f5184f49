# Feedback Analyzer Helpers
# Utility functions used across the analyzer

import json
import logging
import re

from .config import LOG_LEVEL

# Matches fence markers, bare or with any language tag
FENCE_PATTERN = re.compile(r'```[\w-]*')


def strip_markdown_json(content):
    """Strip markdown code fences from a model's JSON response.

    Fence markers are removed wherever they appear, not only at the ends,
    since the model sometimes wraps the object mid-reply.
    A structured (non-string) reply is serialized to JSON text first.
    """
    if content is None:
        return ''
    if not isinstance(content, str):
        content = json.dumps(content)
    return FENCE_PATTERN.sub('', content).strip()


def as_label(value, default):
    """Coerce a request or model value to a string label, falling back to default."""
    if not value:
        return default
    if isinstance(value, str):
        return value
    return json.dumps(value)


def configure_logging(level=None):
    """Set up root logging for the service process."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
