# Feedback Analyzer Normalizer
# Turns free-text model output into a structured feedback record

import json
import logging

from .config import (
    DEFAULT_SUMMARY,
    DEFAULT_SENTIMENT,
    DEFAULT_THEME,
    DEFAULT_URGENCY
)
from .helpers import strip_markdown_json, as_label
from .models import FeedbackRecord, ModelAnalysis

logger = logging.getLogger(__name__)

ANALYSIS_DEFAULTS = {
    'summary': DEFAULT_SUMMARY,
    'sentiment': DEFAULT_SENTIMENT,
    'theme': DEFAULT_THEME,
    'urgency': DEFAULT_URGENCY
}


def parse_analysis(cleaned):
    """Parse fence-stripped model text into a ModelAnalysis.

    Anything that is not a JSON object falls back to using the whole
    text as the summary, with the other fields unset.
    """
    try:
        parsed = json.loads(cleaned)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning(f"Model returned non-JSON text, using it as summary: {e}")
        return ModelAnalysis(summary=cleaned)

    if not isinstance(parsed, dict):
        logger.warning(f"Model returned JSON {type(parsed).__name__}, expected object")
        return ModelAnalysis(summary=cleaned)

    return ModelAnalysis.from_mapping(parsed)


def apply_defaults(analysis):
    """Fill every missing or empty derived field with its default.

    Values are not checked against the known sentiment/urgency sets.
    Returns a dict of the four derived fields.
    """
    return {
        name: as_label(getattr(analysis, name), default)
        for name, default in ANALYSIS_DEFAULTS.items()
    }


def normalize_response(raw, source, priority, text):
    """Build a FeedbackRecord from raw model output and the caller's fields.

    Never raises: malformed output degrades to a summary-only analysis.
    """
    cleaned = strip_markdown_json(raw)
    derived = apply_defaults(parse_analysis(cleaned))
    return FeedbackRecord(source=source, priority=priority, text=text, **derived)
