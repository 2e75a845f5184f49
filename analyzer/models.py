# Feedback Analyzer Models
# The feedback record and the analysis parsed out of model output

from dataclasses import asdict, dataclass, field
from typing import Optional

RECORD_FIELDS = ('source', 'priority', 'text', 'summary', 'sentiment', 'theme', 'urgency')
ANALYSIS_FIELDS = ('summary', 'sentiment', 'theme', 'urgency')


@dataclass(frozen=True)
class ModelAnalysis:
    """Derived fields exactly as the model supplied them. Any may be missing."""

    summary: Optional[object] = None
    sentiment: Optional[object] = None
    theme: Optional[object] = None
    urgency: Optional[object] = None

    @classmethod
    def from_mapping(cls, data):
        return cls(**{name: data.get(name) for name in ANALYSIS_FIELDS})


@dataclass(frozen=True)
class FeedbackRecord:
    """One analyzed piece of customer feedback.

    id and created_at are assigned by the store and stay None until the
    record has been persisted.
    """

    source: str
    priority: str
    text: str
    summary: str
    sentiment: str
    theme: str
    urgency: str
    id: Optional[int] = field(default=None)
    created_at: Optional[str] = field(default=None)

    @classmethod
    def from_row(cls, row):
        """Build a record from a store row (a column -> value dict)."""
        return cls(
            id=row.get('id'),
            created_at=row.get('created_at'),
            **{name: row.get(name) for name in RECORD_FIELDS}
        )

    def values(self):
        """The seven caller/derived values in column order."""
        return tuple(getattr(self, name) for name in RECORD_FIELDS)

    def as_dict(self):
        """Flat JSON object. Store-assigned keys lead when present."""
        data = asdict(self)
        result = {}
        for key in ('id', 'created_at'):
            if data[key] is not None:
                result[key] = data[key]
        for name in RECORD_FIELDS:
            result[name] = data[name]
        return result
