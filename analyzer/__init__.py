# Feedback Analyzer Shared Module
# Common functions used by the feedback service

from .config import (
    DEFAULT_SOURCE,
    DEFAULT_PRIORITY,
    RECENT_LIMIT
)

from .errors import (
    AnalyzerError,
    InferenceError,
    StoreError
)

from .helpers import (
    strip_markdown_json,
    as_label,
    configure_logging
)

from .models import (
    FeedbackRecord,
    ModelAnalysis
)

from .normalize import (
    parse_analysis,
    apply_defaults,
    normalize_response
)

from .d1 import D1Store

from .inference import (
    AnthropicInference,
    WorkersAIInference,
    build_inference
)
