# Feedback Analyzer
# Customer feedback analysis service
#
# - Serves the analyzer page
# - Sends pasted feedback to the model for summary/sentiment/theme/urgency
# - Stores each analysis in D1 and lists the most recent ones

import sys
import os
import logging
from string import Template

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, Response, abort, request, jsonify
from werkzeug.exceptions import HTTPException

from analyzer import (
    DEFAULT_SOURCE,
    DEFAULT_PRIORITY,
    RECENT_LIMIT,
    AnalyzerError,
    D1Store,
    as_label,
    build_inference,
    configure_logging,
    normalize_response
)
from analyzer.config import PORT

logger = logging.getLogger(__name__)

# Load prompt and page
PROMPT_PATH = os.path.join(os.path.dirname(__file__), 'prompt.txt')
with open(PROMPT_PATH, 'r', encoding='utf-8') as f:
    ANALYZE_PROMPT = Template(f.read())

PAGE_PATH = os.path.join(os.path.dirname(__file__), 'index.html')
with open(PAGE_PATH, 'r', encoding='utf-8') as f:
    PAGE_HTML = f.read()


def build_prompt(source, priority, text):
    """Fill the analysis prompt with the caller's fields."""
    return ANALYZE_PROMPT.substitute(source=source, priority=priority, text=text).strip()


def create_app(store=None, inference=None):
    """Build the Flask app.

    store and inference are the D1 and model adapters; when omitted they
    are built from the environment.
    """
    app = Flask(__name__)

    # Pretty, ordered, UTF-8 JSON
    app.json.compact = False
    app.json.sort_keys = False
    app.json.ensure_ascii = False
    app.json.mimetype = 'application/json; charset=utf-8'

    app.config['FEEDBACK_STORE'] = store or D1Store.from_config()
    app.config['INFERENCE'] = inference or build_inference()

    @app.before_request
    def reject_head():
        # Flask answers HEAD for every GET route
        if request.method == 'HEAD':
            abort(404)

    @app.route('/', methods=['GET'], provide_automatic_options=False)
    def index():
        """Serve the analyzer page"""
        return Response(PAGE_HTML, content_type='text/html; charset=utf-8')

    @app.route('/api/feedback', methods=['GET'], provide_automatic_options=False)
    def list_feedback():
        """List the most recent stored analyses, newest first.

        Returns:
            - results: up to 20 feedback records
        """
        try:
            records = app.config['FEEDBACK_STORE'].list_recent(RECENT_LIMIT)
        except AnalyzerError as e:
            logger.exception('Failed to load stored feedback')
            return jsonify(e.to_dict()), 500

        return jsonify({'results': [record.as_dict() for record in records]})

    @app.route('/api/analyze', methods=['POST'], provide_automatic_options=False)
    def analyze():
        """Analyze and store one piece of feedback.

        Accepts:
            - text: The feedback itself (required)
            - source: Channel it came from (defaults to Unknown)
            - priority: Caller's priority label (defaults to Medium)

        Returns:
            - The stored record: source, priority, text, summary,
              sentiment, theme, urgency plus id and created_at
        """
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict):
            data = {}

        text = as_label(data.get('text'), '')
        source = as_label(data.get('source'), DEFAULT_SOURCE)
        priority = as_label(data.get('priority'), DEFAULT_PRIORITY)

        if not text:
            return jsonify({'error': 'No feedback text provided'}), 400

        try:
            raw = app.config['INFERENCE'].generate(build_prompt(source, priority, text))
            record = normalize_response(raw, source, priority, text)
            stored = app.config['FEEDBACK_STORE'].insert(record)
        except AnalyzerError as e:
            logger.exception('Feedback analysis failed')
            return jsonify(e.to_dict()), 500

        return jsonify(stored.as_dict())

    @app.errorhandler(404)
    @app.errorhandler(405)
    def not_found(e):
        return Response('Not found', status=404, content_type='text/plain; charset=utf-8')

    @app.errorhandler(Exception)
    def internal_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception('Unhandled error')
        return jsonify({
            'error': 'Internal server error',
            'details': str(e)
        }), 500

    return app


if __name__ == '__main__':
    configure_logging()
    app = create_app()
    app.run(host='0.0.0.0', port=PORT)
