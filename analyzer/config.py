# Feedback Analyzer Config
# Central configuration for the analyzer service

import os

# Cloudflare account (D1 + Workers AI)
CLOUDFLARE_ACCOUNT_ID = os.environ.get('CLOUDFLARE_ACCOUNT_ID')
CLOUDFLARE_API_TOKEN = os.environ.get('CLOUDFLARE_API_TOKEN')
CLOUDFLARE_API_BASE = 'https://api.cloudflare.com/client/v4'

# D1
D1_DATABASE_ID = os.environ.get('D1_DATABASE_ID')
FEEDBACK_TABLE = 'feedback'
RECENT_LIMIT = 20

# Inference
INFERENCE_BACKEND = os.environ.get('INFERENCE_BACKEND', 'anthropic')

ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY')
ANTHROPIC_MODEL = 'claude-sonnet-4-20250514'

WORKERS_AI_MODEL = '@cf/meta/llama-3-8b-instruct'

# HTTP timeouts (seconds)
STORE_TIMEOUT = 10.0
INFERENCE_TIMEOUT = 60.0

# Record defaults
DEFAULT_SOURCE = 'Unknown'
DEFAULT_PRIORITY = 'Medium'
DEFAULT_SUMMARY = 'No summary'
DEFAULT_SENTIMENT = 'neutral'
DEFAULT_THEME = 'general'
DEFAULT_URGENCY = 'medium'

# Server
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
PORT = int(os.environ.get('PORT', 8080))
