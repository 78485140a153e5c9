#!/usr/bin/env python3
"""
Metrics definitions for the IsraelGPT chat proxy.
"""

import prometheus_client

CHAT_REQUESTS = prometheus_client.Counter(
    'chat_requests_total', 'Chat endpoint responses by HTTP status code', ['status']
)
UPSTREAM_ERRORS = prometheus_client.Counter(
    'upstream_errors_total', 'Failed Mistral API calls by failure kind', ['kind']
)
