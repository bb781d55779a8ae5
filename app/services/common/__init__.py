"""
Common utilities shared across services.

Modules:
    - json_extract: JSON object extraction from chat completion text
"""
