# Configuration package initialization
"""
Quake Log Tools - Configuration System

Quick Usage:
    from config import Config
    config = Config(profile='my_server')
    value = config.get('some.nested.key')

Profiles live in config/profiles/<name>.json, secrets in
config/secrets/<name>_secrets.json.
"""

from config.config import Config

__all__ = ['Config']
