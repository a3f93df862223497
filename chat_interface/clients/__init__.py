"""
Session client adapters

Modules:
- wechaty_client: python-wechaty adapter (optional ``wechaty`` extra)
"""
