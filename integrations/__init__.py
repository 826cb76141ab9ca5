"""
Integrations with external services.

- telegram/: Telegram keyboards
"""
