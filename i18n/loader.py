"""
Message catalogue loaded from YAML.

All user-facing texts live in i18n/messages.yaml. Nested keys are flattened
into dotted keys, so

    colors:
      blauw:
        label: "..."

is looked up as t('colors.blauw.label').

Usage:
    from i18n import t

    text = t('errors.unanswered', count=3)
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

I18N_DIR = Path(__file__).parent
MESSAGES_PATH = I18N_DIR / 'messages.yaml'


class Messages:
    """Flat key → text catalogue with placeholder formatting"""

    def __init__(self, path: Path = MESSAGES_PATH):
        self.path = path
        self.messages: dict[str, str] = {}
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.warning(f"Messages file not found: {self.path}")
            return

        with open(self.path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        self._flatten(data, self.messages)
        logger.debug(f"Loaded {len(self.messages)} messages from {self.path.name}")

    def _flatten(self, data: dict, result: dict[str, str], prefix: str = '') -> None:
        """Turn the nested structure into a flat dict"""
        for key, value in data.items():
            full_key = f"{prefix}{key}" if prefix else str(key)

            if isinstance(value, dict):
                self._flatten(value, result, f"{full_key}.")
            elif isinstance(value, str):
                if value:  # empty strings count as missing
                    result[full_key] = value

    def t(self, key: str, **kwargs) -> str:
        """
        Text for a key.

        Args:
            key: dotted key (for example 'errors.no_session')
            **kwargs: placeholder values (for example count=3)

        Returns:
            Formatted text, or the key itself if it is missing
        """
        text = self.messages.get(key)

        if text is None:
            logger.warning(f"Message not found: '{key}'")
            return key

        if kwargs:
            try:
                text = text.format(**kwargs)
            except KeyError as e:
                logger.warning(f"Missing placeholder {e} in '{key}'")

        return text

    def get_all_keys(self) -> set[str]:
        return set(self.messages.keys())


# Global instance
_messages: Optional[Messages] = None


def get_messages() -> Messages:
    """Global Messages instance (lazy loading)"""
    global _messages
    if _messages is None:
        _messages = Messages()
    return _messages


def t(key: str, **kwargs) -> str:
    """
    Short alias for get_messages().t()

    Example:
        t('questions.loading')
        t('errors.unanswered', count=2)
    """
    return get_messages().t(key, **kwargs)


def reload() -> None:
    """Re-read messages.yaml (hot reload)"""
    global _messages
    _messages = Messages()
