from .loader import Messages, get_messages, t, reload, MESSAGES_PATH

__all__ = ['Messages', 'get_messages', 't', 'reload', 'MESSAGES_PATH']
