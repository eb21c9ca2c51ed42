# Версия формата JSON-ответов CLI (generate --json / inspect).
PROTOCOL_VERSION = 1

__all__ = ["PROTOCOL_VERSION"]
