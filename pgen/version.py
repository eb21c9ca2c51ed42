from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Версия установленного дистрибутива prompt-generator для --version
    и поля toolVersion в JSON-отчётах; "0.0.0" при запуске из исходников.
    """
    for dist in ("prompt-generator", "pgen"):
        try:
            return metadata.version(dist)
        except metadata.PackageNotFoundError:
            continue
    return "0.0.0"

__all__ = ["tool_version"]
