"""Redaction marker for sensitive values.

Sensitive attributes are carried as :class:`pydantic.SecretStr`; this marker
is what logs and CLI output print in their place, and matches ``str()`` of a
``SecretStr``.
"""

from __future__ import annotations

REDACTED = "**********"
