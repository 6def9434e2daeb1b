"""Redact secrets from file content before it lands in a document.

Options (all optional):
  - keywords: list of literal strings to replace
  - patterns: list of regular expressions to replace
  - replacement: text substituted for every match (default "[REDACTED]")
  - builtin: apply the built-in credential rules (default True)
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Pattern

from core.errors import ValidationError

DEFAULT_REPLACEMENT = "[REDACTED]"

_BUILTIN_RULES: List[Pattern[str]] = [
    # key = "value" style assignments for obvious credential names
    re.compile(
        r"""(?i)((?:api[_-]?key|secret|password|passwd|token|access[_-]?key)\s*[:=]\s*)(['"]?)[^\s'"]+\2"""
    ),
    re.compile(r"ghp_[A-Za-z0-9]{36}"),
    re.compile(r"AKIA[0-9A-Z]{16}"),
    re.compile(r"-----BEGIN [A-Z ]*PRIVATE KEY-----[\s\S]+?-----END [A-Z ]*PRIVATE KEY-----"),
]


class SanitizerModifier:
    id = "sanitizer"

    def supports(self, path: str) -> bool:
        return True

    def modify(self, content: str, context: Mapping[str, Any]) -> str:
        replacement = str(context.get("replacement", DEFAULT_REPLACEMENT))

        if context.get("builtin", True):
            for rule in _BUILTIN_RULES:
                if rule.groups >= 2:
                    content = rule.sub(lambda m: f"{m.group(1)}{m.group(2)}{replacement}{m.group(2)}", content)
                else:
                    content = rule.sub(replacement, content)

        for keyword in context.get("keywords") or ():
            if keyword:
                content = content.replace(str(keyword), replacement)

        for pattern in context.get("patterns") or ():
            try:
                content = re.sub(str(pattern), replacement, content)
            except re.error as e:
                raise ValidationError(f"Invalid sanitizer pattern {pattern!r}: {e}") from e

        return content
