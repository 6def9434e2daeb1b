from __future__ import annotations

import posixpath
from typing import Iterable, Optional, Sequence

from content.builder import ContentBuilder
from content.renderers import guess_language
from core.models import ModifierRef
from finders.models import DiscoveredItem
from modifiers.registry import ModifierRegistry


def add_file_blocks(
    builder: ContentBuilder,
    files: Iterable[DiscoveredItem],
    *,
    modifiers: ModifierRegistry,
    refs: Sequence[ModifierRef] = (),
    path_prefix: Optional[str] = None,
) -> ContentBuilder:
    """Emit one code block per file, reading content only here."""
    for item in files:
        path = item.relative_path
        content = modifiers.apply(refs, path, item.read())
        shown = posixpath.join(path_prefix.strip("/"), path) if path_prefix and path_prefix.strip("/") else path
        builder.add_code_block(content, guess_language(path), path=shown)
    return builder
