"""
Small component generators used by the question builders.

These produce the anonymous or fixed-shape components every question
shares: localized strings, random keys, title, help group, footnote and
plain text blocks.
"""

from __future__ import annotations

import secrets
import string
from typing import Iterable, Mapping, Optional, Sequence, Tuple, Union

from .errors import ConfigurationError
from .keys import (
    FOOTNOTE_CLASS_NAME,
    FOOTNOTE_KEY,
    HELP_GROUP_KEY,
    RANDOM_KEY_LENGTH,
    TITLE_KEY,
    Role,
)
from .model import GroupNode, LeafNode, LocalizedText, StyleEntry


_KEY_ALPHABET = string.ascii_letters + string.digits

LocaleMap = Mapping[str, str]
StyleInput = Iterable[Union[StyleEntry, Tuple[str, str], Mapping[str, str]]]


def generate_random_key(length: int = RANDOM_KEY_LENGTH) -> str:
    """Return a short, collision-unlikely key for anonymous components."""
    return "".join(secrets.choice(_KEY_ALPHABET) for _ in range(length))


def generate_loc_strings(texts: LocaleMap) -> Tuple[LocalizedText, ...]:
    """Convert a locale map into ordered LocalizedText entries."""
    return tuple(LocalizedText(code=code, text=text) for code, text in texts.items())


def to_style_entries(style: Optional[StyleInput]) -> Tuple[StyleEntry, ...]:
    """Accept StyleEntry values, (key, value) pairs or {"key", "value"} dicts."""
    if not style:
        return ()
    entries = []
    for index, entry in enumerate(style):
        if isinstance(entry, StyleEntry):
            entries.append(entry)
        elif isinstance(entry, Mapping):
            missing = [name for name in ("key", "value") if name not in entry]
            if missing:
                raise ConfigurationError(
                    f"Style entry {index} is missing {', '.join(missing)}: {entry!r}"
                )
            entries.append(StyleEntry(key=entry["key"], value=entry["value"]))
        elif isinstance(entry, tuple) and len(entry) == 2:
            entries.append(StyleEntry(key=entry[0], value=entry[1]))
        else:
            raise ConfigurationError(f"Invalid style entry: {entry!r}")
    return tuple(entries)


def generate_title_component(
    title: LocaleMap,
    subtitle: Optional[LocaleMap] = None,
) -> LeafNode:
    if not title:
        raise ConfigurationError("Question text is required")
    return LeafNode(
        key=TITLE_KEY,
        role=Role.TITLE,
        content=generate_loc_strings(title),
        description=generate_loc_strings(subtitle) if subtitle else (),
    )


def generate_text_component(
    content: LocaleMap,
    key: Optional[str] = None,
    style: Optional[StyleInput] = None,
    role: Role = Role.TEXT,
) -> LeafNode:
    return LeafNode(
        key=key if key is not None else generate_random_key(),
        role=role,
        content=generate_loc_strings(content),
        style=to_style_entries(style),
    )


def generate_help_group_component(items: Sequence[Mapping]) -> GroupNode:
    """
    Build the help popup subtree.

    Args:
        items: Sequence of {"content": locale map, "style": optional styles}

    Returns:
        GroupNode with role helpGroup and one text leaf per item, keyed by
        position ("1", "2", ...)
    """
    if not items:
        raise ConfigurationError("Help group content must not be empty")
    children = []
    for index, item in enumerate(items, start=1):
        if not isinstance(item, Mapping) or not item.get("content"):
            raise ConfigurationError(f"Help item {index} has no content")
        children.append(generate_text_component(item["content"], key=str(index), style=item.get("style")))
    return GroupNode(key=HELP_GROUP_KEY, role=Role.HELP_GROUP, children=tuple(children))


def generate_footnote_component(content: LocaleMap) -> LeafNode:
    return LeafNode(
        key=FOOTNOTE_KEY,
        role=Role.FOOTNOTE,
        content=generate_loc_strings(content),
        style=(StyleEntry(key="className", value=FOOTNOTE_CLASS_NAME),),
    )
