"""Candidate directory order: which (platform, language) trees to probe.

Language priorities follow the tldr-pages client rules: ``LANG`` selects
the primary language, ``LANGUAGE`` adds a colon-separated priority list,
and English is always the final fallback. An explicit language choice is
taken literally and gets no fallback.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from tldrkit.models.platform import Platform

DEFAULT_LANGUAGE = "en"
PAGES_DIR = "pages"

# Region-qualified codes that have their own pages tree
_REGIONAL_CODES = frozenset({"pt_PT", "pt_BR", "zh_TW"})


def language_code(locale: str) -> str:
    """Map a POSIX locale string to a pages language code.

    >>> language_code("ja_JP.UTF-8")
    'ja'
    >>> language_code("pt_BR.UTF-8")
    'pt_BR'
    """
    code = locale.split(".", 1)[0]
    if code in ("C", "POSIX"):
        return ""
    if code in _REGIONAL_CODES:
        return code
    if code == "pt":
        return "pt_PT"
    return code.split("_", 1)[0]


def language_priorities(
    explicit: str | None = None, environ: Mapping[str, str] | None = None
) -> list[str]:
    if explicit:
        return [explicit]

    env = os.environ if environ is None else environ
    primary = language_code(env.get("LANG", ""))
    if not primary:
        return [DEFAULT_LANGUAGE]

    priorities: list[str] = []
    language_env = env.get("LANGUAGE", "")
    if language_env:
        for locale in language_env.split(":"):
            code = language_code(locale)
            if code and code not in priorities:
                priorities.append(code)

    for code in (primary, DEFAULT_LANGUAGE):
        if code not in priorities:
            priorities.append(code)
    return priorities


def platform_priorities(selected: Platform | None = None) -> list[Platform]:
    """The selected platform first, then ``common`` where most pages live."""
    if selected is None or selected is Platform.COMMON:
        return [Platform.COMMON]
    return [selected, Platform.COMMON]


def pages_dir_name(language: str) -> str:
    if language == DEFAULT_LANGUAGE:
        return PAGES_DIR
    return f"{PAGES_DIR}.{language}"


def choose_platform(platforms: Iterable[str], selected: Platform) -> str:
    """Pick the platform a suggestion should be opened with.

    With several candidates the selected platform wins, then ``common``.
    """
    candidates = list(platforms)
    if len(candidates) >= 2:
        if selected in candidates:
            return selected
        if Platform.COMMON in candidates:
            return Platform.COMMON
    if not candidates:
        return Platform.COMMON
    return candidates[0]
