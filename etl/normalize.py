"""
Section / department label normalisation.

Source data spells the same department several ways ("AI&ML", "AI & ML",
"aiml", "CE" vs "CIVIL", "cse - 1" vs "CSE-1"). Labels are cleaned
(strip, uppercase, tight hyphens) and then looked up in an alias table:

    AI&ML, AI & ML, AIML      → AIML
    AI & DS, AIDS, AI&DS      → AI & DS
    CSE-*, IT-*, ECE-*, EEE-* → kept as-is (differentiated sections)
    CSE, IT, ECE, EEE, MECH, CIVIL → kept as-is
    CE                        → CIVIL
    MECHANICAL                → MECH

Anything else is returned cleaned but otherwise unchanged. Normalisation is
idempotent.

Public API:
    normalize_section(label)          → str | None
    SectionNormalizer(...)            (custom alias tables)
    load_alias_file(path)             → dict[str, list[str]]
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path

log = logging.getLogger(__name__)

_HYPHEN_RE = re.compile(r"\s*-\s*")

DEFAULT_ALIASES: dict[str, tuple[str, ...]] = {
    "AIML":    ("AI&ML", "AI & ML", "AIML"),
    "AI & DS": ("AI & DS", "AIDS", "AI&DS"),
}

DEFAULT_PREFIXES: tuple[str, ...] = ("CSE", "IT", "ECE", "EEE")
DEFAULT_MAJORS: tuple[str, ...]   = ("CSE", "IT", "ECE", "EEE", "MECH", "CIVIL")

DEFAULT_FALLBACKS: dict[str, tuple[str, ...]] = {
    "CIVIL": ("CE",),
    "MECH":  ("MECHANICAL",),
}


def clean_label(label: str) -> str:
    """Strip, uppercase and collapse whitespace around hyphens."""
    return _HYPHEN_RE.sub("-", label.strip().upper())


def _invert(groups: Mapping[str, Iterable[str]]) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for canonical, variants in groups.items():
        canonical = clean_label(canonical)
        for variant in variants:
            lookup.setdefault(clean_label(variant), canonical)
    return lookup


class SectionNormalizer:
    """
    Ordered alias lookup for section labels.

    Checks, first match wins: alias groups, extra (configured) alias groups,
    differentiated-section prefixes, major departments, fallback aliases.
    The lookup is repeated until the label stops changing, so an extra group
    pointing at a built-in variant ("AI&ML") still lands on its canonical
    form ("AIML"). A cycle of extra aliases settles on its smallest label.
    """

    def __init__(
        self,
        aliases: Mapping[str, Iterable[str]] = DEFAULT_ALIASES,
        prefixes: Iterable[str] = DEFAULT_PREFIXES,
        majors: Iterable[str] = DEFAULT_MAJORS,
        fallbacks: Mapping[str, Iterable[str]] = DEFAULT_FALLBACKS,
        extra_aliases: Mapping[str, Iterable[str]] | None = None,
    ):
        self.aliases   = _invert(aliases)
        self.extra     = _invert(extra_aliases or {})
        self.prefixes  = tuple(clean_label(p) for p in prefixes)
        self.majors    = frozenset(clean_label(m) for m in majors)
        self.fallbacks = _invert(fallbacks)

        for canonical in (extra_aliases or {}):
            settled = self(canonical)
            if settled != clean_label(canonical):
                log.warning("Section alias %r resolves to %r", canonical, settled)

    def _step(self, section: str) -> str:
        if section in self.aliases:
            return self.aliases[section]
        if section in self.extra:
            return self.extra[section]
        for prefix in self.prefixes:
            if section.startswith(prefix) and section != prefix:
                return section
        if section in self.majors:
            return section
        return self.fallbacks.get(section, section)

    def __call__(self, label: str | None) -> str | None:
        if not label:
            return label

        section = clean_label(str(label))
        seen: list[str] = []
        while section not in seen:
            seen.append(section)
            nxt = self._step(section)
            if nxt == section:
                return section
            section = nxt
        return min(seen[seen.index(section):])


def load_alias_file(path: Path) -> dict[str, list[str]]:
    """
    Read extra alias groups from a JSON object {"CANONICAL": ["VARIANT", ...]}.

    Returns {} (and logs) if the file is missing or malformed.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        log.exception("Could not read section alias file %s", path)
        return {}

    if not isinstance(data, dict):
        log.warning("Ignoring section alias file %s: expected a JSON object", path)
        return {}

    groups: dict[str, list[str]] = {}
    for canonical, variants in data.items():
        if isinstance(variants, str):
            variants = [variants]
        if not isinstance(variants, list):
            log.warning("Ignoring alias group %r: variants must be a list", canonical)
            continue
        groups[str(canonical)] = [str(v) for v in variants] + [str(canonical)]
    return groups


_default = SectionNormalizer()


def configure(extra_aliases: Mapping[str, Iterable[str]] | None) -> SectionNormalizer:
    """Replace the module-level normaliser with one that knows extra aliases."""
    global _default
    _default = SectionNormalizer(extra_aliases=extra_aliases)
    return _default


def normalize_section(label: str | None) -> str | None:
    """Canonicalise a section label using the active alias table."""
    return _default(label)
