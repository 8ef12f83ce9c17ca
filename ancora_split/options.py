"""
Tokenizer options for ancora-split.

Options are given as a comma-separated string of ``key`` or ``key=value``
entries, e.g. ``"splitAll,splitVerbs=false,tokenizeNLs"``. The split keys
control the tokenizer; every other key is forwarded to the lexer.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# Option Keys
# ============================================================================

SPLIT_ALL = "splitAll"
SPLIT_COMPOUNDS = "splitCompounds"
SPLIT_VERBS = "splitVerbs"
SPLIT_CONTRACTIONS = "splitContractions"

# Option key -> TokenizerOptions fields it sets
SPLIT_KEYS = {
    SPLIT_ALL: ("split_compounds", "split_verbs", "split_contractions"),
    SPLIT_COMPOUNDS: ("split_compounds",),
    SPLIT_VERBS: ("split_verbs",),
    SPLIT_CONTRACTIONS: ("split_contractions",),
}


@dataclass(frozen=True)
class TokenizerOptions:
    """
    Immutable option set for one tokenizer instance.

    Attributes:
        split_compounds: Split hyphenated compounds
        split_verbs: Split clitic pronouns off verb forms
        split_contractions: Split del/al into preposition + article
        lexer_properties: Options forwarded verbatim to the lexer
    """
    split_compounds: bool = False
    split_verbs: bool = False
    split_contractions: bool = False
    lexer_properties: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def split_any(self) -> bool:
        """True if at least one splitting strategy is enabled."""
        return self.split_compounds or self.split_verbs or self.split_contractions


def parse_bool(value: str) -> bool:
    """Parse a boolean literal; anything but 'true' (any case) is False."""
    return value.strip().lower() == "true"


def parse_options(options: Optional[str], base: Optional[TokenizerOptions] = None) -> TokenizerOptions:
    """
    Apply an option string on top of an existing option set.

    Entries are applied left to right, so a later key overrides an earlier
    one. Malformed entries (more than one '=') are logged and skipped.

    Args:
        options: Comma-separated option string (None or "" changes nothing)
        base: Options to start from. Uses defaults if not specified.

    Returns:
        A new TokenizerOptions

    Example:
        >>> opts = parse_options("splitAll,splitVerbs=false")
        >>> opts.split_compounds, opts.split_verbs, opts.split_contractions
        (True, False, True)
    """
    if base is None:
        base = TokenizerOptions()

    flags = {
        "split_compounds": base.split_compounds,
        "split_verbs": base.split_verbs,
        "split_contractions": base.split_contractions,
    }
    properties = dict(base.lexer_properties)

    for option in (options or "").split(","):
        option = option.strip()
        if not option:
            continue

        fields = option.split("=")
        if len(fields) == 1:
            key, value = fields[0], "true"
        elif len(fields) == 2:
            key, value = fields[0].strip(), fields[1].strip()
        else:
            logger.warning(f"Bad option {option!r}: ignored")
            continue

        if key in SPLIT_KEYS:
            for name in SPLIT_KEYS[key]:
                flags[name] = parse_bool(value)
        else:
            properties[key] = value

    return dataclasses.replace(
        base,
        lexer_properties=MappingProxyType(properties),
        **flags,
    )
