import logging
import re
from typing import Dict, Optional, Tuple

from truthguard.core.domains import registered_domain
from truthguard.core.models import NormalizationResult
from truthguard.services.normalizer.corrections import DEFAULT_CORRECTIONS

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_TERMINAL = re.compile(r"\s+([.!?])")
_SPACE_AFTER_MARK = re.compile(r"([!?]+)(?=[A-Za-z])")
# A dot needs a lowercase word of two or more letters before it, so "3.5", "U.S." and "e.g." stay intact
_SPACE_AFTER_DOT = re.compile(r"(?<=[a-z][a-z])(\.+)(?=[A-Za-z])")
_SPACE_AFTER_DOT_BEFORE_CAPITAL = re.compile(r"(?<=[a-z][a-z])(\.+)(?=[A-Z])")
_URL_PREFIX = re.compile(r"^\W*(?:[a-z][a-z0-9+.-]*://|www\.)", re.IGNORECASE)
_EDGE_PUNCTUATION = "\"'()[]{}<>,;:!?."


def _space_token(token: str) -> str:
    """Adds the missing space after terminal punctuation inside one whitespace-free token."""
    if _URL_PREFIX.match(token):
        return token
    # "ndtv.com" is a web address; "fell.It" also parses as one, but a capital still starts a sentence
    if "." in token and registered_domain(token.strip(_EDGE_PUNCTUATION)):
        dot_rule = _SPACE_AFTER_DOT_BEFORE_CAPITAL
    else:
        dot_rule = _SPACE_AFTER_DOT
    token = _SPACE_AFTER_MARK.sub(r"\1 ", token)
    return dot_rule.sub(r"\1 ", token)


class Normalizer:
    """
    Deterministic text cleanup applied to a claim before it is checked.

    Corrects known misspellings from a fixed dictionary, then canonicalizes
    whitespace and the spacing around sentence-terminal punctuation. Safe to
    share between requests; it holds no per-call state.
    """

    def __init__(self, corrections: Optional[Dict[str, str]] = None):
        source = DEFAULT_CORRECTIONS if corrections is None else corrections
        self.corrections = {" ".join(k.lower().split()): v for k, v in source.items() if k.strip()}

        # Longest keys first so "there are alot" wins over "alot"
        keys = sorted(self.corrections, key=len, reverse=True)
        if keys:
            alternation = "|".join(r"\s+".join(re.escape(word) for word in key.split()) for key in keys)
            self._pattern = re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
        else:
            self._pattern = None

    def _replace(self, match: "re.Match[str]") -> str:
        matched = match.group(0)
        replacement = self.corrections[" ".join(matched.lower().split())]
        if replacement and matched[0].isupper():
            replacement = replacement[0].upper() + replacement[1:]
        return replacement

    def correct(self, text: str) -> Tuple[str, int]:
        """Applies the dictionary in one pass; returns the text and the number of substitutions."""
        if self._pattern is None:
            return text, 0
        return self._pattern.subn(self._replace, text)

    @staticmethod
    def tidy(text: str) -> str:
        text = _WHITESPACE.sub(" ", text).strip()
        text = _SPACE_BEFORE_TERMINAL.sub(r"\1", text)
        return " ".join(_space_token(token) for token in text.split(" "))

    def normalize(self, text: str) -> NormalizationResult:
        if not text or not text.strip():
            return NormalizationResult(original=text, normalized="", was_corrected=False)

        corrected, substitutions = self.correct(text)
        was_corrected = corrected != text
        if was_corrected:
            logger.info(f"Applied {substitutions} correction(s) to claim text")

        return NormalizationResult(
            original=text,
            normalized=self.tidy(corrected),
            was_corrected=was_corrected,
        )


default_normalizer = Normalizer()


def normalize(text: str, corrections: Optional[Dict[str, str]] = None) -> NormalizationResult:
    """Normalizes a claim with the built-in dictionary, or with `corrections` when given."""
    normalizer = default_normalizer if corrections is None else Normalizer(corrections)
    return normalizer.normalize(text)
