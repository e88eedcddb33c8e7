from __future__ import annotations
import logging
from typing import List, Optional
from .config import RankConfig
from .datatypes import Document, Sentence

logger = logging.getLogger(__name__)

# Periods inside these are not sentence ends. Replacement is a blind substring
# replace, so "vs." also matches inside "canvs." (known limitation, kept as is).
ABBREVIATIONS = (
    "Mr.", "Mrs.", "Ms.", "Dr.", "Prof.", "St.", "e.g.", "i.e.", "etc.", "vs.",
    "Ph.D.", "M.D.", "U.S.", "U.K.", "E.U.", "a.m.", "p.m.",
)

DOT_MARKER = "##DOT##"
_TERMINATORS = ".!?"

def token_count(text: str) -> int:
    return len(text.split())

def _hide_abbreviations(text: str) -> str:
    for abbr in ABBREVIATIONS:
        text = text.replace(abbr, abbr.replace(".", DOT_MARKER))
    return text

def _restore(buf: str) -> str:
    return buf.replace(DOT_MARKER, ".").strip()

def split_sentences(text: str, min_tokens: int = 2) -> List[str]:
    """
    Abbreviation and quote aware sentence splitter.

    A `.`, `!` or `?` outside double quotes ends a sentence unless the buffer
    so far ends with an ellipsis or a hidden abbreviation period. Sentences
    with fewer than `min_tokens` whitespace tokens are dropped at the end.
    """
    processed = _hide_abbreviations(text)
    sentences: List[str] = []
    buf: List[str] = []
    in_quotes = False

    for ch in processed:
        buf.append(ch)
        if ch == '"':
            in_quotes = not in_quotes
        if in_quotes or ch not in _TERMINATORS:
            continue

        trimmed = "".join(buf).strip()
        if trimmed.endswith("...") or trimmed.endswith("..") or trimmed.endswith(DOT_MARKER):
            continue
        if trimmed:
            sentences.append(_restore(trimmed))
            buf = []

    rest = "".join(buf)
    if rest.strip():
        sentences.append(_restore(rest))

    return [s for s in sentences if token_count(s) >= min_tokens]

def preprocess_text(text: str, cfg: Optional[RankConfig] = None) -> Document:
    cfg = cfg or RankConfig()
    sents_raw = split_sentences(text, min_tokens=cfg.min_sentence_tokens)
    sentences = [Sentence(idx=i, text=s, n_tokens=token_count(s)) for i, s in enumerate(sents_raw)]
    logger.info("Found %d sentences", len(sentences))
    return Document(raw_text=text, sentences=sentences)
