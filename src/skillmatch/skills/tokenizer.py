"""
Tokenizer for mixed Latin/CJK text.

Latin and digit characters form words; CJK text has no word separators, so
every CJK code point becomes its own token.
"""

import re
import unicodedata
from collections.abc import Sequence

_WORD_RUN_RE = re.compile(r"[^\W_]+")

_CJK_RANGES = (
    (0x3040, 0x30FF),  # hiragana, katakana
    (0x3400, 0x4DBF),  # CJK extension A
    (0x4E00, 0x9FFF),  # CJK unified ideographs
    (0xAC00, 0xD7AF),  # hangul syllables
    (0xF900, 0xFAFF),  # CJK compatibility ideographs
    (0x20000, 0x2FA1F),  # CJK extensions B-F, compatibility supplement
)

STOP_WORDS = frozenset(
    {
        "a", "an", "the", "is", "are", "was", "were", "be", "been",
        "have", "has", "had", "do", "does", "did", "will", "would",
        "could", "should", "may", "might", "must", "shall", "can",
        "to", "of", "in", "for", "on", "with", "at", "by", "from",
        "up", "about", "into", "over", "after", "under", "above",
        "i", "you", "he", "she", "it", "we", "they", "me", "him",
        "her", "us", "them", "my", "your", "his", "its", "our", "their",
        "this", "that", "these", "those", "what", "which", "who", "whom",
        "whose", "where", "when", "why", "how", "and", "but", "or", "nor",
        "so", "yet", "both", "either", "neither", "not", "only", "just",
        "also", "please", "help", "use", "using",
        # common Chinese function characters
        "的", "了", "我", "你", "他", "她", "它", "是", "在", "和",
        "与", "或", "吗", "呢", "吧", "啊", "也", "就", "都", "一",
        "个", "这", "那", "请",
    }
)


def is_cjk(char: str) -> bool:
    """Check whether a single character is a CJK code point."""
    code = ord(char)
    return any(start <= code <= end for start, end in _CJK_RANGES)


def normalize(text: str) -> str:
    """NFKC-normalize and case-fold text."""
    return unicodedata.normalize("NFKC", text).casefold()


def tokenize(text: str) -> list[str]:
    """Split text into case-folded tokens, preserving order.

    Examples:
        >>> tokenize("教我 SwiftUI MenuBarExtra")
        ['教', '我', 'swiftui', 'menubarextra']
        >>> tokenize("go-backend-skill")
        ['go', 'backend', 'skill']
    """
    tokens: list[str] = []
    for run in _WORD_RUN_RE.findall(normalize(text)):
        word: list[str] = []
        for char in run:
            if is_cjk(char):
                if word:
                    tokens.append("".join(word))
                    word = []
                tokens.append(char)
            else:
                word.append(char)
        if word:
            tokens.append("".join(word))
    return tokens


def content_tokens(text: str) -> frozenset[str]:
    """Token set of a text with stop words removed."""
    return frozenset(token for token in tokenize(text) if token not in STOP_WORDS)


def contains_sequence(haystack: Sequence[str], needle: Sequence[str]) -> bool:
    """Check whether ``needle`` occurs contiguously in ``haystack``."""
    size = len(needle)
    if size == 0 or size > len(haystack):
        return False
    first = needle[0]
    for i in range(len(haystack) - size + 1):
        if haystack[i] == first and list(haystack[i : i + size]) == list(needle):
            return True
    return False


def jaccard(left: frozenset[str], right: frozenset[str]) -> float:
    """Jaccard similarity of two token sets (0.0 when both are empty)."""
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)
