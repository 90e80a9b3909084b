"""
Corpus reader and tokenizer.
Reads plain text or HTML files and turns them into distinct, case-folded words
restricted to a whitelist of characters.
"""

import logging
import warnings
from pathlib import Path
from typing import Iterable

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

from nltk.tokenize import WhitespaceTokenizer

logger = logging.getLogger(__name__)

_TOKENIZER = WhitespaceTokenizer()

HTML_SUFFIXES = (".html", ".htm")


def read_text_file(filepath: Path) -> str:
    """
    Read file content, handling common encodings.
    latin-1 maps every byte, so it is the last resort and never fails.
    """
    for encoding in ("utf-8", "cp1252"):
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return Path(filepath).read_text(encoding="latin-1")


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def read_corpus(filepath: Path) -> str:
    """Text of a corpus file; HTML files are reduced to their visible text."""
    filepath = Path(filepath)
    content = read_text_file(filepath)
    if filepath.suffix.lower() in HTML_SUFFIXES:
        return extract_text_from_html(content)
    return content


def tokenize(text: str) -> list[str]:
    """Split text on runs of whitespace."""
    if not text:
        return []
    return _TOKENIZER.tokenize(text)


def filter_word(token: str, whitelist: str | set[str]) -> str:
    """Lowercase token and drop characters outside the whitelist."""
    return "".join(ch for ch in token.lower() if ch in whitelist)


def unique_words(tokens: Iterable[str], whitelist: str | set[str]) -> list[str]:
    """
    Filtered, deduplicated words in order of first appearance.
    Tokens with no whitelisted characters are dropped.
    """
    allowed = set(whitelist)
    seen: dict[str, None] = {}
    for token in tokens:
        word = filter_word(token, allowed)
        if word and word not in seen:
            seen[word] = None
    return list(seen)


def read_unique_words(*paths: Path, whitelist: str) -> list[str]:
    """
    Distinct words over one or more corpus files.
    Raises FileNotFoundError for a missing file.
    """
    tokens: list[str] = []
    for path in paths:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {path}")
        file_tokens = tokenize(read_corpus(path))
        logger.debug("Read %d tokens from %s", len(file_tokens), path)
        tokens.extend(file_tokens)
    words = unique_words(tokens, whitelist)
    logger.info("Found %d unique words in %d file(s)", len(words), len(paths))
    return words
