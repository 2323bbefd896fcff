"""
Keyword extraction from search URLs

從 query 參數 (name/search/ingredients/origins) 與 path 取出小寫關鍵字，
長度需 > 2，結果去重。
"""

import logging
import re
from typing import Iterable, Set
from urllib.parse import unquote

from recipe_cache.normalization.url_normalize import DEFAULT_BASE_ORIGIN, parse_search_url
from recipe_cache.models import MultiValue

logger = logging.getLogger(__name__)

MIN_KEYWORD_LENGTH = 3

TEXT_PARAMS = frozenset({'name', 'search'})
LIST_PARAMS = frozenset({'ingredients', 'origins'})

# 路由用的 path segment，不是使用者輸入；name/ingredients/filter 也刻意排除
RESERVED_SEGMENTS = frozenset({'search', 'recipes', 'name', 'ingredients', 'filter'})

_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def _keep(terms: Iterable[str]) -> Set[str]:
    return {term for term in terms if len(term) >= MIN_KEYWORD_LENGTH}


def terms_from_text(value: str) -> Set[str]:
    """name/search: 小寫後以空白切開"""
    return _keep(value.lower().split())


def terms_from_list(value: str) -> Set[str]:
    """ingredients/origins: 以逗號切開"""
    return _keep(item.strip().lower() for item in value.split(','))


def decode_segment(segment: str) -> str:
    """
    Percent-decode 一個 path segment

    Raises:
        ValueError: 不完整的 %XX 序列，或解碼後不是合法 UTF-8
    """
    if _BAD_ESCAPE.search(segment):
        raise ValueError(f"Malformed percent escape in {segment!r}")
    return unquote(segment, errors='strict')


def extract_keywords(url: str, base_origin: str = DEFAULT_BASE_ORIGIN) -> Set[str]:
    """
    擷取 URL 中的關鍵字

    Args:
        url: 目前的搜尋 URL
        base_origin: 解析相對 URL 用的 origin

    Returns:
        關鍵字集合；無法解析時為空集合
    """
    try:
        path, params = parse_search_url(url, base_origin)
    except ValueError as e:
        logger.warning(f"Keyword extraction failed for {url!r}: {e}")
        return set()

    keywords: Set[str] = set()

    for param in params:
        values = param.raw.values if isinstance(param.raw, MultiValue) else [param.raw.value]
        for value in values:
            if param.name in TEXT_PARAMS:
                keywords |= terms_from_text(value)
            elif param.name in LIST_PARAMS:
                keywords |= terms_from_list(value)

    for segment in path.split('/'):
        if not segment or segment in RESERVED_SEGMENTS:
            continue
        try:
            decoded = decode_segment(segment)
        except ValueError:
            logger.debug(f"Skipping undecodable path segment: {segment!r}")
            continue
        keywords |= terms_from_list(decoded)

    return keywords
