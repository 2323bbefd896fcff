"""
Search URL normalization for cache keys

邏輯上相同的搜尋 URL 必須得到同一個 cache key：
1. 參數名稱排序
2. 依參數規則清理單一值 (list / text / 數字 / 布林)
3. 同名多值時 trim、去空值、排序
4. 移除 scheme/host/fragment，只保留 path + query
"""

import logging
import re
from typing import Dict, List, Tuple
from urllib.parse import quote, urljoin, urlsplit, parse_qsl

from recipe_cache.models import NormalizedQuery, QueryParam, ScalarValue, MultiValue
from recipe_cache.normalization.param_rules import clean_items, transform_param

logger = logging.getLogger(__name__)

DEFAULT_BASE_ORIGIN = "http://localhost"

_ALLOWED_SCHEMES = ('http', 'https')
_CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')
_WHITESPACE = re.compile(r'\s')
# 與瀏覽器 pathname 相同: 已有的 %XX 與保留字元不再編碼
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"


def parse_search_url(url: str, base_origin: str = DEFAULT_BASE_ORIGIN) -> Tuple[str, List[QueryParam]]:
    """
    解析 URL 為 path 與參數清單

    相對 URL 以 base_origin 解析。參數依第一次出現的順序排列，
    只出現一次的名稱為 ScalarValue，重複的名稱為 MultiValue。

    Raises:
        ValueError: URL 無法解析
    """
    if not isinstance(url, str):
        raise ValueError(f"URL must be a string, got {type(url).__name__}")

    rooted = url.startswith('/') or bool(urlsplit(url).scheme)
    parsed = urlsplit(urljoin(base_origin, url))

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        raise ValueError(f"Unsupported scheme: {parsed.scheme!r}")
    if _WHITESPACE.search(parsed.netloc) or _CONTROL_CHARS.search(parsed.netloc + parsed.path):
        raise ValueError(f"Invalid characters in URL: {url!r}")
    # 沒有開頭 / 也沒有 scheme 的字串含空白，視為不是 URL
    if not rooted and _WHITESPACE.search(parsed.path):
        raise ValueError(f"Not a URL: {url!r}")

    path = quote(parsed.path, safe=_PATH_SAFE) or '/'

    grouped: Dict[str, List[str]] = {}
    for name, value in parse_qsl(parsed.query, keep_blank_values=True):
        grouped.setdefault(name, []).append(value)

    params = []
    for name, values in grouped.items():
        if len(values) == 1:
            params.append(QueryParam(name=name, raw=ScalarValue(value=values[0])))
        else:
            params.append(QueryParam(name=name, raw=MultiValue(values=values)))

    return path, params


def normalize_params(params: List[QueryParam]) -> NormalizedQuery:
    """對已解析的參數套用規則並排序"""
    pairs: List[Tuple[str, str]] = []

    for param in sorted(params, key=lambda p: p.name):
        if isinstance(param.raw, ScalarValue):
            value = transform_param(param.name, param.raw.value)
            if value:
                pairs.append((param.name, value))
        else:
            # 多值不合併，每個值各自成為一組 name=value
            values = clean_items(param.raw.values)
            if len(values) == 1:
                # 只剩一個值時與單值相同處理，重複正規化才會穩定
                value = transform_param(param.name, values[0])
                if value:
                    pairs.append((param.name, value))
            else:
                pairs.extend((param.name, value) for value in values)

    return NormalizedQuery(pairs=pairs)


def normalize_search_url(url: str, base_origin: str = DEFAULT_BASE_ORIGIN) -> str:
    """
    正規化搜尋 URL

    Args:
        url: 相對或絕對 URL
        base_origin: 解析相對 URL 用的 origin

    Returns:
        canonical path + query；無法解析時原樣回傳
    """
    # UnicodeEncodeError (例如單獨的 surrogate) 也是 ValueError
    try:
        path, params = parse_search_url(url, base_origin)
        return normalize_params(params).to_cache_key(path)
    except ValueError as e:
        logger.warning(f"URL normalization failed for {url!r}: {e}")
        return url


def are_urls_equivalent(url_a: str, url_b: str, base_origin: str = DEFAULT_BASE_ORIGIN) -> bool:
    """兩個 URL 是否共用同一個 cache entry"""
    return normalize_search_url(url_a, base_origin) == normalize_search_url(url_b, base_origin)
