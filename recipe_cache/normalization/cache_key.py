"""
Cache key generation from structured parameters

給程式化建立 request 的呼叫端使用：輸入尚未 URL 編碼的 mapping，
輸出與 normalize_search_url 相同格式的 canonical key。
"""

import logging
from typing import Any, List, Mapping, Optional

from recipe_cache.models import NormalizedQuery, QueryParam, ScalarValue, MultiValue
from recipe_cache.normalization.param_rules import clean_items, transform_param

logger = logging.getLogger(__name__)


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def to_query_param(name: str, value: Any) -> Optional[QueryParam]:
    """
    把結構化值轉成 QueryParam (陣列 → MultiValue, 其他 → ScalarValue)

    None 回傳 None。
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [_to_text(item) for item in value if item is not None]
        return QueryParam(name=name, raw=MultiValue(values=items))
    return QueryParam(name=name, raw=ScalarValue(value=_to_text(value)))


def build_normalized_query(params: Mapping[str, Any]) -> NormalizedQuery:
    pairs = []

    for name in sorted(params):
        param = to_query_param(name, params[name])
        if param is None:
            continue

        if isinstance(param.raw, MultiValue):
            # 陣列一律 trim/排序後以逗號合併
            items: List[str] = clean_items(param.raw.values)
            value = ','.join(items)
        else:
            value = transform_param(name, param.raw.value)

        if not value:
            continue

        try:
            f"{name}={value}".encode('utf-8')
        except UnicodeEncodeError:
            logger.warning(f"Dropping parameter {name!r}: value is not encodable as UTF-8")
            continue

        pairs.append((name, value))

    return NormalizedQuery(pairs=pairs)


def generate_cache_key(endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    產生 cache key

    Args:
        endpoint: API endpoint 或 path
        params: 參數 mapping (值可為字串、數字、布林或字串陣列)

    Returns:
        endpoint 或 endpoint?<sorted urlencoded pairs>
    """
    return build_normalized_query(params or {}).to_cache_key(endpoint)
