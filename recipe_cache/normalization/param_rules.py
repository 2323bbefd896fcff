"""
Per-parameter canonicalization rules

每個已知參數名稱對應一條規則；未知名稱一律 pass-through。
規則表是唯讀常數，Normalizer 與 CacheKeyGenerator 共用。
"""

import re
from types import MappingProxyType
from typing import List, Mapping, Optional

from recipe_cache.models import ParameterRule


PARAMETER_RULES: Mapping[str, ParameterRule] = MappingProxyType({
    'ingredients': ParameterRule.LIST,
    'origins': ParameterRule.LIST,
    'name': ParameterRule.TEXT_NORMALIZE,
    'search': ParameterRule.TEXT_NORMALIZE,
    'minTime': ParameterRule.POSITIVE_INTEGER,
    'maxTime': ParameterRule.POSITIVE_INTEGER,
    'scaled': ParameterRule.POSITIVE_INTEGER,
    'babyFriendly': ParameterRule.BOOLEAN_STRICT,
})

_LEADING_INT = re.compile(r'^[+-]?\d+')
_WHITESPACE = re.compile(r'\s+')


def rule_for(name: str) -> ParameterRule:
    """取得參數名稱的規則 (未知名稱 → pass-through)"""
    return PARAMETER_RULES.get(name, ParameterRule.PASS_THROUGH)


def clean_items(values: List[str]) -> List[str]:
    """trim、去除空值、排序"""
    return sorted(v.strip() for v in values if v.strip())


def normalize_text(value: str) -> str:
    """小寫、合併內部空白、trim"""
    return _WHITESPACE.sub(' ', value.lower()).strip()


def parse_positive_int(value: str) -> Optional[int]:
    """
    解析開頭的整數部分 ("20min" → 20, "1.5" → 1)

    Returns:
        > 0 的整數，否則 None
    """
    match = _LEADING_INT.match(value.strip())
    if not match:
        return None
    number = int(match.group(0))
    return number if number > 0 else None


def apply_rule(rule: ParameterRule, value: str) -> str:
    """
    對單一原始值套用規則

    Args:
        rule: 參數規則
        value: 原始字串值

    Returns:
        轉換後的值；空字串表示此參數應被捨棄
    """
    value = value.strip()
    if not value:
        return ''

    if rule is ParameterRule.LIST:
        return ','.join(clean_items(value.split(',')))

    if rule is ParameterRule.TEXT_NORMALIZE:
        return normalize_text(value)

    if rule is ParameterRule.POSITIVE_INTEGER:
        number = parse_positive_int(value)
        return str(number) if number is not None else ''

    if rule is ParameterRule.BOOLEAN_STRICT:
        return value if value in ('true', 'false') else ''

    return value


def transform_param(name: str, value: str) -> str:
    return apply_rule(rule_for(name), value)
