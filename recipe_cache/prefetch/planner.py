"""
Predictive prefetch planning

目前 URL 的關鍵字 × 熱門搜尋詞 → 候選 URL (最多 5 個)：
- 名稱搜尋: /search/recipes/name/<keyword term>
- 若熱門詞看起來像食材，再加: /search/recipes/ingredients/<term>

食材判斷是固定字彙表的雙向子字串比對，會有誤判，刻意保持原樣。
"""

import logging
from typing import List, Optional, Sequence

from recipe_cache.models import PrefetchPlan
from recipe_cache.navigation.search_urls import encode_component, NAME_SEARCH_PATH, INGREDIENTS_SEARCH_PATH
from recipe_cache.normalization.url_normalize import DEFAULT_BASE_ORIGIN
from recipe_cache.prefetch.keywords import extract_keywords

logger = logging.getLogger(__name__)

MAX_PREFETCH_URLS = 5

INGREDIENT_VOCABULARY = (
    'tomate', 'carotte', 'oignon', 'ail', 'pomme', 'poire', 'salade', 'épinard',
    'poulet', 'bœuf', 'porc', 'poisson', 'saumon', 'thon', 'crevette',
    'riz', 'pâtes', 'quinoa', 'avoine', 'blé', 'farine',
    'lait', 'fromage', 'yaourt', 'crème', 'beurre', 'œuf',
    'huile', 'vinaigre', 'sel', 'poivre', 'herbe', 'épice',
)


def is_likely_ingredient(term: str) -> bool:
    """熱門詞與字彙表任一詞互為子字串即視為食材"""
    lower_term = term.lower()
    return any(word in lower_term or lower_term in word for word in INGREDIENT_VOCABULARY)


def generate_prefetch_urls(
    keywords: Sequence[str],
    popular_terms: Sequence[str],
    limit: int = MAX_PREFETCH_URLS
) -> List[str]:
    """
    依序產生候選 URL 後截斷

    外層為關鍵字、內層為熱門詞 (依傳入順序)。
    """
    limit = max(0, min(limit, MAX_PREFETCH_URLS))
    urls: List[str] = []

    for keyword in keywords:
        for popular_term in popular_terms:
            if keyword == popular_term.lower():
                continue

            try:
                candidates = [f"{NAME_SEARCH_PATH}/{encode_component(f'{keyword} {popular_term}')}"]
                if is_likely_ingredient(popular_term):
                    candidates.append(f"{INGREDIENTS_SEARCH_PATH}/{encode_component(popular_term)}")
            except UnicodeEncodeError:
                logger.warning(f"Skipping popular term {popular_term!r}: not encodable as UTF-8")
                continue

            urls.extend(candidates)

            if len(urls) >= limit:
                return urls[:limit]

    return urls[:limit]


def plan_prefetch(
    current_url: str,
    popular_terms: Sequence[str],
    base_origin: str = DEFAULT_BASE_ORIGIN,
    limit: int = MAX_PREFETCH_URLS
) -> List[str]:
    """
    產生預先抓取的 URL 清單

    Args:
        current_url: 目前的搜尋 URL
        popular_terms: 外部提供的熱門搜尋詞
        base_origin: 解析相對 URL 用的 origin
        limit: 上限 (不超過 5)

    Returns:
        候選 URL，依產生順序
    """
    return build_prefetch_plan(current_url, popular_terms, base_origin, limit).urls


def build_prefetch_plan(
    current_url: str,
    popular_terms: Sequence[str],
    base_origin: str = DEFAULT_BASE_ORIGIN,
    limit: Optional[int] = None
) -> PrefetchPlan:
    """同 plan_prefetch，但一併回傳擷取到的關鍵字"""
    # set 沒有固定順序，排序後才能得到穩定的產生順序
    keywords = sorted(extract_keywords(current_url, base_origin))
    urls = generate_prefetch_urls(keywords, popular_terms, MAX_PREFETCH_URLS if limit is None else limit)

    logger.debug(f"Prefetch plan for {current_url!r}: {len(urls)} urls from {len(keywords)} keywords")
    return PrefetchPlan(source_url=current_url, keywords=keywords, urls=urls)
