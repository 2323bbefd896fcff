"""
Search route builders

產生前端搜尋路由 (名稱 / 食材 / 篩選)。prefetch 產生的 URL 必須與這些路由
逐字相同，才能命中同一個 cache entry。
"""

from typing import List, Optional, Sequence
from urllib.parse import quote, urlencode
from pydantic import BaseModel, Field

from recipe_cache.normalization.param_rules import clean_items


SEARCH_ROOT = "/search/recipes"
NAME_SEARCH_PATH = f"{SEARCH_ROOT}/name"
INGREDIENTS_SEARCH_PATH = f"{SEARCH_ROOT}/ingredients"
FILTER_SEARCH_PATH = f"{SEARCH_ROOT}/filter"
RECIPES_HOME_PATH = "/recipes"
NAME_LOOKUP_ENDPOINT = "/api/recipes/by-name"

# 與 JavaScript encodeURIComponent 相同的保留字元
_COMPONENT_SAFE = "-_.!~*'()"


def encode_component(value: str) -> str:
    return quote(value, safe=_COMPONENT_SAFE)


class RecipeFilters(BaseModel):
    """篩選頁的條件"""
    search_term: Optional[str] = Field(None, description="名稱關鍵字")
    ingredients: List[str] = Field(default_factory=list, description="食材")
    min_time: Optional[int] = Field(None, description="最短時間 (分鐘)")
    max_time: Optional[int] = Field(None, description="最長時間 (分鐘)")
    origins: List[str] = Field(default_factory=list, description="料理來源")
    baby_friendly: Optional[bool] = Field(None, description="適合嬰兒")
    scaled_person: Optional[int] = Field(None, description="份量 (人數)")


def _with_scaled(url: str, scaled_person: Optional[int]) -> str:
    if scaled_person:
        return f"{url}?{urlencode({'scaled': scaled_person})}"
    return url


def build_name_search_url(name: str, scaled_person: Optional[int] = None) -> str:
    return _with_scaled(f"{NAME_SEARCH_PATH}/{encode_component(name.strip())}", scaled_person)


def build_ingredients_search_url(
    ingredients: Sequence[str],
    scaled_person: Optional[int] = None
) -> Optional[str]:
    """
    食材搜尋路由 (trim、排序後以逗號合併)

    Returns:
        URL；沒有有效食材時為 None
    """
    items = clean_items(list(ingredients))
    if not items:
        return None
    return _with_scaled(f"{INGREDIENTS_SEARCH_PATH}/{encode_component(','.join(items))}", scaled_person)


def build_filter_url(filters: RecipeFilters) -> str:
    """
    篩選路由

    參數順序固定: search, ingredients, minTime, maxTime, origins, babyFriendly, scaled。
    沒有任何條件時回到 /recipes。
    """
    params = []

    if filters.search_term and filters.search_term.strip():
        params.append(('search', filters.search_term.strip()))

    ingredients = clean_items(filters.ingredients)
    if ingredients:
        params.append(('ingredients', ','.join(ingredients)))

    if filters.min_time is not None and filters.min_time > 0:
        params.append(('minTime', str(filters.min_time)))

    if filters.max_time is not None and filters.max_time > 0:
        params.append(('maxTime', str(filters.max_time)))

    origins = clean_items(filters.origins)
    if origins:
        params.append(('origins', ','.join(origins)))

    if filters.baby_friendly is not None:
        params.append(('babyFriendly', 'true' if filters.baby_friendly else 'false'))

    if filters.scaled_person and filters.scaled_person > 0:
        params.append(('scaled', str(filters.scaled_person)))

    if not params:
        return RECIPES_HOME_PATH
    return f"{FILTER_SEARCH_PATH}?{urlencode(params)}"


def popular_search_cache_keys(popular_searches: Sequence[str]) -> List[str]:
    """熱門搜尋詞 → 名稱查詢 API 的 cache key (空白詞略過)"""
    keys = []
    for term in popular_searches:
        term = term.strip()
        if term:
            keys.append(f"{NAME_LOOKUP_ENDPOINT}?name={encode_component(term)}")
    return keys
