"""
Core data models for the recipe search cache layer

Define the parameter value union, NormalizedQuery and PrefetchPlan as the
contract between the key/prefetch layer and the external cache store.
"""

from enum import Enum
from typing import Annotated, List, Tuple, Union, Literal
from urllib.parse import urlencode
from pydantic import BaseModel, Field


class ParameterRule(str, Enum):
    """每個 query 參數的正規化規則"""
    LIST = "list"
    TEXT_NORMALIZE = "text-normalize"
    POSITIVE_INTEGER = "positive-integer"
    BOOLEAN_STRICT = "boolean-strict"
    PASS_THROUGH = "pass-through"


class ScalarValue(BaseModel):
    """單一原始值 (URL 中只出現一次，或結構化 mapping 中的純量)"""
    kind: Literal["scalar"] = "scalar"
    value: str


class MultiValue(BaseModel):
    """多個原始值 (URL 中重複的 key，或結構化 mapping 中的陣列)"""
    kind: Literal["multi"] = "multi"
    values: List[str] = Field(default_factory=list)


ParamValue = Annotated[Union[ScalarValue, MultiValue], Field(discriminator="kind")]


class QueryParam(BaseModel):
    """一個參數名稱與其原始值"""
    name: str
    raw: ParamValue


class NormalizedQuery(BaseModel):
    """
    套用規則後的參數集合

    pairs 已依名稱排序 (同名多值時再依值排序)，可直接轉成 canonical query string。
    """
    pairs: List[Tuple[str, str]] = Field(default_factory=list, description="(name, value) 已排序")

    def to_query_string(self) -> str:
        """application/x-www-form-urlencoded 編碼"""
        return urlencode(self.pairs)

    def to_cache_key(self, path: str) -> str:
        """沒有參數時不加 '?'"""
        query = self.to_query_string()
        return f"{path}?{query}" if query else path


class PrefetchPlan(BaseModel):
    """預先抓取的候選 URL 清單"""
    source_url: str = Field(..., description="目前的搜尋 URL")
    keywords: List[str] = Field(default_factory=list, description="從 URL 擷取的關鍵字 (已排序)")
    urls: List[str] = Field(default_factory=list, description="候選 URL (依產生順序，最多 5 個)")

    class Config:
        json_schema_extra = {
            "example": {
                "source_url": "/search/recipes/name/tarte",
                "keywords": ["tarte"],
                "urls": [
                    "/search/recipes/name/tarte%20tomate",
                    "/search/recipes/ingredients/tomate"
                ]
            }
        }
