"""
Configuration schema using Pydantic

cache key 產生與 prefetch 的執行設定。參數規則表與食材字彙表是固定常數，
不在設定範圍內。
"""

from typing import List
from pydantic import BaseModel, Field, field_validator

from recipe_cache.normalization.url_normalize import DEFAULT_BASE_ORIGIN
from recipe_cache.prefetch.planner import MAX_PREFETCH_URLS


class RecipeCacheConfig(BaseModel):
    """完整設定 schema"""
    base_origin: str = Field(default=DEFAULT_BASE_ORIGIN, description="解析相對 URL 用的 origin")
    prefetch_limit: int = Field(
        default=MAX_PREFETCH_URLS,
        ge=1,
        le=MAX_PREFETCH_URLS,
        description="每次 prefetch 最多 URL 數"
    )
    popular_terms: List[str] = Field(default_factory=list, description="預設熱門搜尋詞")
    log_level: str = Field(default="INFO", description="logging 等級")

    @field_validator("base_origin")
    @classmethod
    def check_origin(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_origin must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "RecipeCacheConfig":
        """從 YAML 檔案載入設定"""
        import yaml
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))
