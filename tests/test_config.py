"""
Tests for configuration loading
"""

import pytest
from pydantic import ValidationError

from recipe_cache.config import RecipeCacheConfig


def test_defaults():
    cfg = RecipeCacheConfig()
    assert cfg.base_origin == "http://localhost"
    assert cfg.prefetch_limit == 5
    assert cfg.popular_terms == []
    assert cfg.log_level == "INFO"


def test_from_yaml(tmp_path):
    """測試從 YAML 載入"""
    path = tmp_path / "config.yaml"
    path.write_text(
        'base_origin: "https://recipes.example/"\n'
        "prefetch_limit: 3\n"
        "log_level: debug\n"
        "popular_terms: [tomate, poulet]\n",
        encoding="utf-8",
    )
    cfg = RecipeCacheConfig.from_yaml(str(path))
    assert cfg.base_origin == "https://recipes.example"
    assert cfg.prefetch_limit == 3
    assert cfg.log_level == "DEBUG"
    assert cfg.popular_terms == ["tomate", "poulet"]


def test_empty_yaml_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert RecipeCacheConfig.from_yaml(str(path)) == RecipeCacheConfig()


@pytest.mark.parametrize("data", [
    {"prefetch_limit": 6},
    {"prefetch_limit": 0},
    {"base_origin": "ftp://example.com"},
    {"log_level": "LOUD"},
])
def test_invalid_values(data):
    with pytest.raises(ValidationError):
        RecipeCacheConfig(**data)
