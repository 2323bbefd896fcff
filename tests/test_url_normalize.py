"""
Tests for search URL normalization and cache equivalence
"""

import pytest

from recipe_cache.normalization.url_normalize import (
    normalize_search_url,
    are_urls_equivalent,
    parse_search_url,
)
from recipe_cache.models import ScalarValue, MultiValue


def test_parameter_order_invariant():
    """測試參數順序不影響結果"""
    assert normalize_search_url("/r?b=2&a=1") == normalize_search_url("/r?a=1&b=2")
    assert normalize_search_url("/r?b=2&a=1") == "/r?a=1&b=2"


def test_text_normalization():
    """測試 name/search 小寫與空白合併"""
    assert normalize_search_url("/r?name=%20%20Pasta%20%20%20Bolognese%20%20") == "/r?name=pasta+bolognese"
    assert normalize_search_url("/r?search=TARTE+aux+Pommes") == "/r?search=tarte+aux+pommes"


def test_list_sorting():
    """測試 ingredients/origins 排序"""
    assert normalize_search_url("/r?ingredients=tomate,ail") == "/r?ingredients=ail%2Ctomate"
    assert normalize_search_url("/r?origins=italie,%20,france%20") == "/r?origins=france%2Citalie"


@pytest.mark.parametrize("value", ["-5", "abc", "0", ""])
def test_numeric_filter_drops_invalid(value):
    """測試非正整數被移除"""
    assert normalize_search_url(f"/r?minTime={value}") == "/r"


def test_numeric_filter_keeps_positive():
    """測試正整數保留"""
    assert normalize_search_url("/r?minTime=20") == "/r?minTime=20"
    assert normalize_search_url("/r?maxTime=45min&scaled=4") == "/r?maxTime=45&scaled=4"


def test_boolean_filter():
    """測試 babyFriendly 只接受 true/false"""
    assert normalize_search_url("/r?babyFriendly=yes") == "/r"
    assert normalize_search_url("/r?babyFriendly=true") == "/r?babyFriendly=true"
    assert normalize_search_url("/r?babyFriendly=false") == "/r?babyFriendly=false"


def test_unknown_params_pass_through():
    """測試未知參數 trim 後原樣保留"""
    assert normalize_search_url("/r?page=%202%20&sort=Name") == "/r?page=2&sort=Name"


def test_repeated_params_sorted_separately():
    """測試重複參數: 各自保留並排序，不套用名稱規則"""
    result = normalize_search_url("/r?origins=italie&origins=%20&origins=France")
    assert result == "/r?origins=France&origins=italie"


def test_absolute_url_and_fragment():
    """測試絕對 URL 只保留 path + query"""
    result = normalize_search_url("https://example.com/search/recipes/filter?name=Tarte#top")
    assert result == "/search/recipes/filter?name=tarte"


def test_no_surviving_params_has_no_question_mark():
    assert normalize_search_url("/search/recipes/filter?minTime=abc&name=%20") == "/search/recipes/filter"


@pytest.mark.parametrize("url", [
    "/r?b=2&a=1",
    "/search/recipes/filter?name=%20Tarte%20Tatin&ingredients=pomme,beurre&minTime=10",
    "/r?origins=b&origins=a&babyFriendly=true",
    "/search/recipes/name/p%C3%A2tes%20fra%C3%AEches",
    "https://example.com/r?scaled=+4&tag=a%26b",
    "/r?name=Foo&name=",
    "/r?minTime=abc&minTime=",
    "/search/recipes/name/pasta bolognese",
    "not a valid url::::",
])
def test_idempotent(url):
    """測試重複正規化結果不變"""
    once = normalize_search_url(url)
    assert normalize_search_url(once) == once


@pytest.mark.parametrize("url", [
    "not a valid url::::",
    "http://[::1",
    "javascript:alert(1)",
])
def test_malformed_input_returned_unchanged(url):
    """測試無法解析時原樣回傳"""
    assert normalize_search_url(url) == url


def test_equivalence():
    """測試 cache 等價判斷"""
    assert are_urls_equivalent(
        "/search/recipes/filter?name=Tarte&minTime=10",
        "/search/recipes/filter?minTime=10&name=tarte",
    )
    assert not are_urls_equivalent(
        "/search/recipes/filter?name=tarte",
        "/search/recipes/filter?name=tartes",
    )


def test_equivalence_of_malformed_urls_is_string_equality():
    assert are_urls_equivalent("not a valid url::::", "not a valid url::::")
    assert not are_urls_equivalent("not a valid url::::", "not a valid url:::")


def test_parse_groups_repeated_names():
    """測試解析: 單值為 ScalarValue，重複為 MultiValue"""
    path, params = parse_search_url("/r?a=1&b=2&a=3")
    assert path == "/r"
    by_name = {p.name: p.raw for p in params}
    assert by_name["a"] == MultiValue(values=["1", "3"])
    assert by_name["b"] == ScalarValue(value="2")


def test_parse_rejects_whitespace_in_path():
    with pytest.raises(ValueError):
        parse_search_url("not a valid url::::")


def test_repeated_param_with_single_survivor_uses_rule():
    """測試重複參數只剩一個值時套用名稱規則"""
    assert normalize_search_url("/r?name=Foo&name=") == "/r?name=foo"
    assert normalize_search_url("/r?minTime=abc&minTime=") == "/r"


def test_lone_surrogate_returned_unchanged():
    """測試無法編碼為 UTF-8 的值不會丟出例外"""
    url = "/r?name=\ud800"
    assert normalize_search_url(url) == url


def test_rooted_path_with_space_is_encoded():
    """測試以 / 開頭的路由含空白時照瀏覽器方式編碼"""
    assert normalize_search_url("/search/recipes/name/pasta bolognese") == "/search/recipes/name/pasta%20bolognese"
    assert are_urls_equivalent("/search/recipes/name/pasta bolognese", "/search/recipes/name/pasta%20bolognese")
