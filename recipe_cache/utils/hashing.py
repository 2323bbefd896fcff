"""Hashing utilities for cache keys and config fingerprints."""

import hashlib
import json
from typing import Dict, Any


def cache_key_digest(key: str) -> str:
    """
    產生 cache key digest (給有 key 長度限制的 store)

    Args:
        key: canonical cache key

    Returns:
        SHA256 hash (hex, 前 16 字元)
    """
    return hashlib.sha256(key.encode('utf-8')).hexdigest()[:16]


def config_hash(config_dict: Dict[str, Any]) -> str:
    """
    產生 config hash

    Args:
        config_dict: 設定字典

    Returns:
        SHA256 hash (hex, 前 16 字元)
    """
    # 只取會影響 key 與 prefetch 結果的欄位
    stable_keys = ['base_origin', 'prefetch_limit']
    stable_config = {k: config_dict.get(k) for k in stable_keys if k in config_dict}

    json_str = json.dumps(stable_config, sort_keys=True, ensure_ascii=False)
    return hashlib.sha256(json_str.encode('utf-8')).hexdigest()[:16]
