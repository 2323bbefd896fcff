"""
CLI: Command Line Interface for the recipe search cache layer

支援 init-config、normalize、key、equivalent、keywords、prefetch、show-config。
"""

import click
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from recipe_cache.config import RecipeCacheConfig
from recipe_cache.normalization.cache_key import generate_cache_key
from recipe_cache.normalization.url_normalize import normalize_search_url, are_urls_equivalent
from recipe_cache.prefetch.keywords import extract_keywords
from recipe_cache.prefetch.planner import build_prefetch_plan
from recipe_cache.utils import hashing

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """# Recipe search cache configuration
base_origin: "http://localhost"
prefetch_limit: 5
log_level: "INFO"
popular_terms:
  - tomate
  - poulet
  - tarte
"""


def load_config(config_path: Optional[str]) -> RecipeCacheConfig:
    """讀取設定 (未指定時使用預設值)"""
    if not config_path:
        cfg = RecipeCacheConfig()
    else:
        logger.debug(f"Loading config: {config_path}")
        try:
            cfg = RecipeCacheConfig.from_yaml(config_path)
        except (OSError, ValidationError) as e:
            raise click.ClickException(f"Invalid config {config_path}: {e}")

    logging.getLogger().setLevel(cfg.log_level)
    return cfg


def parse_param_options(options: Tuple[str, ...]) -> Dict[str, Union[str, List[str]]]:
    """name=value 選項 → mapping (重複的 name 變成陣列)"""
    params: Dict[str, Union[str, List[str]]] = {}
    for option in options:
        if '=' not in option:
            raise click.BadParameter(f"expected name=value, got {option!r}", param_hint="--param")
        name, value = option.split('=', 1)
        if name in params:
            existing = params[name]
            params[name] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            params[name] = value
    return params


config_option = click.option('--config', 'config_path', default=None, help='Config YAML file path')


@click.group()
def cli():
    """Recipe search cache key & prefetch CLI"""
    pass


@cli.command()
@click.option('--out', default='recipe_cache.yaml', help='Output config file path')
def init_config(out: str):
    """產生範本設定檔"""
    Path(out).write_text(CONFIG_TEMPLATE, encoding='utf-8')

    click.echo(f"✓ Config file created: {out}")
    click.echo(f"  Edit this file and run: recipe-cache prefetch --config {out} <url>")


@cli.command()
@config_option
def show_config(config_path: Optional[str]):
    """顯示目前設定與 fingerprint"""
    cfg = load_config(config_path)
    click.echo(json.dumps(cfg.model_dump(), indent=2, ensure_ascii=False))
    click.echo(f"config_hash: {hashing.config_hash(cfg.model_dump())}")


@cli.command()
@config_option
@click.argument('urls', nargs=-1, required=True)
def normalize(config_path: Optional[str], urls: Tuple[str, ...]):
    """正規化搜尋 URL (每行一個)"""
    cfg = load_config(config_path)
    for url in urls:
        click.echo(normalize_search_url(url, cfg.base_origin))


@cli.command()
@config_option
@click.argument('endpoint')
@click.option('-p', '--param', 'param_options', multiple=True, help='name=value (可重複)')
@click.option('--digest', is_flag=True, help='同時輸出 key digest')
def key(config_path: Optional[str], endpoint: str, param_options: Tuple[str, ...], digest: bool):
    """由結構化參數產生 cache key"""
    load_config(config_path)
    cache_key = generate_cache_key(endpoint, parse_param_options(param_options))
    if digest:
        click.echo(f"{cache_key}\t{hashing.cache_key_digest(cache_key)}")
    else:
        click.echo(cache_key)


@cli.command()
@config_option
@click.argument('url_a')
@click.argument('url_b')
@click.pass_context
def equivalent(ctx: click.Context, config_path: Optional[str], url_a: str, url_b: str):
    """兩個 URL 是否共用 cache entry (exit code 0 = true)"""
    cfg = load_config(config_path)
    result = are_urls_equivalent(url_a, url_b, cfg.base_origin)
    click.echo('true' if result else 'false')
    if not result:
        ctx.exit(1)


@cli.command()
@config_option
@click.argument('url')
def keywords(config_path: Optional[str], url: str):
    """列出 URL 的關鍵字"""
    cfg = load_config(config_path)
    for keyword in sorted(extract_keywords(url, cfg.base_origin)):
        click.echo(keyword)


@cli.command()
@config_option
@click.argument('url')
@click.option('-t', '--term', 'terms', multiple=True, help='熱門搜尋詞 (可重複，預設取設定檔)')
@click.option('--json', 'as_json', is_flag=True, help='輸出 JSON')
def prefetch(config_path: Optional[str], url: str, terms: Tuple[str, ...], as_json: bool):
    """產生 prefetch URL 清單"""
    cfg = load_config(config_path)
    popular_terms = list(terms) or cfg.popular_terms

    if not popular_terms:
        logger.warning("No popular terms given, prefetch plan will be empty")

    plan = build_prefetch_plan(url, popular_terms, cfg.base_origin, cfg.prefetch_limit)

    if as_json:
        click.echo(plan.model_dump_json(indent=2))
    else:
        for prefetch_url in plan.urls:
            click.echo(prefetch_url)


if __name__ == '__main__':
    cli()
