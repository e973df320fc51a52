"""YAML/dict config loader for profanity-filter.

Supports loading from a YAML file or a plain dict (for embedding
in a larger service config).

Example YAML:

    profanity_filter:
      allow_list:
        - 어이
      skip_categories:
        - weak
      extra_terms:
        strong:
          - 썅
        foreign:
          - jerk
      sink:
        backend: sqlite          # "none", "memory", "sqlite" or "supabase"
        path: ~/.profanity-filter/moderation.db
        # supabase_url / supabase_key default to SUPABASE_URL /
        # SUPABASE_SERVICE_ROLE_KEY
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

from . import wordlists
from .detector import FilterConfig, ProfanityFilter
from .service import FilterService
from .sinks import MemorySink, NullSink
from .sink_sqlite import SqliteSink
from .types import Category

logger = logging.getLogger(__name__)

SINK_BACKENDS = ("none", "memory", "sqlite", "supabase")
DEFAULT_DB_PATH = "~/.profanity-filter/moderation.db"


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "profanity_filter" key or flat
    if "profanity_filter" in data:
        data = data["profanity_filter"] or {}

    sink = data.get("sink") or {}
    backend = sink.get("backend", "none")
    if backend not in SINK_BACKENDS:
        raise ValueError(f"unknown sink backend {backend!r}; expected one of {SINK_BACKENDS}")

    extra_terms = {
        Category(name): list(terms or [])
        for name, terms in (data.get("extra_terms") or {}).items()
    }
    if Category.PATTERN in extra_terms:
        raise ValueError("extra_terms cannot target the pattern category")

    return {
        "allow_list": set(data.get("allow_list") or []),
        "skip_categories": {Category(c) for c in data.get("skip_categories") or []},
        "extra_terms": extra_terms,
        "sink_backend": backend,
        "sink_path": sink.get("path", DEFAULT_DB_PATH),
        "supabase_url": sink.get("supabase_url"),
        "supabase_key": sink.get("supabase_key"),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml
    with open(Path(path).expanduser(), encoding="utf-8") as f:
        return load_config(yaml.safe_load(f))


def create_filter(config: dict[str, Any]) -> ProfanityFilter:
    """Build a ProfanityFilter from a normalized config."""
    extra = config.get("extra_terms", {})
    dictionary = tuple(
        wordlists.extend(tl, extra.get(tl.category, [])) for tl in wordlists.DICTIONARY
    )
    foreign = wordlists.extend(wordlists.FOREIGN, extra.get(Category.FOREIGN, []))
    return ProfanityFilter(FilterConfig(
        dictionary=dictionary,
        foreign=foreign,
        skip_categories=set(config.get("skip_categories", set())),
        allow_list=set(config.get("allow_list", set())),
    ))


def create_service(config: dict[str, Any] | None = None) -> FilterService:
    """Create a fully configured service from a config dict."""
    cfg = config if config is not None and "sink_backend" in config else load_config(config)

    backend = cfg["sink_backend"]
    if backend == "sqlite":
        sink = SqliteSink(db_path=cfg["sink_path"])
    elif backend == "supabase":
        from .sink_supabase import SupabaseSink
        sink = SupabaseSink.from_credentials(cfg.get("supabase_url"), cfg.get("supabase_key"))
    elif backend == "memory":
        sink = MemorySink()
    else:
        sink = NullSink()
    logger.debug("using %s sink", backend)

    return FilterService(create_filter(cfg), audit_sink=sink, state_sink=sink)
