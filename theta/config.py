from __future__ import annotations
import os

# Defaults
_DEFAULT_MAX_EXPANSION_DEPTH = 200
_DEFAULT_GENSYM_PREFIX = "G"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def str_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return raw.strip()


def get_max_expansion_depth() -> int:
    return int_from_env('THETA_MAX_EXPANSION_DEPTH', _DEFAULT_MAX_EXPANSION_DEPTH)


def get_gensym_prefix() -> str:
    prefix = str_from_env('THETA_GENSYM_PREFIX', _DEFAULT_GENSYM_PREFIX)
    # '#' is reserved as the separator inside generated names
    return prefix if '#' not in prefix else _DEFAULT_GENSYM_PREFIX
