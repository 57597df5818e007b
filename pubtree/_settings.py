"""Ustawienia domyślne CLI — konfiguracja przez zmienne środowiskowe."""

from __future__ import annotations

import os

from compiler import DEFAULT_PARSE_LEVEL, CollisionPolicy, CompileOptions
from data_model import OWNER_PLACEHOLDER

_TRUE_VALUES = {"1", "true", "yes", "on", "tak"}


def _env_bool(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUE_VALUES


def get_parse_level() -> int:
    raw = os.getenv("PUBTREE_PARSE_LEVEL", str(DEFAULT_PARSE_LEVEL))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"PUBTREE_PARSE_LEVEL musi być liczbą całkowitą: '{raw}'") from None


def get_owner() -> str:
    return os.getenv("PUBTREE_OWNER", OWNER_PLACEHOLDER)


def get_compile_options(
    *,
    parse_level: int | None = None,
    namespace: bool | None = None,
    collision: str | None = None,
    require_title: bool = False,
) -> CompileOptions:
    """
    Opcje kompilacji: flagi CLI (gdy podane) mają pierwszeństwo przed
    PUBTREE_PARSE_LEVEL / PUBTREE_NAMESPACE_IDS / PUBTREE_COLLISION_POLICY.

    Raises:
        ValueError: nieprawidłowa wartość zmiennej środowiskowej
    """
    policy = collision or os.getenv("PUBTREE_COLLISION_POLICY", CollisionPolicy.ERROR)
    try:
        policy = CollisionPolicy(policy)
    except ValueError:
        raise ValueError(
            f"Nieznana polityka kolizji '{policy}' (dozwolone: error, suffix)"
        ) from None

    return CompileOptions(
        parse_level           = parse_level if parse_level is not None else get_parse_level(),
        namespace_identifiers = namespace or _env_bool("PUBTREE_NAMESPACE_IDS"),
        collision_policy      = policy,
        require_title         = require_title,
    )
