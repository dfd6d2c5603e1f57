"""Pipeline configuration: JSON file plus an environment override for variants."""
from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from almanac.io_utils import load_json
from almanac.seeds import SEED_VARIANTS, SeedVariant
from almanac.types import Category, category_rank, parse_category

VARIANTS_ENV = "ALMANAC_VARIANTS"

_KNOWN_KEYS = frozenset({"source", "terminal", "variants"})


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    source: Category = "seed"
    terminal: Category = "location"
    variants: tuple[SeedVariant, ...] = SEED_VARIANTS

    def __post_init__(self) -> None:
        if category_rank(self.source) >= category_rank(self.terminal):
            raise ValueError(
                f"source {self.source!r} must come before terminal {self.terminal!r}",
            )
        if not self.variants:
            raise ValueError("at least one seed variant is required")
        for variant in self.variants:
            if variant not in SEED_VARIANTS:
                raise ValueError(f"unknown seed variant {variant!r}; expected one of {SEED_VARIANTS}")


def parse_variants(raw: str | list[str] | tuple[str, ...]) -> tuple[SeedVariant, ...]:
    """Parse ``"single,ranges"`` (or a list) into an ordered, de-duplicated tuple."""
    parts = raw.split(",") if isinstance(raw, str) else list(raw)
    variants: list[SeedVariant] = []
    for part in parts:
        token = str(part).strip().lower()
        if token == "both":
            candidates = list(SEED_VARIANTS)
        elif token:
            candidates = [token]
        else:
            continue
        for candidate in candidates:
            if candidate not in SEED_VARIANTS:
                raise ValueError(f"unknown seed variant {candidate!r}; expected one of {SEED_VARIANTS}")
            if candidate not in variants:
                variants.append(cast(SeedVariant, candidate))
    return tuple(variants)


def config_from_dict(payload: Mapping[str, Any]) -> PipelineConfig:
    unknown = sorted(set(payload) - _KNOWN_KEYS)
    if unknown:
        raise ValueError(f"unknown config keys: {unknown}")
    defaults = PipelineConfig()
    return PipelineConfig(
        source=parse_category(str(payload.get("source", defaults.source))),
        terminal=parse_category(str(payload.get("terminal", defaults.terminal))),
        variants=parse_variants(payload.get("variants", list(defaults.variants))),
    )


def load_pipeline_config(
    path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> PipelineConfig:
    """Load config from ``path`` (optional) then apply ``ALMANAC_VARIANTS``."""

    payload: dict[str, Any] = {}
    if path is not None:
        data = load_json(path)
        if not isinstance(data, dict):
            raise ValueError(f"Invalid config payload in {path}")
        payload = dict(data)

    env = os.environ if environ is None else environ
    override = str(env.get(VARIANTS_ENV, "") or "").strip()
    if override:
        payload["variants"] = override
    return config_from_dict(payload)
