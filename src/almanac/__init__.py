"""Almanac range pipeline: interval splitting across a linear category chain."""

from almanac.config import PipelineConfig, load_pipeline_config
from almanac.graph import (
    CategoryGraph,
    MalformedGraphError,
    UnreachableCategoryError,
    build_category_graph,
    category_graph_from_dict,
    category_graph_to_dict,
)
from almanac.parser import AlmanacParseError, ParsedAlmanac, load_almanac, parse_almanac
from almanac.pipeline import (
    CategoryMismatchError,
    GenerationStats,
    PipelineResult,
    find_nearest,
    pipeline_result_to_dict,
    progress_id_ranges,
    progress_id_ranges_to,
    run_pipeline,
)
from almanac.seeds import SeedVariant, build_initial_ranges, ids_as_single_ranges, ids_to_ranges
from almanac.splitting import split_id_range, split_id_ranges
from almanac.types import (
    CATEGORY_ORDER,
    Category,
    CategoryMap,
    IdRange,
    Interval,
    InvalidIdRangeError,
    build_category_map,
    parse_category,
)

__all__ = [
    "AlmanacParseError",
    "CATEGORY_ORDER",
    "Category",
    "CategoryGraph",
    "CategoryMap",
    "CategoryMismatchError",
    "GenerationStats",
    "IdRange",
    "Interval",
    "InvalidIdRangeError",
    "MalformedGraphError",
    "ParsedAlmanac",
    "PipelineConfig",
    "PipelineResult",
    "SeedVariant",
    "UnreachableCategoryError",
    "build_category_graph",
    "build_category_map",
    "build_initial_ranges",
    "category_graph_from_dict",
    "category_graph_to_dict",
    "find_nearest",
    "ids_as_single_ranges",
    "ids_to_ranges",
    "load_almanac",
    "load_pipeline_config",
    "parse_almanac",
    "parse_category",
    "pipeline_result_to_dict",
    "progress_id_ranges",
    "progress_id_ranges_to",
    "run_pipeline",
    "split_id_range",
    "split_id_ranges",
]
