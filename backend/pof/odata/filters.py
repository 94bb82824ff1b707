"""
Batched Identifier Filters

A filter over thousands of ids does not fit into one URL, so the ids are
split into chunks, each chunk becomes its own OR-combined $filter, and the
chunks are read in parallel. Results are merged afterwards.
"""
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Type, TypeVar

from pof.core.settings import settings
from pof.logging_config import get_logger

logger = get_logger(__name__)

M = TypeVar("M")


def generate_split_filter_expr(
    filter_part: str,
    operator: str,
    ids: Iterable[Any],
    batch_size: Optional[int] = None,
) -> List[str]:
    """
    Split ids into OR-combined (or AND-combined) filter expressions.

    Args:
        filter_part: Expression for one id with a "{}" placeholder,
            e.g. "process_id eq guid'{}'"
        operator: Logical operator joining the parts ("or")
        ids: Identifiers to filter on; duplicates are dropped, order is kept
        batch_size: Max ids per expression (default: FILTER_BATCH_SIZE)

    Returns:
        ceil(len(unique ids) / batch_size) expressions, each id in exactly one
    """
    if batch_size is None:
        batch_size = settings.FILTER_BATCH_SIZE
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    unique_ids = list(dict.fromkeys(ids))
    joiner = f" {operator} "
    return [
        joiner.join(filter_part.format(id_) for id_ in unique_ids[start:start + batch_size])
        for start in range(0, len(unique_ids), batch_size)
    ]


def read_split_filters(
    client,
    model: Type[M],
    filters: List[str],
    build_uri: Callable[[str], str],
    max_workers: Optional[int] = None,
) -> List[M]:
    """
    Read every page for each split filter, one request per filter, in parallel.

    The first failing chunk's exception is raised to the caller.
    """
    if not filters:
        return []

    uris = [build_uri(expr) for expr in filters]
    if max_workers is None:
        max_workers = settings.FILTER_MAX_WORKERS
    max_workers = min(max_workers, len(uris))
    logger.info(
        "Reading %s in %d batch(es)", model.__name__, len(uris),
        extra={"batches": len(uris), "workers": max_workers},
    )

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        pages = executor.map(lambda uri: client.read_entity_set_all(uri, model).results, uris)
        return [entity for page in pages for entity in page]


def group_by(
    entities: Iterable[M],
    key: Callable[[M], Hashable],
    value: Callable[[M], Any] = lambda entity: entity,
    skip_none: bool = True,
) -> Dict[Hashable, List[Any]]:
    """Group entities by correlation key, mapping each to value(entity)."""
    grouped: Dict[Hashable, List[Any]] = defaultdict(list)
    for entity in entities:
        mapped = value(entity)
        if skip_none and mapped is None:
            continue
        grouped[key(entity)].append(mapped)
    return dict(grouped)
