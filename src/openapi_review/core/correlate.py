"""Match documented operations against openapi-diff results."""

from collections.abc import Iterable, Mapping
from typing import Any

from openapi_review.models import DiffResult, SpecDocument


def _paths_of(spec: SpecDocument | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(spec, SpecDocument):
        return spec.paths
    paths = spec.get("paths")
    return paths if isinstance(paths, Mapping) else {}


def get_operation_location(specs: Iterable[SpecDocument | Mapping[str, Any]], operation_id: str) -> str | None:
    """Return ``paths.<route>.<method>`` for *operation_id*, scanning specs in order.

    When several specs define the same id the first one scanned wins.
    """
    for spec in specs:
        for route, operations in _paths_of(spec).items():
            if not isinstance(operations, Mapping):
                continue
            for method, operation in operations.items():
                if isinstance(operation, Mapping) and operation.get("operationId") == operation_id:
                    return ".".join(["paths", route, method])
    return None


def find_matching_difference(diffs: list[DiffResult] | None, operation_location: str) -> bool:
    """True when any diff entry sits at or below *operation_location* (string prefix match)."""
    if not diffs:
        return False
    return any(location.startswith(operation_location) for diff in diffs for location in diff.locations())
