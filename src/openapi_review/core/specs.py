from typing import Any

import yaml

from openapi_review.errors import SpecLoadError
from openapi_review.models import SpecDocument

SWAGGER2 = "swagger2"
OPENAPI3 = "openapi3"


def detect_format(spec: dict[str, Any]) -> str | None:
    if "swagger" in spec:
        return SWAGGER2
    if "openapi" in spec:
        return OPENAPI3
    return None


def load_spec(content: str, location: str) -> SpecDocument:
    """Parse YAML (or JSON) spec *content* read from *location*."""
    try:
        spec = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise SpecLoadError(location, str(exc)) from exc
    if not isinstance(spec, dict):
        raise SpecLoadError(location, "document is not a mapping")
    return SpecDocument(spec=spec, content=content, location=location, format=detect_format(spec))
