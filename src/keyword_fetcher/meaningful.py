from __future__ import annotations

import math
from collections.abc import Mapping


def is_meaningful(response: object) -> bool:
    """Decide whether a provider response carries usable content.

    Lists count when non-empty, without looking at their items. Mappings count
    when any value is present, where blank strings are not. Scalars count when
    truthy. Anything else is not meaningful.
    """
    if response is None:
        return False
    if isinstance(response, (list, tuple)):
        return len(response) > 0
    if isinstance(response, Mapping):
        return any(_is_present(value) for value in response.values())
    if isinstance(response, float) and math.isnan(response):
        return False
    if isinstance(response, (str, int, float, bool)):
        return bool(response)
    return False


def _is_present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True
