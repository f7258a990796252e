"""Version ordering built atop packaging.version.

npm versions are close enough to PEP 440 for ordering purposes
(``1.0.0-beta.1`` parses as ``1.0.0b1``). Anything packaging rejects sorts
after the parseable versions, in string order.
"""

from __future__ import annotations

from collections.abc import Iterable

from packaging.version import InvalidVersion, Version


def sort_versions(versions: Iterable[str]) -> tuple[str, ...]:
    """Return the distinct versions in ascending precedence."""
    unique = {v.strip() for v in versions if v and v.strip()}
    valid: list[tuple[Version, str]] = []
    invalid: list[str] = []
    for v in unique:
        try:
            valid.append((Version(v), v))
        except InvalidVersion:
            invalid.append(v)
    return tuple(v for _, v in sorted(valid)) + tuple(sorted(invalid))
