"""Conversions between PEP 440 versions (``packaging.version``) and ``Version``.

Supported mapping:
- release ``X[.Y[.Z]]`` → ``X.Y.Z`` (missing components are zero, more than
  three components are rejected, a non-zero epoch is rejected)
- ``aN`` / ``bN`` / ``rcN`` → prerelease ``alpha.N`` / ``beta.N`` / ``rc.N``
- ``.devN`` → prerelease ``dev.N`` (appended after any a/b/rc part; rejected
  together with ``.postN``)
- ``.postN`` and ``+local`` → build metadata (no effect on precedence)
"""

from __future__ import annotations

from packaging.version import InvalidVersion
from packaging.version import Version as Pep440Version

from .errors import InvalidVersionFormat
from .models.version import Identifier, Version

_PRE_LABELS = {"a": "alpha", "b": "beta", "rc": "rc"}
_PEP440_LABELS = {label: short for short, label in _PRE_LABELS.items()}


def _coerce(value: str | Pep440Version) -> Pep440Version:
    if isinstance(value, Pep440Version):
        return value
    try:
        return Pep440Version(value)
    except InvalidVersion as exc:
        raise InvalidVersionFormat(f"Invalid PEP 440 version: {value!r}", value) from exc


def from_pep440(value: str | Pep440Version) -> Version:
    """Convert a PEP 440 version (string or ``packaging`` object) into a ``Version``."""
    pep = _coerce(value)
    if pep.epoch:
        raise InvalidVersionFormat(f"Epochs cannot be expressed in SemVer: {pep}", str(pep))
    if len(pep.release) > 3:
        raise InvalidVersionFormat(
            f"SemVer allows at most three release components: {pep}", str(pep)
        )
    if pep.dev is not None and pep.post is not None:
        # a dev release of a post release sorts above the release in PEP 440
        raise InvalidVersionFormat(
            f"Post-release dev versions have no SemVer equivalent: {pep}", str(pep)
        )

    major, minor, patch = (tuple(pep.release) + (0, 0, 0))[:3]

    prerelease: list[Identifier] = []
    if pep.pre is not None:
        label, number = pep.pre
        prerelease.extend([_PRE_LABELS[label], number])
    if pep.dev is not None:
        prerelease.extend(["dev", pep.dev])

    build: list[str] = []
    if pep.post is not None:
        build.extend(["post", str(pep.post)])
    if pep.local:
        build.extend(part for part in pep.local.split(".") if part)

    return Version(
        major=major,
        minor=minor,
        patch=patch,
        prerelease=tuple(prerelease),
        build=tuple(build),
        raw=str(value),
    )


def to_pep440(version: Version) -> Pep440Version:
    """Convert a release or ``alpha``/``beta``/``rc`` prerelease into a PEP 440 version."""
    text = f"{version.major}.{version.minor}.{version.patch}"
    pre = version.prerelease
    if pre:
        label = pre[0]
        if (
            len(pre) != 2
            or not isinstance(label, str)
            or label not in _PEP440_LABELS
            or not isinstance(pre[1], int)
        ):
            raise InvalidVersionFormat(
                f"Prerelease {version.version!r} has no PEP 440 equivalent", version.version
            )
        text += f"{_PEP440_LABELS[label]}{pre[1]}"
    return Pep440Version(text)
