from __future__ import annotations

import datetime as dt
from typing import Sequence, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193


def fnv1a_32(text: str) -> int:
    value = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        value ^= byte
        value = (value * FNV_PRIME) & MASK32
    return value


def mix32(value: int) -> int:
    value &= MASK32
    value ^= value >> 16
    value = (value * 0x7FEB352D) & MASK32
    value ^= value >> 15
    value = (value * 0x846CA68B) & MASK32
    value ^= value >> 16
    return value


def seeded_shuffle(items: Sequence[T], seed: str) -> list[T]:
    """Fisher-Yates shuffle driven only by ``seed``.

    The same ``(items, seed)`` pair always produces the same order; no global
    random state or clock is consulted. The input sequence is left untouched.
    """
    result = list(items)
    base = fnv1a_32(seed)
    for i in range(len(result) - 1, 0, -1):
        j = mix32((base + i) & MASK32) % (i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def time_bucket(moment: dt.datetime | dt.date) -> str:
    return f"{moment.year:04d}-{moment.month:02d}"


def rotation_seed(bucket: str, key: str) -> str:
    return f"{bucket}:{key}"


def featured(items: Sequence[T], bucket: str, key: str, limit: int) -> list[T]:
    if limit <= 0:
        return []
    return seeded_shuffle(items, rotation_seed(bucket, key))[:limit]
