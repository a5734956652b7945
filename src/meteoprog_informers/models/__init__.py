from __future__ import annotations

from meteoprog_informers.models.cache import TransientEntry
from meteoprog_informers.models.informer import Informer, InformerList

__all__ = [
    # directory
    "Informer",
    "InformerList",
    # store
    "TransientEntry",
]
