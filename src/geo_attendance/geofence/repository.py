from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Fence


class FenceRepository(Protocol):
    """Branch fences. The global fallback fence lives in the settings store."""

    def list_active_fences(self) -> Sequence[Fence]:
        raise NotImplementedError

    def get_fence(self, fence_id: str) -> Optional[Fence]:
        raise NotImplementedError
