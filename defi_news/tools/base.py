from __future__ import annotations

from typing import Protocol
from typing import Any


class BaseTool(Protocol):

    async def execute(self, *args: Any, **kwargs: Any) -> Any: ...
