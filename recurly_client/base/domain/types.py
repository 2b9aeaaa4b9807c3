# (c) Nelen & Schuurmans

from typing import Any

__all__ = ["Json"]


Json = dict[str, Any]
