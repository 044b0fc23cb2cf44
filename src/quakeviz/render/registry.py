from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from quakeviz.render.base import RenderMode

_REGISTRY: dict[str, type[RenderMode]] = {}


def register_mode(cls: type[RenderMode]) -> type[RenderMode]:
    """Class decorator to register a render mode by its KEY."""
    key = getattr(cls, "KEY", None)
    if not key:
        raise ValueError(f"{cls.__name__} must define KEY")
    _REGISTRY[key] = cls
    return cls


def create_mode(key: str, **kwargs) -> RenderMode:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No render mode registered for key '{key}'")
    return cls(**kwargs)


def list_modes() -> list[str]:
    return list(_REGISTRY.keys())
