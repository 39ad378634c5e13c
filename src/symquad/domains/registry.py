from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from symquad.domains.base import BaseDomain

_REGISTRY: dict[str, type[BaseDomain]] = {}


def register_domain(cls: type[BaseDomain]) -> type[BaseDomain]:
    """Class decorator to register a domain by its name."""
    key = getattr(cls, "name", None)
    if not key:
        raise ValueError(f"{cls.__name__} must define name")
    _REGISTRY[key] = cls
    return cls


def create_domain(key: str, *args: Any, **kwargs: Any) -> BaseDomain:
    cls = _REGISTRY.get(key)
    if not cls:
        raise KeyError(f"No domain registered for key '{key}'")
    return cls(*args, **kwargs)


def list_domains() -> list[str]:
    return list(_REGISTRY.keys())
