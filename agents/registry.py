from __future__ import annotations

import importlib
from typing import Callable, Dict, List, Type, TypeVar

from .base_agent import BaseAgent

AGENT_REGISTRY: Dict[str, Type[BaseAgent]] = {}
AgentType = TypeVar("AgentType", bound=Type[BaseAgent])


def register_agent(key: str, cls: AgentType | None = None) -> AgentType | Callable[[AgentType], AgentType]:
    """
    Make an agent class available under ``key`` ("greedy", "mcts", ...).

    Works as a decorator (`@register_agent("greedy")`) or as a plain call
    (`register_agent("greedy", GreedyAgent)`).

    Raises:
        ValueError: if ``key`` is already taken by a different class
    """
    def decorator(target_cls: AgentType) -> AgentType:
        existing = AGENT_REGISTRY.get(key)
        if existing is not None and existing is not target_cls:
            raise ValueError(f"Agent key '{key}' already registered to {existing.__name__}")
        AGENT_REGISTRY[key] = target_cls
        return target_cls

    return decorator if cls is None else decorator(cls)


def registered_keys() -> List[str]:
    return sorted(AGENT_REGISTRY)


def resolve_agent_class(type_ref: str) -> Type[BaseAgent]:
    """
    Look up an agent class by registry key, or import it from "pkg.module.Class".
    """
    cls = AGENT_REGISTRY.get(type_ref)
    if cls is not None:
        return cls

    module_name, _, class_name = type_ref.rpartition(".")
    if not module_name:
        raise ValueError(
            f"Unknown agent type '{type_ref}'; expected one of {registered_keys()} "
            "or an import path like 'pkg.module.Class'."
        )

    cls = getattr(importlib.import_module(module_name), class_name)
    if not isinstance(cls, type) or not issubclass(cls, BaseAgent):
        raise TypeError(f"{type_ref} is not a BaseAgent subclass")
    return cls
