from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Type

from othello.engine.base_engine import BaseEngine
from othello.engine.greedy_engine import GreedyEngine
from othello.engine.trivial_engine import RandomEngine


@dataclass(frozen=True)
class EngineEntry:
    cls: Type[BaseEngine]
    label: str
    description: str


ENGINE_REGISTRY: Dict[str, EngineEntry] = {
    "greedy": EngineEntry(
        cls=GreedyEngine,
        label="Greedy",
        description="Takes the move with the most flips, ties broken at random.",
    ),
    "random": EngineEntry(
        cls=RandomEngine,
        label="Random",
        description="Random legal move generator useful for debugging.",
    ),
}


def get_engine_choices() -> Dict[str, Type[BaseEngine]]:
    """Return mapping of engine key to class."""
    return {name: entry.cls for name, entry in ENGINE_REGISTRY.items()}


def build_engine_instance(
    name: str,
    board_size: int,
    rng_seed: int | None = None,
    **engine_options: Any,
) -> BaseEngine:
    entry = ENGINE_REGISTRY.get(name)
    if not entry:
        raise ValueError(f"Unknown engine '{name}'")

    kwargs: Dict[str, Any] = {"board_size": board_size, "rng_seed": rng_seed}
    if engine_options:
        kwargs.update(engine_options)
    return entry.cls(**kwargs)
