from __future__ import annotations
from lorecal.core.engine import EngineRegistry
from lorecal.engines.specs import ALL_SPECS
from lorecal.engines.factory import make_engine

def build_registry() -> EngineRegistry:
    engines = {}
    for name, spec in ALL_SPECS.items():
        engines[name] = make_engine(spec)
    return EngineRegistry(engines)
