from enum import IntEnum
from typing import Dict, Optional


class DagAlgo(IntEnum):
    ETHASH = 0
    ETCHASH = 1
    UBQHASH = 2
    ETHASHB3 = 3


class AlgorithmTable:
    """Tabela nome -> código de algoritmo DAG. `resolve` devolve None se não conhecer o nome."""

    def __init__(self, extra: Optional[Dict[str, int]] = None):
        self._codes: Dict[str, int] = {a.name.lower(): int(a) for a in DagAlgo}
        if extra:
            self._codes.update({k.lower(): int(v) for k, v in extra.items()})

    def resolve(self, name: str) -> Optional[int]:
        return self._codes.get(name.lower())

    def name_of(self, code: int) -> Optional[str]:
        return next((n for n, c in self._codes.items() if c == code), None)
