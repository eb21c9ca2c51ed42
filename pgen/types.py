from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class SelectionPolicy(enum.Enum):
    """Политика выбора альтернативы в группе {...|...}."""
    RANDOM = "random"
    SHORTEST = "shortest"
    LONGEST = "longest"
    LEAST_LIKELY = "least-likely"
    MOST_LIKELY = "most-likely"

    @property
    def is_deterministic(self) -> bool:
        return self is not SelectionPolicy.RANDOM

    @classmethod
    def parse(cls, value: Optional[str]) -> "SelectionPolicy":
        """
        Принимает значение из CLI/YAML: 'most-likely', 'most_likely', 'MOST_LIKELY'.
        None означает случайный выбор.
        """
        if value is None:
            return cls.RANDOM
        norm = str(value).strip().lower().replace("_", "-")
        for policy in cls:
            if policy.value == norm:
                return policy
        choices = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown choice guidance '{value}'. Expected one of: {choices}")


# Значения --choice-guidance (random задаётся отсутствием флага)
GUIDANCE_CHOICES = [p.value for p in SelectionPolicy if p.is_deterministic]


# -----------------------------
@dataclass(frozen=True)
class RunOptions:
    num: int = 1
    out: Path = Path("prompts.txt")
    verbose: bool = False
    dry_run: bool = False
    policy: SelectionPolicy = SelectionPolicy.RANDOM
    lenient: bool = False  # --ignore-invalid-weight-literals
    seed: Optional[int] = None


__all__ = ["SelectionPolicy", "GUIDANCE_CHOICES", "RunOptions"]
