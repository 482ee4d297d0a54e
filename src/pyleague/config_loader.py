"""Persist and load scoring weight profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from pyleague.config import DEFAULT_SCORING_WEIGHTS
from pyleague.models import ScoringRule, StatCategory


@dataclass
class ScoringProfile:
    weights: Dict[str, float]

    @classmethod
    def default(cls) -> "ScoringProfile":
        return cls(weights={category.value: weight for category, weight in DEFAULT_SCORING_WEIGHTS.items()})

    @classmethod
    def load(cls, path: Path) -> "ScoringProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        weights = {str(key): float(value) for key, value in data.get("weights", {}).items()}
        return cls(weights=weights)

    def save(self, path: Path) -> None:
        payload = {"weights": self.weights}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_rules(self) -> list[ScoringRule]:
        """Scoring rules for the known categories; unknown keys are dropped."""

        known = {category.value for category in StatCategory}
        return [
            ScoringRule(category=StatCategory(key), weight=value)
            for key, value in self.weights.items()
            if key in known
        ]
