"""JSON formatter for Coupling Insight."""

import json

from ..pipeline import PipelineResult
from .base import BaseFormatter
from .dendrogram import dendrogram_to_dict


class JsonFormatter(BaseFormatter):
    """Render a full analysis result as JSON."""

    def render(self, result: PipelineResult) -> None:
        print(self.format(result))

    def format(self, result: PipelineResult) -> str:
        precision = result.config.weight_precision
        coupling = result.coupling
        extraction = result.extraction
        data = {
            "units": list(result.units),
            "total_calls": coupling.total,
            "weights": [
                {"unit_a": pair.a, "unit_b": pair.b, "weight": round(weight, precision)}
                for pair, weight in coupling.pairs_by_weight()
            ],
            "dendrogram": (
                dendrogram_to_dict(result.root, precision) if result.root is not None else None
            ),
            "modules": [
                {
                    "members": module.sorted_members(),
                    "average_coupling": round(module.average_coupling, precision),
                }
                for module in extraction.modules
            ],
            "threshold": extraction.threshold,
            "max_modules": extraction.max_modules,
            "repaired": extraction.repaired,
            "repair_merges": extraction.repair_merges,
        }
        return json.dumps(data, indent=2)
