"""CSV weight table: one row per coupled unit pair, heaviest first."""

import csv
import io

from ..graph.coupling import CouplingGraph
from ..pipeline import PipelineResult
from .base import BaseFormatter

HEADER = ["unit_a", "unit_b", "weight"]


def weights_to_csv(coupling: CouplingGraph, precision: int = 4) -> str:
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(HEADER)
    for pair, weight in coupling.pairs_by_weight():
        writer.writerow([pair.a, pair.b, f"{weight:.{precision}f}"])
    return output.getvalue()


class CsvFormatter(BaseFormatter):
    """Render the coupling weights as CSV."""

    def render(self, result: PipelineResult) -> None:
        print(self.format(result), end="")

    def format(self, result: PipelineResult) -> str:
        return weights_to_csv(result.coupling, result.config.weight_precision)
