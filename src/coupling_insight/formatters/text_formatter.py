"""Plain-text report: dendrogram listing followed by the module list."""

from ..pipeline import PipelineResult
from .base import BaseFormatter
from .dendrogram import render_dendrogram_text


class TextFormatter(BaseFormatter):
    """Render the dendrogram and modules as plain text, without styling."""

    def render(self, result: PipelineResult) -> None:
        print(self.format(result), end="")

    def format(self, result: PipelineResult) -> str:
        extraction = result.extraction
        lines = ["Dendrogram (average linkage)"]
        dendrogram = render_dendrogram_text(result.root)
        lines.extend(dendrogram.splitlines() or ["(no units)"])

        lines.append("")
        lines.append(f"Modules (CP={extraction.threshold:g}, max={extraction.max_modules})")
        for i, module in enumerate(extraction, start=1):
            members = ", ".join(module.sorted_members())
            lines.append(
                f"  Module {i}: {{{members}}}  "
                f"avg={module.average_coupling:{result.config.weight_format}}  "
                f"(pairs={module.pair_count})"
            )

        if extraction.repaired:
            lines.append("")
            lines.append(
                f"Module budget exceeded: {extraction.repair_merges} smallest-module merge(s) applied"
            )
        return "\n".join(lines) + "\n"
