"""System complex visualization using Matplotlib."""

from pathlib import Path
from typing import Any

import matplotlib.patches as mpatches
import matplotlib.pyplot as plt
import networkx as nx

from ..core.config import get_config
from .generator import SystemComplex
from .phi import PhiBand, classify_phi

# Color scheme for elements and Φ bands
ELEMENT_COLORS = {
    "active": "#2980b9",  # Blue
    "inactive": "#2c3e50",  # Near black
}

BAND_COLORS = {
    PhiBand.HIGH: "#27ae60",  # Green
    PhiBand.MEDIUM: "#e67e22",  # Orange
    PhiBand.LOW: "#c0392b",  # Red
}

MODULE_COLOR = "#8e44ad"  # Purple


class ComplexVisualizer:
    """Visualize a generated system complex."""

    def __init__(
        self,
        system: SystemComplex,
        language_module: bool = False,
        self_model: bool = False,
    ):
        self.system = system
        self.language_module = language_module
        self.self_model = self_model
        self.config = get_config()
        # One drawn edge per connect call, parallel edges included
        self.graph = system.graph.to_networkx(multigraph=True)

    def _get_layout(self) -> dict[str, tuple[float, float]]:
        """Element positions, flipped so row 0 is drawn at the top."""
        return {e.id: (e.position[0], -e.position[1]) for e in self.system.elements}

    def _get_node_colors(self) -> list[str]:
        colors = []
        for node in self.graph.nodes():
            key = "active" if self.graph.nodes[node].get("active") else "inactive"
            colors.append(ELEMENT_COLORS[key])
        return colors

    def phi_band(self) -> PhiBand:
        phi_config = self.config.phi
        return classify_phi(
            self.system.phi,
            high=phi_config.high_threshold,
            medium=phi_config.medium_threshold,
        )

    def _draw_modules(self, ax: Any) -> None:
        """Draw the insulated module annotations in the lower corners."""
        modules = []
        if self.language_module:
            modules.append(("Language Module", 0.02, "left"))
        if self.self_model:
            modules.append(("Self-Model Module", 0.98, "right"))

        for label, x, align in modules:
            ax.text(
                x,
                0.02,
                label,
                transform=ax.transAxes,
                ha=align,
                va="bottom",
                fontsize=self.config.display.font_size + 1,
                bbox={
                    "boxstyle": "round,pad=0.6",
                    "facecolor": MODULE_COLOR,
                    "alpha": 0.2,
                    "edgecolor": MODULE_COLOR,
                    "linestyle": "--",
                    "linewidth": 2,
                },
            )

    def draw(
        self,
        output_file: str | None = None,
        show: bool = False,
        title: str | None = None,
    ) -> None:
        """
        Draw the system complex.

        Args:
            output_file: Path to save the image
            show: Display interactive plot
            title: Plot title (defaults to the architecture name)
        """
        display = self.config.display
        band = self.phi_band()
        fig, ax = plt.subplots(figsize=display.figure_size)

        pos = self._get_layout()

        if self.graph.edges():
            nx.draw_networkx_edges(
                self.graph,
                pos,
                ax=ax,
                width=1.5,
                alpha=0.5,
                edge_color="#7f8c8d",
            )

        nx.draw_networkx_nodes(
            self.graph,
            pos,
            ax=ax,
            node_color=self._get_node_colors(),
            node_size=display.node_size,
            edgecolors="white",
            linewidths=2,
        )

        if display.show_labels:
            labels = {node: str(data["index"]) for node, data in self.graph.nodes(data=True)}
            nx.draw_networkx_labels(
                self.graph,
                pos,
                labels,
                ax=ax,
                font_size=display.font_size,
                font_color="white",
            )

        self._draw_modules(ax)

        legend_patches = [
            mpatches.Patch(color=color, label=f"Φ {b.value}")
            for b, color in BAND_COLORS.items()
        ]
        ax.legend(handles=legend_patches, loc="upper right")

        ax.set_title(title or self.system.architecture.display_name)
        ax.text(
            0.5,
            1.06,
            f"Integrated Information (Φ): {self.system.phi:.1f}",
            transform=ax.transAxes,
            ha="center",
            fontsize=display.font_size + 4,
            fontweight="bold",
            color=BAND_COLORS[band],
        )
        ax.axis("off")
        ax.margins(0.15)

        plt.tight_layout()

        if output_file:
            Path(output_file).parent.mkdir(parents=True, exist_ok=True)
            plt.savefig(output_file, dpi=150, bbox_inches="tight")

        if show:
            plt.show()

        plt.close(fig)

    def to_graphml(self, output_file: str) -> None:
        """Export the system to GraphML format."""
        graph = self.system.graph.to_networkx(multigraph=True)
        graph.graph["architecture"] = self.system.architecture.value
        graph.graph["phi"] = self.system.phi
        Path(output_file).parent.mkdir(parents=True, exist_ok=True)
        nx.write_graphml(graph, output_file)

    def to_json(self) -> dict[str, Any]:
        """Export the system to a node-link JSON-compatible dict."""
        from networkx.readwrite import json_graph

        graph = self.system.graph.to_networkx(multigraph=True)
        graph.graph["architecture"] = self.system.architecture.value
        graph.graph["phi"] = self.system.phi
        result: dict[str, Any] = json_graph.node_link_data(graph)
        return result


def visualize_complex(
    system: SystemComplex,
    output_file: str | None = None,
    show: bool = False,
    language_module: bool = False,
    self_model: bool = False,
    title: str | None = None,
) -> None:
    """
    Visualize a system complex.

    Args:
        system: Generated SystemComplex
        output_file: Path to save the image
        show: Display interactive plot
        language_module: Annotate with the language module
        self_model: Annotate with the self-model module
        title: Plot title
    """
    visualizer = ComplexVisualizer(system, language_module=language_module, self_model=self_model)
    visualizer.draw(output_file=output_file, show=show, title=title)
