"""Static chart rendering of a computed family layout."""

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.lines import Line2D
from matplotlib.patches import Patch, Rectangle

from graph import RelationshipGraph
from models import UNKNOWN, Layout, LayoutConfig, Position


BOX_FILL = "#ffffff"
BOX_FILL_FEMALE = "#fff5f8"
BOX_FILL_FOCUS = "#fffcdc"
BOX_BORDER = "#b4b4b4"
TEXT_NAME = "#1e1e1e"
TEXT_ROLE = "#646464"
LINE_CHILD = "#b4b4b4"
LINE_SPOUSE = "#dc5050"

# Distance the child connector drops below the spouse line before branching
CHILD_DROP = 30


def _orthogonal(ax, x1: float, y1: float, x2: float, y2: float):
    mid_y = (y1 + y2) / 2
    ax.plot([x1, x1, x2, x2], [y1, mid_y, mid_y, y2], color=LINE_CHILD, linewidth=2, zorder=1)


def _draw_connectors(ax, graph: RelationshipGraph, layout: Layout, config: LayoutConfig):
    half_w = config.box_width / 2
    half_h = config.box_height / 2
    drawn_pairs: set[frozenset[int]] = set()

    for pid, pos in layout.positions.items():
        y_mid = pos.y + half_h
        spouses = graph.spouses_of(pid)

        # Spouse lines, and children of each union from the union midpoint
        for sid in spouses:
            pair = frozenset((pid, sid))
            spouse_pos = layout.position(sid)
            if spouse_pos is None or pair in drawn_pairs:
                continue
            drawn_pairs.add(pair)

            left, right = sorted((pos, spouse_pos))
            ex = graph.is_ex_spouse(pid, sid)
            ax.plot(
                [left.x + config.box_width, right.x],
                [y_mid, y_mid],
                color=LINE_SPOUSE,
                linestyle=":" if ex else "-",
                linewidth=1 if ex else 2,
                zorder=1,
            )

            mid_x = (left.x + config.box_width + right.x) / 2
            kids = [
                k
                for k in set(graph.children_of_parent(pid)) & set(graph.children_of_parent(sid))
                if layout.is_placed(k)
            ]
            if kids:
                ax.plot([mid_x, mid_x], [y_mid, y_mid + CHILD_DROP], color=LINE_CHILD, linewidth=2, zorder=1)
            for k in kids:
                kid_pos = layout.positions[k]
                _orthogonal(ax, mid_x, y_mid + CHILD_DROP, kid_pos.x + half_w, kid_pos.y)

        # Children whose other parent is unknown or not a spouse
        for k in graph.children_of_parent(pid):
            kid = graph.get(k)
            other = kid.mother_id if kid.father_id == pid else kid.father_id
            if (other != UNKNOWN and other in spouses) or not layout.is_placed(k):
                continue
            kid_pos = layout.positions[k]
            _orthogonal(ax, pos.x + half_w, y_mid + CHILD_DROP, kid_pos.x + half_w, kid_pos.y)


def is_focus(person, focus: str | None) -> bool:
    """Match the focus person by id, or by a case-insensitive name fragment."""
    if not focus:
        return False
    if focus.strip().isdigit():
        return person.id == int(focus)
    return focus.strip().lower() in person.name.lower()


def box_fill(person, focus: str | None = None) -> str:
    if is_focus(person, focus):
        return BOX_FILL_FOCUS
    return BOX_FILL_FEMALE if person.is_female else BOX_FILL


def legend_handles() -> list:
    """Legend entries for box fills and connector styles."""
    return [
        Patch(facecolor=BOX_FILL, edgecolor=BOX_BORDER, label="Male"),
        Patch(facecolor=BOX_FILL_FEMALE, edgecolor=BOX_BORDER, label="Female"),
        Patch(facecolor=BOX_FILL_FOCUS, edgecolor=BOX_BORDER, label="Myself"),
        Line2D([], [], color=LINE_SPOUSE, linewidth=2, label="Spouse"),
        Line2D([], [], color=LINE_SPOUSE, linewidth=1, linestyle=":", label="Ex-Spouse"),
        Line2D([], [], color=LINE_CHILD, linewidth=2, label="Child"),
    ]


def _draw_box(ax, person, pos: Position, config: LayoutConfig, focus: str | None):
    fill = box_fill(person, focus)
    ax.add_patch(
        Rectangle(
            (pos.x, pos.y),
            config.box_width,
            config.box_height,
            facecolor=fill,
            edgecolor=BOX_BORDER,
            zorder=2,
        )
    )
    cx = pos.x + config.box_width / 2
    ax.text(
        cx,
        pos.y + config.box_height * 0.38,
        person.name,
        ha="center",
        va="center",
        fontsize=9,
        fontweight="bold",
        color=TEXT_NAME,
        zorder=3,
    )
    if person.role:
        ax.text(
            cx,
            pos.y + config.box_height * 0.72,
            person.role,
            ha="center",
            va="center",
            fontsize=8,
            color=TEXT_ROLE,
            zorder=3,
        )


def plot_layout(
    graph: RelationshipGraph,
    layout: Layout,
    config: LayoutConfig | None = None,
    output_path: Path | None = None,
    focus: str | None = None,
):
    """
    Draw the laid out family chart.

    Boxes are drawn at the computed positions, spouses are joined by a solid line (dotted
    for ex-spouses) and children hang from their union's midpoint, or from their single
    parent when the other parent is unknown.

    Args:
        graph: The relationship graph the layout was computed from
        layout: Result of compute_layout
        config: The LayoutConfig used for the layout
        output_path: Path to save the output image (png, svg or pdf). If None, displays
            interactively.
        focus: Id or name fragment of the person to highlight ("Myself" in the legend)
    """
    config = config or LayoutConfig()

    # One inch per 100 layout pixels
    fig, ax = plt.subplots(figsize=(max(layout.width, 100) / 100, max(layout.height, 100) / 100))
    ax.set_xlim(0, layout.width)
    ax.set_ylim(layout.height, 0)  # y grows downwards, as in the layout
    ax.set_aspect("equal")
    ax.axis("off")

    _draw_connectors(ax, graph, layout, config)
    for pid, pos in layout.positions.items():
        _draw_box(ax, graph.get(pid), pos, config, focus)

    ax.legend(handles=legend_handles(), loc="lower left", ncol=2, fontsize=8, title="Legend")
    ax.set_title(f"Family Tree ({len(layout.positions)} people)")

    if output_path:
        # Determine format from extension
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf"):
            ext = "png"

        fig.savefig(output_path, format=ext, dpi=100)
        plt.close(fig)
        print(f"Chart saved to {output_path}")
    else:
        plt.show()
