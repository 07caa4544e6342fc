# sudoku_render.py
"""
Rendu matplotlib d'une grille et de sa solution.

- save_solution_pdf(...) : PDF de deux pages (énoncé puis solution).
- save_solution_png(...) : une image avec énoncé et solution côte à côte.

Dans la solution, les indices de l'énoncé restent noirs et les valeurs
trouvées par le solveur sont en rouge (gras).
"""

from __future__ import annotations
from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from sudoku_core import Grid, check_grid_shape

TRIM_W_DEFAULT = 6.0
TRIM_H_DEFAULT = 9.0

DEFAULT_GIVEN_COLOR = "black"
DEFAULT_ADDED_COLOR = "red"

BLOCK_SHADE_COLOR = "#e9e9e9"
BLOCK_SHADE_ALPHA = 1.0


# ---------- Dessin d'une grille ----------

def draw_sudoku_at(
    ax,
    grid: Grid,
    left: float,
    bottom: float,
    size: float,
    puzzle_grid: Grid | None = None,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
):
    """
    Dessine `grid` dans le carré (left, bottom, size) de `ax`.
    Si `puzzle_grid` est fourni, les cases vides de l'énoncé sont
    considérées comme ajoutées et prennent `added_color`.
    """
    cell = size / 9.0
    block = size / 3.0

    # --- Fond alterné par bloc 3x3 ---
    for br in range(3):
        for bc in range(3):
            if (br + bc) % 2 == 0:
                ax.add_patch(
                    plt.Rectangle(
                        (left + bc * block, bottom + br * block),
                        block,
                        block,
                        facecolor=BLOCK_SHADE_COLOR,
                        edgecolor="none",
                        alpha=BLOCK_SHADE_ALPHA,
                        zorder=0,
                    )
                )

    ax.add_patch(
        plt.Rectangle((left, bottom), size, size, fill=False, linewidth=2.5, color="k", zorder=3)
    )

    for i in range(1, 9):
        lw = 1.6 if i % 3 == 0 else 0.6
        ax.plot([left + i * cell, left + i * cell], [bottom, bottom + size], linewidth=lw, color="k", zorder=2)
        ax.plot([left, left + size], [bottom + i * cell, bottom + i * cell], linewidth=lw, color="k", zorder=2)

    font_pts = cell * 0.5 * 72

    for r in range(9):
        for c in range(9):
            v = grid[r][c]
            if not v:
                continue
            x = left + c * cell + cell / 2
            y = bottom + (8 - r) * cell + cell * 0.47

            if puzzle_grid is not None and puzzle_grid[r][c] == 0:
                color, weight = added_color, "bold"
            else:
                color, weight = given_color, "normal"

            ax.text(
                x,
                y,
                str(v),
                ha="center",
                va="center",
                fontsize=font_pts,
                fontweight=weight,
                color=color,
                zorder=4,
            )


def _blank_page(trim_w: float, trim_h: float):
    plt.rcParams["font.family"] = "DejaVu Sans"
    fig = plt.figure(figsize=(trim_w, trim_h))
    ax = plt.gca()
    ax.set_xlim(0, trim_w)
    ax.set_ylim(0, trim_h)
    ax.axis("off")
    return fig, ax


def render_grid_figure(
    grid: Grid,
    title: str,
    puzzle_grid: Optional[Grid] = None,
    trim_w: float = TRIM_W_DEFAULT,
    trim_h: float = TRIM_H_DEFAULT,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
):
    """Une page avec une seule grille centrée et un titre."""
    check_grid_shape(grid)
    fig, ax = _blank_page(trim_w, trim_h)

    margin = 0.5
    size = min(trim_w, trim_h) - 2 * margin
    left = (trim_w - size) / 2
    bottom = (trim_h - size) / 2

    draw_sudoku_at(
        ax,
        grid,
        left,
        bottom,
        size,
        puzzle_grid=puzzle_grid,
        given_color=given_color,
        added_color=added_color,
    )

    ax.text(
        trim_w / 2,
        trim_h - 0.3,
        title,
        ha="center",
        va="top",
        fontsize=12,
        fontweight="bold",
    )
    return fig


# ---------- Export ----------

def save_solution_pdf(
    output_path: str,
    puzzle: Grid,
    solution: Grid,
    title: str = "Sudoku",
    trim_w: float = TRIM_W_DEFAULT,
    trim_h: float = TRIM_H_DEFAULT,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
) -> str:
    with PdfPages(output_path) as pdf:
        fig = render_grid_figure(puzzle, title, trim_w=trim_w, trim_h=trim_h, given_color=given_color)
        pdf.savefig(fig, bbox_inches="tight", dpi=300)
        plt.close(fig)

        fig = render_grid_figure(
            solution,
            f"{title} — Solution",
            puzzle_grid=puzzle,
            trim_w=trim_w,
            trim_h=trim_h,
            given_color=given_color,
            added_color=added_color,
        )
        pdf.savefig(fig, bbox_inches="tight", dpi=300)
        plt.close(fig)
    return output_path


def save_solution_png(
    output_path: str,
    puzzle: Grid,
    solution: Grid,
    given_color: str = DEFAULT_GIVEN_COLOR,
    added_color: str = DEFAULT_ADDED_COLOR,
    dpi: int = 150,
) -> str:
    check_grid_shape(puzzle)
    check_grid_shape(solution)
    fig, ax = _blank_page(10.0, 5.0)

    size = 4.4
    draw_sudoku_at(ax, puzzle, 0.3, 0.3, size, given_color=given_color)
    draw_sudoku_at(
        ax,
        solution,
        5.3,
        0.3,
        size,
        puzzle_grid=puzzle,
        given_color=given_color,
        added_color=added_color,
    )

    fig.savefig(output_path, bbox_inches="tight", dpi=dpi)
    plt.close(fig)
    return output_path
