# sudoku_gui.py
"""
Interface CustomTkinter pour saisir ou charger une grille,
la résoudre et exporter énoncé + solution en PDF.
"""

from __future__ import annotations
import os

import customtkinter as ctk
from tkinter import filedialog, messagebox

from sudoku_core import Grid, check_grid_shape
from sudoku_io import load_grid
from sudoku_solver import solve
from sudoku_render import save_solution_pdf, DEFAULT_GIVEN_COLOR, DEFAULT_ADDED_COLOR

# Config par défaut
DEFAULT_PDF_NAME = "sudoku_solution.pdf"
CELL_WIDTH = 36
GIVEN_TEXT_COLOR = ("black", "white")
ADDED_TEXT_COLOR = DEFAULT_ADDED_COLOR


def read_cell_vars(cell_vars) -> Grid:
    """Convertit les 81 StringVar en grille (vide ou '0' -> 0)."""
    grid: Grid = []
    for r in range(9):
        row = []
        for c in range(9):
            s = cell_vars[r][c].get().strip()
            if not s:
                row.append(0)
                continue
            if len(s) != 1 or not s.isdigit():
                raise ValueError(f"Case ({r + 1},{c + 1}) : « {s} » n'est pas un chiffre.")
            row.append(int(s))
        grid.append(row)
    check_grid_shape(grid)
    return grid


def launch_gui():
    ctk.set_appearance_mode("system")
    ctk.set_default_color_theme("blue")

    app = ctk.CTk()
    app.title("Solveur de Sudoku")

    cell_vars = [[ctk.StringVar(value="") for _c in range(9)] for _r in range(9)]
    cell_entries = [[None] * 9 for _ in range(9)]
    status_var = ctk.StringVar(value="Prêt.")

    # énoncé et solution courants (pour l'export)
    state = {"puzzle": None, "solution": None}

    app.grid_columnconfigure(0, weight=1)

    # ----- Grille -----
    frame_grid = ctk.CTkFrame(app)
    frame_grid.grid(row=0, column=0, padx=10, pady=10)

    for r in range(9):
        for c in range(9):
            entry = ctk.CTkEntry(
                frame_grid,
                width=CELL_WIDTH,
                justify="center",
                textvariable=cell_vars[r][c],
                font=ctk.CTkFont(size=16),
            )
            # espace supplémentaire entre les blocs 3x3
            padx = (6 if c % 3 == 0 and c else 1, 1)
            pady = (6 if r % 3 == 0 and r else 1, 1)
            entry.grid(row=r, column=c, padx=padx, pady=pady)
            cell_entries[r][c] = entry

    # ----- Bas -----
    frame_bottom = ctk.CTkFrame(app)
    frame_bottom.grid(row=1, column=0, padx=10, pady=(0, 10), sticky="ew")
    frame_bottom.grid_columnconfigure(0, weight=1)

    status_label = ctk.CTkLabel(frame_bottom, textvariable=status_var, anchor="w")
    status_label.grid(row=0, column=0, padx=10, pady=5, sticky="w")

    # ==========================
    #   ACTIONS
    # ==========================

    def show_grid(grid: Grid, puzzle: Grid | None = None):
        for r in range(9):
            for c in range(9):
                v = grid[r][c]
                cell_vars[r][c].set(str(v) if v else "")
                added = puzzle is not None and puzzle[r][c] == 0
                cell_entries[r][c].configure(
                    text_color=ADDED_TEXT_COLOR if added else GIVEN_TEXT_COLOR
                )

    def on_open():
        path = filedialog.askopenfilename(
            title="Ouvrir une grille",
            filetypes=[("Texte", "*.txt"), ("Tous les fichiers", "*.*")],
        )
        if not path:
            return
        try:
            grid = load_grid(path)
        except (OSError, ValueError) as e:
            status_var.set("❌ Erreur de lecture.")
            messagebox.showerror("Erreur", f"Impossible de lire la grille : {e}")
            return
        state["puzzle"], state["solution"] = None, None
        show_grid(grid)
        status_var.set(f"Grille chargée : {os.path.basename(path)}")

    def on_solve():
        try:
            puzzle = read_cell_vars(cell_vars)
        except ValueError as e:
            status_var.set("❌ Grille invalide.")
            messagebox.showerror("Erreur", str(e))
            return

        status_var.set("Résolution en cours...")
        app.update_idletasks()

        result = solve(puzzle)
        if not result.solved:
            state["puzzle"], state["solution"] = None, None
            status_var.set("❌ Aucune solution pour cette grille.")
            return

        state["puzzle"], state["solution"] = puzzle, result.grid
        show_grid(result.grid, puzzle=puzzle)
        status_var.set(
            f"✅ Résolu ({result.guesses} essai(s), {result.backtracks} retour(s) arrière)."
        )

    def on_clear():
        state["puzzle"], state["solution"] = None, None
        show_grid([[0] * 9 for _ in range(9)])
        status_var.set("Prêt.")

    def on_export():
        if state["solution"] is None:
            messagebox.showinfo("Export", "Résous d'abord la grille.")
            return
        path = filedialog.asksaveasfilename(
            title="Exporter en PDF",
            defaultextension=".pdf",
            initialfile=DEFAULT_PDF_NAME,
            filetypes=[("PDF", "*.pdf")],
        )
        if not path:
            return
        try:
            save_solution_pdf(
                path,
                state["puzzle"],
                state["solution"],
                given_color=DEFAULT_GIVEN_COLOR,
                added_color=DEFAULT_ADDED_COLOR,
            )
        except OSError as e:
            status_var.set("❌ Erreur lors de l'export.")
            messagebox.showerror("Erreur", f"Une erreur est survenue : {e}")
            return
        status_var.set(f"✅ PDF généré : {path}")
        messagebox.showinfo("Terminé", f"PDF généré :\n{os.path.abspath(path)}")

    buttons = [
        ("Ouvrir…", on_open),
        ("Résoudre", on_solve),
        ("Effacer", on_clear),
        ("Exporter PDF…", on_export),
    ]
    for i, (label, command) in enumerate(buttons, start=1):
        ctk.CTkButton(frame_bottom, text=label, width=110, command=command).grid(
            row=0, column=i, padx=5, pady=5, sticky="e"
        )

    app.mainloop()


if __name__ == "__main__":
    launch_gui()
