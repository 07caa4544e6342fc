# sudoku_io.py
"""
Lecture d'une grille depuis un fichier texte et affichage console.

Format d'entrée : 81 chiffres '0'..'9' en ordre ligne par ligne
(0 = case vide). Tout autre caractère est ignoré ; la lecture s'arrête
au 81e chiffre.
"""

from typing import Iterable

from sudoku_core import Grid, check_grid_shape

N_CELLS = 81


def parse_grid(text: Iterable[str]) -> Grid:
    digits = []
    for ch in text:
        if "0" <= ch <= "9":
            digits.append(int(ch))
            if len(digits) == N_CELLS:
                break
    if len(digits) < N_CELLS:
        raise ValueError(f"Grille incomplète : {len(digits)} chiffre(s) lu(s) sur {N_CELLS}.")
    return [digits[r * 9 : r * 9 + 9] for r in range(9)]


# Charger une grille depuis un fichier
def load_grid(path: str) -> Grid:
    # octets non UTF-8 remplacés : seuls les chiffres comptent
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return parse_grid(f.read())


def canon_str(grid: Grid) -> str:
    """Chaîne canonique pour une grille (ligne par ligne)."""
    return "".join("".join(str(v) for v in row) for row in grid)


def format_grid(grid: Grid) -> str:
    check_grid_shape(grid)
    lines = []
    for i, row in enumerate(grid):
        if i % 3 == 0 and i != 0:
            lines.append("------+-------+------")
        row_str = ""
        for j, cell in enumerate(row):
            if j % 3 == 0 and j != 0:
                row_str += "| "
            row_str += str(cell if cell != 0 else ".") + " "
        lines.append(row_str.rstrip())
    return "\n".join(lines)
