# sudoku_core.py
"""
Noyau commun du solveur :
- grille 9x9 (Board) avec cache de candidats et registre d'essais
- calcul des candidats d'une case
- UNITS / PEERS
- contrôle de cohérence (doublons dans une unité)
"""

from __future__ import annotations
from typing import List, Tuple, Dict, Set, NamedTuple

Grid = List[List[int]]
Pos = Tuple[int, int]

# ---------- UNITS & PEERS communs ----------

UNITS: List[List[Pos]] = []
PEERS: Dict[Pos, Set[Pos]] = {}

# Lignes
for r in range(9):
    UNITS.append([(r, c) for c in range(9)])
# Colonnes
for c in range(9):
    UNITS.append([(r, c) for r in range(9)])
# Blocs 3x3
for br in range(0, 9, 3):
    for bc in range(0, 9, 3):
        UNITS.append([(br + dr, bc + dc) for dr in range(3) for dc in range(3)])

# Voisins de chaque case
for r in range(9):
    for c in range(9):
        peers = set()
        peers |= {(r, cc) for cc in range(9) if cc != c}
        peers |= {(rr, c) for rr in range(9) if rr != r}
        br, bc = r - r % 3, c - c % 3
        peers |= {
            (br + dr, bc + dc)
            for dr in range(3)
            for dc in range(3)
            if (br + dr, bc + dc) != (r, c)
        }
        PEERS[(r, c)] = peers


class InternalInvariantViolation(RuntimeError):
    """État impossible pour un moteur correct (bug, pas une propriété de la grille)."""


class Guess(NamedTuple):
    row: int
    col: int
    value: int


# ---------- Candidats ----------

def cell_candidates(cells: Grid, r: int, c: int) -> Set[int]:
    """
    Valeurs 1..9 absentes de la ligne r, de la colonne c et du bloc 3x3
    contenant (r, c). La case elle-même n'est jamais comptée.
    """
    used = {cells[i][j] for (i, j) in PEERS[(r, c)]}
    return {v for v in range(1, 10) if v not in used}


# ---------- Cohérence ----------

def grid_conflicts(cells: Grid) -> List[Tuple[int, int]]:
    """
    Liste des doublons parmi les cases remplies : [(index_unite, valeur), ...].
    Index 0..8 = lignes, 9..17 = colonnes, 18..26 = blocs.
    """
    conflicts = []
    for idx, unit in enumerate(UNITS):
        seen = set()
        for (r, c) in unit:
            v = cells[r][c]
            if v == 0:
                continue
            if v in seen:
                conflicts.append((idx, v))
            seen.add(v)
    return conflicts


def is_complete_solution(cells: Grid) -> bool:
    """Chaque ligne, colonne et bloc contient exactement 1..9."""
    full = set(range(1, 10))
    return all({cells[r][c] for (r, c) in unit} == full for unit in UNITS)


def check_grid_shape(grid: Grid) -> None:
    if len(grid) != 9 or any(len(row) != 9 for row in grid):
        raise ValueError("La grille doit faire 9x9.")
    for row in grid:
        for v in row:
            if not isinstance(v, int) or not 0 <= v <= 9:
                raise ValueError(f"Valeur invalide dans la grille : {v!r}")


# ---------- Board ----------

class Board:
    """
    Une grille de travail : valeurs, cache de candidats et registre des
    essais déjà tentés au point de branchement de cette grille.

    Le cache n'est valable que juste après une passe de propagation ;
    il est toujours recalculé, jamais mis à jour au fil de l'eau.
    """

    def __init__(self, cells: Grid):
        check_grid_shape(cells)
        self.cells: Grid = [row[:] for row in cells]
        self.candidates: Dict[Pos, Set[int]] = {}
        self.tried: List[Guess] = []

    def clone(self) -> "Board":
        """Copie des valeurs seulement : cache et registre repartent à vide."""
        return Board(self.cells)

    def empty_cells(self) -> List[Pos]:
        return [(r, c) for r in range(9) for c in range(9) if self.cells[r][c] == 0]

    def count_empty(self) -> int:
        return sum(1 for row in self.cells for v in row if v == 0)

    def has_tried(self, r: int, c: int, value: int) -> bool:
        return Guess(r, c, value) in self.tried

    def record_guess(self, r: int, c: int, value: int) -> Guess:
        guess = Guess(r, c, value)
        if guess in self.tried:
            raise InternalInvariantViolation(f"Essai déjà enregistré : {guess}")
        self.tried.append(guess)
        return guess

    def to_grid(self) -> Grid:
        return [row[:] for row in self.cells]

    def __repr__(self) -> str:
        return f"Board(empty={self.count_empty()}, tried={len(self.tried)})"
