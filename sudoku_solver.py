# sudoku_solver.py
"""
Moteur de résolution :
- propagation par singletons nus (naked singles) jusqu'au point fixe
- choix de la case à deviner (moins de candidats)
- pile explicite de grilles suspendues + registre des essais
- boucle à états : propagation -> (résolu | contradiction | branchement)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from sudoku_core import (
    Board,
    Grid,
    Pos,
    InternalInvariantViolation,
    cell_candidates,
    grid_conflicts,
    is_complete_solution,
)


class Outcome(Enum):
    SOLVED = "solved"
    CONTRADICTION = "contradiction"
    STALLED = "stalled"


class SolverState(Enum):
    PROPAGATING = "propagating"
    BRANCHING = "branching"
    BACKTRACKING = "backtracking"
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"


TERMINAL_STATES = (SolverState.SOLVED, SolverState.UNSOLVABLE)


# ====================================================
#   PROPAGATION — SINGLETONS NUS
# ====================================================

@dataclass
class PropagationResult:
    outcome: Outcome
    placements: int = 0
    passes: int = 0


def propagation_pass(board: Board) -> Tuple[int, bool]:
    """
    Une passe en ordre ligne par ligne.
    Retourne (placements, contradiction). S'arrête dès qu'une case n'a
    plus aucun candidat.
    """
    board.candidates = {}
    placed = 0
    for (r, c) in board.empty_cells():
        opts = cell_candidates(board.cells, r, c)
        if not opts:
            return placed, True
        if len(opts) == 1:
            (v,) = tuple(opts)
            board.cells[r][c] = v
            placed += 1
        else:
            board.candidates[(r, c)] = opts
    return placed, False


def propagate(board: Board) -> PropagationResult:
    """
    Applique des passes tant qu'elles placent quelque chose.
    Après STALLED, board.candidates contient les ensembles de la dernière passe.
    """
    result = PropagationResult(Outcome.STALLED)
    while True:
        placed, contradiction = propagation_pass(board)
        result.passes += 1
        result.placements += placed
        if contradiction:
            result.outcome = Outcome.CONTRADICTION
            return result
        if board.count_empty() == 0:
            result.outcome = Outcome.SOLVED
            return result
        if placed == 0:
            return result


# ====================================================
#   CHOIX DU BRANCHEMENT
# ====================================================

def select_branch_cell(board: Board) -> Pos:
    """Case vide avec le moins de candidats en cache ; égalité -> ordre ligne par ligne."""
    best: Optional[Pos] = None
    best_n = 10
    for pos in board.empty_cells():
        opts = board.candidates.get(pos)
        if not opts:
            continue
        if len(opts) < best_n:
            best, best_n = pos, len(opts)
    if best is None:
        raise InternalInvariantViolation("Aucune case éligible pour un branchement.")
    return best


def next_untried_value(board: Board, pos: Pos) -> Optional[int]:
    r, c = pos
    for v in sorted(board.candidates[pos]):
        if not board.has_tried(r, c, v):
            return v
    return None


# ====================================================
#   PILE & CONTEXTE
# ====================================================

class SearchStack:
    """Pile LIFO des grilles suspendues, une par essai en cours."""

    def __init__(self):
        self._boards: List[Board] = []
        self.max_depth = 0

    def push(self, board: Board) -> None:
        self._boards.append(board)
        self.max_depth = max(self.max_depth, len(self._boards))

    def pop(self) -> Board:
        return self._boards.pop()

    def __iter__(self):
        # du fond vers le sommet
        return iter(self._boards)

    def __len__(self) -> int:
        return len(self._boards)

    def __bool__(self) -> bool:
        return bool(self._boards)


@dataclass
class SolverContext:
    current: Board
    stack: SearchStack = field(default_factory=SearchStack)
    verbose: bool = False
    guesses: int = 0
    backtracks: int = 0
    passes: int = 0
    placements: int = 0


@dataclass
class SolveResult:
    solved: bool
    state: SolverState
    grid: Optional[Grid]
    guesses: int = 0
    backtracks: int = 0
    max_depth: int = 0
    passes: int = 0
    placements: int = 0


# ====================================================
#   BOUCLE À ÉTATS
# ====================================================

def _branch(ctx: SolverContext) -> SolverState:
    parent = ctx.current
    pos = select_branch_cell(parent)
    value = next_untried_value(parent, pos)
    if value is None:
        # tous les candidats de cette case ont déjà échoué
        return SolverState.BACKTRACKING

    r, c = pos
    parent.record_guess(r, c, value)
    if ctx.verbose:
        print(
            f"Essai : ({r + 1},{c + 1}) valeur {value} : "
            f"{len(parent.candidates[pos])} option(s)"
        )
    child = parent.clone()
    child.cells[r][c] = value
    ctx.stack.push(parent)
    ctx.current = child
    ctx.guesses += 1
    return SolverState.PROPAGATING


def _backtrack(ctx: SolverContext) -> SolverState:
    if not ctx.stack:
        return SolverState.UNSOLVABLE
    ctx.current = ctx.stack.pop()
    ctx.backtracks += 1
    return SolverState.PROPAGATING


def step(ctx: SolverContext, state: SolverState) -> SolverState:
    """Une transition de la machine à états."""
    if state == SolverState.PROPAGATING:
        res = propagate(ctx.current)
        ctx.passes += res.passes
        ctx.placements += res.placements
        if res.outcome == Outcome.SOLVED:
            if not is_complete_solution(ctx.current.cells):
                raise InternalInvariantViolation("Grille complète mais invalide.")
            return SolverState.SOLVED
        if res.outcome == Outcome.CONTRADICTION:
            return SolverState.BACKTRACKING
        return SolverState.BRANCHING

    if state == SolverState.BRANCHING:
        return _branch(ctx)

    if state == SolverState.BACKTRACKING:
        return _backtrack(ctx)

    return state


def solve(grid: Grid, verbose: bool = False) -> SolveResult:
    """
    Résout une grille 9x9 (0 = vide). La grille d'entrée n'est pas modifiée.
    Échec -> SolveResult(solved=False, state=UNSOLVABLE, grid=None).
    """
    ctx = SolverContext(current=Board(grid), verbose=verbose)

    state = SolverState.PROPAGATING
    if grid_conflicts(ctx.current.cells):
        # doublon dans l'énoncé : la propagation ne le verrait pas
        state = SolverState.BACKTRACKING

    while state not in TERMINAL_STATES:
        state = step(ctx, state)

    solved = state == SolverState.SOLVED
    return SolveResult(
        solved=solved,
        state=state,
        grid=ctx.current.to_grid() if solved else None,
        guesses=ctx.guesses,
        backtracks=ctx.backtracks,
        max_depth=ctx.stack.max_depth,
        passes=ctx.passes,
        placements=ctx.placements,
    )
