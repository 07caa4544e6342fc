# tests/test_solver.py
import pytest

from sudoku_core import Board, Guess, InternalInvariantViolation, is_complete_solution
from sudoku_solver import (
    Outcome,
    SearchStack,
    SolverContext,
    SolverState,
    TERMINAL_STATES,
    propagate,
    propagation_pass,
    select_branch_cell,
    solve,
    step,
)


def assert_valid_solution(grid, puzzle):
    assert is_complete_solution(grid)
    for r in range(9):
        for c in range(9):
            if puzzle[r][c]:
                assert grid[r][c] == puzzle[r][c]


# ---------- Propagation ----------

def test_propagate_on_solved_grid_is_idempotent(solved_grid):
    board = Board(solved_grid)
    res = propagate(board)
    assert res.outcome == Outcome.SOLVED
    assert res.placements == 0
    assert res.passes == 1
    assert board.cells == solved_grid


def test_forced_single_first_pass(solved_grid):
    puzzle = [row[:] for row in solved_grid]
    puzzle[0][0] = 0
    board = Board(puzzle)

    placed, contradiction = propagation_pass(board)
    assert (placed, contradiction) == (1, False)
    assert board.cells == solved_grid

    result = solve(puzzle)
    assert result.solved
    assert result.state == SolverState.SOLVED
    assert result.grid == solved_grid
    assert result.guesses == 0
    assert result.max_depth == 0


def test_pass_placements_are_visible_later_in_same_pass(solved_grid):
    # (0,1) a {3, 5} au départ ; seul le 5 placé en (0,0) plus tôt
    # dans la passe la réduit à {3}
    puzzle = [row[:] for row in solved_grid]
    puzzle[0][0] = 0
    puzzle[0][1] = 0
    puzzle[3][1] = 0
    board = Board(puzzle)

    placed, contradiction = propagation_pass(board)
    assert (placed, contradiction) == (3, False)
    assert board.cells == solved_grid


def test_pass_stops_at_first_contradiction(empty_grid):
    empty_grid[0] = [0, 1, 2, 3, 4, 5, 6, 7, 8]
    empty_grid[1][0] = 9
    # (8,8) serait un singleton {1}, mais vient après (0,0)
    empty_grid[8] = [2, 3, 4, 5, 6, 7, 8, 9, 0]
    board = Board(empty_grid)

    placed, contradiction = propagation_pass(board)
    assert (placed, contradiction) == (0, True)
    assert board.cells[8][8] == 0


def test_propagate_reports_contradiction(empty_grid):
    empty_grid[0] = [0, 1, 2, 3, 4, 5, 6, 7, 8]
    empty_grid[1][0] = 9
    res = propagate(Board(empty_grid))
    assert res.outcome == Outcome.CONTRADICTION


def test_propagate_stalls_with_cached_candidates(classic_grid):
    board = Board(classic_grid)
    res = propagate(board)
    assert res.outcome == Outcome.STALLED
    empties = board.empty_cells()
    assert empties
    assert set(board.candidates) == set(empties)
    assert all(len(opts) >= 2 for opts in board.candidates.values())


def test_progress_is_monotonic(classic_grid):
    board = Board(classic_grid)
    before = board.count_empty()
    while True:
        placed, contradiction = propagation_pass(board)
        after = board.count_empty()
        assert not contradiction
        assert after == before - placed
        if placed == 0:
            assert after == before
            break
        assert after < before
        before = after


def test_propagation_never_breaks_filled_cells(classic_grid):
    board = Board(classic_grid)
    propagate(board)
    for r in range(9):
        for c in range(9):
            if classic_grid[r][c]:
                assert board.cells[r][c] == classic_grid[r][c]


# ---------- Choix du branchement ----------

def test_select_branch_cell_fewest_candidates(empty_grid):
    board = Board(empty_grid)
    board.candidates = {(0, 1): {1, 2, 3}, (2, 2): {4, 5}, (3, 3): {6, 7}, (8, 8): {1, 2, 3, 4}}
    assert select_branch_cell(board) == (2, 2)


def test_select_branch_cell_without_cache_is_an_engine_bug(empty_grid):
    with pytest.raises(InternalInvariantViolation):
        select_branch_cell(Board(empty_grid))


# ---------- Pile ----------

def test_search_stack_lifo_and_depth(empty_grid):
    stack = SearchStack()
    a, b = Board(empty_grid), Board(empty_grid)
    assert not stack
    stack.push(a)
    stack.push(b)
    assert len(stack) == 2
    assert stack.pop() is b
    assert stack.pop() is a
    assert not stack
    assert stack.max_depth == 2


# ---------- Transitions ----------

def test_branch_skips_tried_values_and_records_on_parent(empty_grid):
    parent = Board(empty_grid)
    parent.candidates = {(4, 4): {3, 7}}
    parent.record_guess(4, 4, 3)
    ctx = SolverContext(current=parent)

    state = step(ctx, SolverState.BRANCHING)

    assert state == SolverState.PROPAGATING
    child = ctx.current
    assert child is not parent
    assert child.cells[4][4] == 7
    assert child.tried == []
    assert parent.tried == [Guess(4, 4, 3), Guess(4, 4, 7)]
    assert list(ctx.stack) == [parent]
    assert ctx.guesses == 1


def test_branch_exhausted_backtracks(empty_grid):
    board = Board(empty_grid)
    board.candidates = {(0, 0): {1, 2}}
    board.record_guess(0, 0, 1)
    board.record_guess(0, 0, 2)
    ctx = SolverContext(current=board)

    assert step(ctx, SolverState.BRANCHING) == SolverState.BACKTRACKING
    assert step(ctx, SolverState.BACKTRACKING) == SolverState.UNSOLVABLE


def test_backtrack_restores_suspended_board(empty_grid):
    parent = Board(empty_grid)
    ctx = SolverContext(current=Board(empty_grid))
    ctx.stack.push(parent)

    assert step(ctx, SolverState.BACKTRACKING) == SolverState.PROPAGATING
    assert ctx.current is parent
    assert not ctx.stack
    assert ctx.backtracks == 1


def test_terminal_states_are_fixed(empty_grid):
    ctx = SolverContext(current=Board(empty_grid))
    for state in TERMINAL_STATES:
        assert step(ctx, state) == state


# ---------- Résolution complète ----------

def test_classic_puzzle_needs_guessing(classic_grid):
    result = solve(classic_grid)
    assert result.solved
    assert result.state == SolverState.SOLVED
    assert result.guesses >= 1
    assert result.max_depth >= 1
    assert_valid_solution(result.grid, classic_grid)


def test_solve_does_not_mutate_input(classic_grid):
    snapshot = [row[:] for row in classic_grid]
    solve(classic_grid)
    assert classic_grid == snapshot


def test_never_repeats_a_guess(classic_grid):
    ctx = SolverContext(current=Board(classic_grid))
    state = SolverState.PROPAGATING
    seen_branch = False

    while state not in TERMINAL_STATES:
        before = list(ctx.current.tried)
        current = ctx.current
        state_before = state
        state = step(ctx, state)

        if state_before == SolverState.BRANCHING and state == SolverState.PROPAGATING:
            seen_branch = True
            new = current.tried[-1]
            assert new not in before
            assert current.tried[:-1] == before

        for board in list(ctx.stack) + [ctx.current]:
            assert len(set(board.tried)) == len(board.tried)

    assert seen_branch
    assert state == SolverState.SOLVED


def test_backtracking_exhausts_to_unsolvable():
    # (0,0), (0,1) et (0,2) n'ont que {1, 2} : chaque essai échoue
    grid = [[0] * 9 for _ in range(9)]
    grid[0] = [0, 0, 0, 3, 4, 5, 6, 7, 8]
    grid[1][2] = 9
    result = solve(grid)
    assert not result.solved
    assert result.state == SolverState.UNSOLVABLE
    assert result.grid is None
    assert result.guesses == 2
    assert result.backtracks == 2
    assert result.max_depth == 1


def test_root_contradiction_is_unsolvable():
    # aucune paire de doublons dans l'énoncé, mais (0,0) n'a aucun candidat
    grid = [[0] * 9 for _ in range(9)]
    grid[0] = [0, 1, 2, 3, 4, 5, 6, 7, 8]
    grid[1][0] = 9
    result = solve(grid)
    assert not result.solved
    assert result.state == SolverState.UNSOLVABLE
    assert result.grid is None


@pytest.mark.parametrize(
    "cells",
    [
        [(0, 0), (0, 5)],  # ligne
        [(1, 4), (7, 4)],  # colonne
        [(6, 6), (8, 8)],  # bloc
    ],
)
def test_duplicate_givens_are_unsolvable(empty_grid, cells):
    for (r, c) in cells:
        empty_grid[r][c] = 5
    result = solve(empty_grid)
    assert not result.solved
    assert result.state == SolverState.UNSOLVABLE
    assert result.grid is None
    assert result.guesses == 0


def test_duplicate_in_almost_solved_grid(solved_grid):
    # deux 5 sur la ligne 0, le reste intact
    solved_grid[0][1] = 5
    result = solve(solved_grid)
    assert result.state == SolverState.UNSOLVABLE


def test_empty_grid_is_solved(empty_grid):
    result = solve(empty_grid)
    assert result.solved
    assert is_complete_solution(result.grid)


def test_verbose_prints_guesses(classic_grid, capsys):
    solve(classic_grid, verbose=True)
    out = capsys.readouterr().out
    assert "Essai : (" in out


def test_quiet_by_default(classic_grid, capsys):
    solve(classic_grid)
    assert capsys.readouterr().out == ""
