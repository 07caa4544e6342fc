# sudoku_cli.py
"""
Résolution en ligne de commande.

Usage :
    sudoku-solve grille.txt
    sudoku-solve grille.txt --verbose --pdf solution.pdf

Le fichier contient 81 chiffres (0 = vide), ligne par ligne ; les autres
caractères sont ignorés.
"""

from __future__ import annotations
import argparse
import sys
import time
from typing import List, Optional

from sudoku_io import canon_str, format_grid, load_grid
from sudoku_solver import solve

EXIT_OK = 0
EXIT_UNSOLVABLE = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="sudoku-solve",
        description="Résout une grille de Sudoku 9x9 (propagation + retour arrière).",
    )
    ap.add_argument("path", help="fichier contenant les 81 chiffres de la grille")
    ap.add_argument("--verbose", "-v", action="store_true", help="affiche chaque essai")
    ap.add_argument("--compact", action="store_true", help="affiche la grille sur une ligne")
    ap.add_argument("--pdf", type=str, default=None, help="exporte énoncé + solution en PDF")
    ap.add_argument("--png", type=str, default=None, help="exporte énoncé + solution en PNG")
    return ap


def _show(grid, compact: bool) -> None:
    print(canon_str(grid) if compact else format_grid(grid))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        puzzle = load_grid(args.path)
    except OSError as e:
        print(f"Fichier illisible : {args.path} ({e})", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ValueError as e:
        print(f"Grille invalide : {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    _show(puzzle, args.compact)
    print()

    start = time.perf_counter()
    result = solve(puzzle, verbose=args.verbose)
    elapsed = time.perf_counter() - start

    if not result.solved:
        print("Aucune solution pour cette grille.")
        print(f"Durée : {elapsed:.3f} s")
        return EXIT_UNSOLVABLE

    _show(result.grid, args.compact)
    print()
    print(
        f"Résolu en {elapsed:.3f} s "
        f"({result.guesses} essai(s), {result.backtracks} retour(s) arrière, "
        f"profondeur max {result.max_depth}, "
        f"{result.passes} passe(s), {result.placements} case(s) déduite(s))"
    )

    if args.pdf or args.png:
        # import tardif : matplotlib n'est utile que pour l'export
        from sudoku_render import save_solution_pdf, save_solution_png

        if args.pdf:
            save_solution_pdf(args.pdf, puzzle, result.grid)
            print(f"PDF généré : {args.pdf}")
        if args.png:
            save_solution_png(args.png, puzzle, result.grid)
            print(f"PNG généré : {args.png}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
