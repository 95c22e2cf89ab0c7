from __future__ import annotations

import argparse
from typing import Callable, List, Optional

from .board import Coord
from .engine import CoordinateError, GridEngine, SelectionOutcome
from .feedback import FeedbackEvent, ToneLadder, events_for
from .log import configure_logging
from .touch import GesturePhase, handle_touch


def parse_path(text: str) -> List[Coord]:
    """Parses 'r,c r,c ...' into coordinates."""
    path: List[Coord] = []
    for chunk in text.split():
        parts = [p for p in chunk.split(',') if p != '']
        if len(parts) != 2:
            raise ValueError(f'Could not parse cell {chunk!r}')
        path.append((int(parts[0]), int(parts[1])))
    return path


def play_path(engine: GridEngine, path: List[Coord], tones: Optional[ToneLadder] = None) -> List[str]:
    """Feeds a whole path through the gesture adapter as one down/move/up stroke.

    An off-board cell drops the partial path and re-raises CoordinateError.
    """
    lines: List[str] = []
    try:
        for i, coord in enumerate(path):
            if i == len(path) - 1:
                phase = GesturePhase.LAST
            elif i == 0:
                phase = GesturePhase.FIRST
            else:
                phase = GesturePhase.ADDITIONAL
            result = handle_touch(engine, coord, phase)
            if result.ignored:
                lines.append('Game over. Start a new game with "n".')
                break
            if result.outcome is SelectionOutcome.REJECTED:
                lines.append(f'{coord} rejected')
            if tones is not None:
                tones.cue_for(result.outcome)
            if result.cleared:
                lines.append('Path too short, selection cleared.')
            if result.resolution is not None:
                res = result.resolution
                lines.append(f'Removed {res.removed} tokens. Score {res.score}, moves left {res.moves_left}.')
                if FeedbackEvent.GAME_OVER in events_for(result.outcome, res):
                    lines.append(f'Game over! Final score: {res.score}')
    except CoordinateError:
        engine.clear_selection()
        raise
    finally:
        if tones is not None:
            tones.reset()
    return lines


def main(argv: Optional[List[str]] = None, input_fn: Callable[[str], str] = input) -> None:
    parser = argparse.ArgumentParser(description='Dotty: connect same-colored dots')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the board')
    parser.add_argument('--debug', action='store_true', help='Enable debug-level logging')
    args = parser.parse_args(argv)

    configure_logging(debug=True if args.debug else None)
    engine = GridEngine(seed=args.seed)
    engine.new_game()
    tones = ToneLadder()

    print('Initial board:')
    print(engine.pretty())
    print(f'Moves left: {engine.moves_left}')

    while True:
        try:
            text = input_fn('Enter a path as r,c r,c ... ("n" new game, "q" quit): ').strip()
        except EOFError:
            break
        if text.lower() in ('q', 'quit', 'exit'):
            break
        if text.lower() in ('n', 'new'):
            engine.new_game()
            tones.reset()
            print(engine.pretty())
            print(f'Moves left: {engine.moves_left}')
            continue
        try:
            path = parse_path(text)
            for line in play_path(engine, path, tones):
                print(line)
        except CoordinateError as e:
            print(f'Off the board: {e}')
            continue
        except ValueError as e:
            print(f'{e}. Try again.')
            continue
        print(engine.pretty())
    print(f'Final score: {engine.score}')
