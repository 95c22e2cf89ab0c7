from __future__ import annotations

# Facade module that re-exports Dotty core functionality.
# The Flask app, the CLI entrypoint and the tests import from here.
# Single-responsibility modules live under dotty_core/*.

# Prefer relative imports when this module is loaded as part of a package,
# then fall back to the top-level dotty_core package.
try:
    from .dotty_core.constants import GRID_SIZE, NUM_COLORS, INIT_MOVES, MIN_PATH  # type: ignore
    from .dotty_core.board import Coord, Grid, Token, is_adjacent  # type: ignore
    from .dotty_core.engine import (  # type: ignore
        CoordinateError,
        GridEngine,
        ResolveResult,
        SelectionOutcome,
    )
    from .dotty_core.touch import (  # type: ignore
        GesturePhase,
        TouchResult,
        cell_at,
        cell_center,
        handle_touch,
        release,
    )
    from .dotty_core.feedback import FeedbackEvent, ToneLadder, events_for  # type: ignore
    from .dotty_core.sessions import GameSession, SessionStore  # type: ignore
except ImportError:
    from dotty_core.constants import GRID_SIZE, NUM_COLORS, INIT_MOVES, MIN_PATH  # type: ignore
    from dotty_core.board import Coord, Grid, Token, is_adjacent  # type: ignore
    from dotty_core.engine import (  # type: ignore
        CoordinateError,
        GridEngine,
        ResolveResult,
        SelectionOutcome,
    )
    from dotty_core.touch import (  # type: ignore
        GesturePhase,
        TouchResult,
        cell_at,
        cell_center,
        handle_touch,
        release,
    )
    from dotty_core.feedback import FeedbackEvent, ToneLadder, events_for  # type: ignore
    from dotty_core.sessions import GameSession, SessionStore  # type: ignore


def new_engine(seed: int | None = None) -> GridEngine:
    """Builds an engine with a freshly dealt board."""
    engine = GridEngine(seed=seed)
    engine.new_game()
    return engine


def main() -> None:
    # CLI driver delegated to dotty_core.cli
    try:
        from .dotty_core.cli import main as _main  # type: ignore
    except ImportError:
        from dotty_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
