import random
import unittest

from game import Grid, Token, is_adjacent, GRID_SIZE, NUM_COLORS


def stripes(size=6, colors=5):
    # No two orthogonal neighbours share a color.
    return [[(r + c) % colors for c in range(size)] for r in range(size)]


class TestBoard(unittest.TestCase):
    def test_given_default_grid_when_created_then_every_cell_holds_a_palette_color(self):
        grid = Grid(rng=random.Random(1))
        self.assertEqual(grid.size, GRID_SIZE)
        cells = list(grid)
        self.assertEqual(len(cells), GRID_SIZE * GRID_SIZE)
        for token in cells:
            self.assertIn(token.color, range(NUM_COLORS))
            self.assertFalse(token.selected)

    def test_given_grid_when_iterating_coords_then_row_major_and_tokens_know_their_slot(self):
        grid = Grid(size=3, rng=random.Random(0))
        coords = list(grid.coords())
        self.assertEqual(coords[0], (0, 0))
        self.assertEqual(coords[1], (0, 1))
        self.assertEqual(coords[-1], (2, 2))
        for r, c in coords:
            self.assertEqual(grid.at(r, c).coord, (r, c))

    def test_given_same_seed_when_filling_then_layouts_match(self):
        a = Grid(rng=random.Random(42))
        b = Grid(rng=random.Random(42))
        self.assertEqual(a.colors(), b.colors())

    def test_given_coords_when_checking_adjacency_then_only_manhattan_one(self):
        self.assertTrue(is_adjacent((2, 2), (1, 2)))
        self.assertTrue(is_adjacent((2, 2), (3, 2)))
        self.assertTrue(is_adjacent((2, 2), (2, 1)))
        self.assertTrue(is_adjacent((2, 2), (2, 3)))
        self.assertFalse(is_adjacent((2, 2), (3, 3)))  # diagonal
        self.assertFalse(is_adjacent((2, 2), (2, 2)))
        self.assertFalse(is_adjacent((2, 2), (2, 4)))

    def test_given_bounds_when_checking_then_edges_inclusive(self):
        grid = Grid(size=4, rng=random.Random(0))
        self.assertTrue(grid.in_bounds((0, 0)))
        self.assertTrue(grid.in_bounds((3, 3)))
        self.assertFalse(grid.in_bounds((4, 0)))
        self.assertFalse(grid.in_bounds((0, -1)))

    def test_given_layout_when_loading_then_colors_replaced_and_bad_layouts_refused(self):
        grid = Grid(rng=random.Random(0))
        grid.load(stripes())
        self.assertEqual(grid.colors()[1], (1, 2, 3, 4, 0, 1))
        with self.assertRaises(ValueError):
            grid.load([[0] * 6] * 5)
        with self.assertRaises(ValueError):
            grid.load([[9] * 6] * 6)

    def test_given_selected_token_when_pretty_then_lowercased(self):
        grid = Grid(size=2, rng=random.Random(0))
        grid.load([[0, 1], [2, 3]])
        grid.at(0, 1).selected = True
        self.assertEqual(grid.pretty(), "R g\nB Y")

    def test_given_bad_dimensions_when_creating_then_value_error(self):
        with self.assertRaises(ValueError):
            Grid(size=0)
        with self.assertRaises(ValueError):
            Grid(num_colors=0)

    def test_given_token_when_defaulted_then_unselected(self):
        t = Token(row=1, col=2)
        self.assertEqual(t.coord, (1, 2))
        self.assertFalse(t.selected)


if __name__ == '__main__':
    unittest.main(verbosity=2)
