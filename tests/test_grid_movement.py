from duel.core.types import Archetype, Player
from duel.mechanics import MovementResolver
from duel.world.grid import GRID, Grid

P1, P2 = Player.ONE, Player.TWO
K, G, B = Archetype.KING, Archetype.GUNSLINGER, Archetype.BRUISER


def test_neighbors_are_orthogonal_in_fixed_order():
    assert GRID.neighbors((2, 2)) == [(3, 2), (1, 2), (2, 3), (2, 1)]
    assert GRID.neighbors((0, 0)) == [(1, 0), (0, 1)]


def test_home_bands_and_king_cells():
    assert GRID.home_rows(P1) == (4, 5)
    assert GRID.home_rows(P2) == (0, 1)
    assert GRID.king_home(P1) == (5, 0)
    assert GRID.king_home(P2) == (0, 5)
    assert len(GRID.home_cells(P1)) == 12


def test_manhattan_distance():
    assert Grid.manhattan_distance((0, 0), (5, 5)) == 10
    assert Grid.manhattan_distance((3, 1), (1, 2)) == 3


def test_open_board_two_steps_reaches_twelve_cells(make_snapshot):
    state = make_snapshot([(P1, B, (2, 2))])
    piece = state.get_piece(1)

    cells = MovementResolver().reachable_cells(state, piece, 2)

    assert len(cells) == 12
    assert len(set(cells)) == 12
    assert (2, 2) not in cells
    assert all(Grid.manhattan_distance((2, 2), c) <= 2 for c in cells)


def test_reachable_cells_follow_bfs_discovery_order(make_snapshot):
    state = make_snapshot([(P1, B, (2, 2))])
    cells = MovementResolver().reachable_cells(state, state.get_piece(1), 1)
    assert cells == [(3, 2), (1, 2), (2, 3), (2, 1)]


def test_zero_steps_reach_nothing(make_snapshot):
    state = make_snapshot([(P1, B, (2, 2))])
    assert MovementResolver().reachable_cells(state, state.get_piece(1), 0) == []


def test_walled_piece_cannot_move(make_snapshot):
    state = make_snapshot([
        (P1, K, (5, 0)),
        (P1, B, (4, 0)),
        (P1, G, (5, 1)),
    ])
    king = state.get_piece(1)
    assert MovementResolver().reachable_cells(state, king, 3) == []


def test_occupied_cells_block_passage(make_snapshot):
    state = make_snapshot([
        (P1, G, (2, 0)),
        (P2, B, (2, 1)),
    ])
    cells = MovementResolver().reachable_cells(state, state.get_piece(1), 2)
    assert (2, 1) not in cells
    # the only routes around the blocker take four steps
    assert (2, 2) not in cells


def test_resolve_move_failure_leaves_piece_in_place(make_snapshot):
    state = make_snapshot([
        (P1, G, (3, 3)),
        (P2, B, (3, 4)),
    ])
    piece = state.get_piece(1)
    resolver = MovementResolver()

    occupied = resolver.resolve_move(state, piece, (3, 4), 3)
    too_far = resolver.resolve_move(state, piece, (0, 0), 3)
    off_board = resolver.resolve_move(state, piece, (6, 3), 3)

    assert (occupied.success, occupied.failure_reason) == (False, "OCCUPIED")
    assert (too_far.success, too_far.failure_reason) == (False, "UNREACHABLE")
    assert (off_board.success, off_board.failure_reason) == (False, "OUT_OF_BOUNDS")
    assert piece.pos == (3, 3)


def test_resolve_move_applies_reachable_cell(make_snapshot):
    state = make_snapshot([(P1, G, (3, 3))])
    piece = state.get_piece(1)
    result = MovementResolver().resolve_move(state, piece, (1, 2), 3)
    assert result.success
    assert result.old_pos == (3, 3)
    assert piece.pos == (1, 2)
    assert state.occupant_at(3, 3) is None
