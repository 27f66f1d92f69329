import pytest

from duel.core.actions import Action
from duel.core.types import Archetype, Phase, Player
from duel.mechanics import apply_action, legal_actions

P1, P2 = Player.ONE, Player.TWO
K, G, B = Archetype.KING, Archetype.GUNSLINGER, Archetype.BRUISER


def duel_pieces():
    return [
        (P1, G, (3, 0)),
        (P2, B, (1, 0)), (P2, K, (0, 5)),
        (P1, K, (5, 5)),
    ]


def test_attack_in_place_and_move_then_attack_are_both_offered(make_snapshot):
    state = make_snapshot(duel_pieces(), dice=2)
    actions = legal_actions(state)

    assert Action(1, None, 2) in actions
    assert Action(1, (3, 1), 2) in actions
    assert Action(1, (5, 0), None) in actions


def test_legal_actions_are_distinct_and_attacks_come_first(make_snapshot):
    state = make_snapshot(duel_pieces(), dice=2)
    actions = legal_actions(state)

    assert len(actions) == len(set(actions))
    assert actions[0] == Action(1, None, 2)
    assert actions.count(Action(1, None, 2)) == 1


def test_stay_without_target_is_offered_when_nothing_in_range(make_snapshot):
    state = make_snapshot([(P1, B, (5, 5)), (P2, K, (0, 0))], dice=1)
    actions = legal_actions(state)
    assert Action(1) in actions
    assert all(a.target_id is None for a in actions)


@pytest.mark.parametrize("dice", [None, 6])
def test_no_actions_without_a_usable_die(make_snapshot, dice):
    state = make_snapshot(duel_pieces(), dice=dice)
    assert legal_actions(state) == []


def test_dice_four_limits_movement_to_one_step(make_snapshot):
    state = make_snapshot(duel_pieces(), dice=4)
    moves = {a.move for a in legal_actions(state) if a.piece_id == 1 and a.move is not None}
    assert moves == {(4, 0), (2, 0), (3, 1)}


def test_legal_actions_for_the_other_player(make_snapshot):
    state = make_snapshot(duel_pieces(), dice=1)
    assert {a.piece_id for a in legal_actions(state, P2)} == {2, 3}


def test_apply_action_uses_multiplier_and_passes_turn(make_snapshot):
    state = make_snapshot(duel_pieces() + [(P2, G, (0, 0))], dice=5)

    assert apply_action(state, Action(1, (2, 0), 2))

    assert state.get_piece(1).pos == (2, 0)
    # adjacent gunslinger hit: 3 x 3
    assert state.get_piece(2) is None
    assert state.phase == Phase.PLAY
    assert state.current_player == P2
    assert state.dice is None
    assert state.dice_multiplier == 1


def test_apply_action_finishing_blow_keeps_winner_to_move(make_snapshot):
    state = make_snapshot(duel_pieces(), dice=5)
    apply_action(state, Action(1, (2, 0), 2))
    assert state.phase == Phase.FINISHED
    assert state.winner == P1
    assert state.dice is None
    assert state.current_player == P1


def test_apply_action_with_missing_piece_forfeits(make_snapshot):
    state = make_snapshot(duel_pieces(), dice=2)
    assert not apply_action(state, Action(42))
    assert state.current_player == P2


def test_action_rejects_non_int_ids():
    with pytest.raises(ValueError):
        Action("1")
    with pytest.raises(ValueError):
        Action(1, move=(1, 2, 3))
    assert Action.from_dict({"piece_id": 3, "move": [2, 2], "target_id": 9}) == Action(3, (2, 2), 9)


def test_action_factories_match_the_offered_actions(make_snapshot):
    state = make_snapshot(duel_pieces(), dice=2)
    actions = legal_actions(state)

    assert Action.attack(1, 2) in actions
    assert Action.attack(1, 2, move=(3, 1)) in actions
    assert Action.move_to(1, (5, 0)) in actions
    assert Action.stay(4) in actions
    assert str(Action.stay(4)) == "STAY piece=4"
