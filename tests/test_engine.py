"""Unit tests for the game engine."""

import random
from dataclasses import replace

import pytest

from unoengine.engine import (
    STANDARD_COLORS,
    ChooseColor,
    Color,
    DrawCard,
    GamePhase,
    InitializationError,
    PassTurn,
    PlayCard,
    apply_action,
    build_deck,
    draw,
    get_legal_actions,
    initialize,
    is_playable,
    pass_turn,
    play,
    select_color,
)

NAMES = ("P0", "P1", "P2", "P3")


def _deck_with_starter(value, color=None, extra=()):
    """A build-order deck whose card 28 (the first after dealing 4x7) is the given card."""
    deck = build_deck()
    picked = next(
        c for c in deck[28:] if c.value == value and (color is None or c.color == color)
    )
    deck.remove(picked)
    deck.insert(28, picked)
    for offset, card in enumerate(extra, start=29):
        deck.remove(card)
        deck.insert(offset, card)
    return deck


@pytest.mark.parametrize("seed", range(30))
def test_initialize(seed) -> None:
    state = initialize(NAMES, rng=random.Random(seed))
    starter = state.top_discard()
    assert len(state.players) == 4
    assert [p.is_human for p in state.players] == [True, False, False, False]
    assert state.phase == GamePhase.PLAYING
    assert state.turn_count == 0
    assert state.pending_color is None
    assert state.winner_id is None
    assert len(state.discard_pile) == 1
    assert starter.value != "wild-draw-four"
    assert state.current_color in STANDARD_COLORS
    if not starter.is_wild:
        assert state.current_color == starter.color
    assert state.total_cards() == 108
    assert sum(len(p.hand) for p in state.players) in (28, 30)
    assert 0 <= state.current_player_index < 4


def test_initialize_deals_seat_by_seat(no_shuffle) -> None:
    state = initialize(NAMES, rng=no_shuffle)
    deck = build_deck()
    assert state.players[0].hand == tuple(deck[:7])
    assert state.players[3].hand == tuple(deck[21:28])
    assert state.top_discard() == deck[28]
    assert state.current_player_index == 0
    assert state.log == ("The first card is yellow 2",)


def test_initialize_player_count() -> None:
    with pytest.raises(ValueError):
        initialize(("solo",))
    with pytest.raises(ValueError):
        initialize(("a", "b", "c", "d", "e"))
    state = initialize(("a", "b"), rng=random.Random(1))
    assert len(state.players) == 2
    assert state.total_cards() == 108


def test_starter_reverse(monkeypatch, no_shuffle) -> None:
    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: _deck_with_starter("reverse"))
    state = initialize(NAMES, rng=no_shuffle)
    assert state.top_discard().value == "reverse"
    assert state.direction == -1
    assert state.current_player_index == 3


def test_starter_reverse_two_players_moves_once(monkeypatch, no_shuffle) -> None:
    deck = build_deck()
    starter = next(c for c in deck[14:] if c.value == "reverse")
    deck.remove(starter)
    deck.insert(14, starter)
    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: deck)
    state = initialize(("a", "b"), rng=no_shuffle)
    assert state.top_discard() == starter
    assert state.direction == -1
    assert state.current_player_index == 1


def test_starter_skip(monkeypatch, no_shuffle) -> None:
    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: _deck_with_starter("skip"))
    state = initialize(NAMES, rng=no_shuffle)
    assert state.current_player_index == 2
    assert state.log[0] == "The first card skips P1"


def test_starter_draw_two(monkeypatch, no_shuffle) -> None:
    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: _deck_with_starter("draw-two"))
    state = initialize(NAMES, rng=no_shuffle)
    assert [len(p.hand) for p in state.players] == [7, 9, 7, 7]
    assert state.current_player_index == 2
    assert state.total_cards() == 108


def test_starter_wild_gets_random_color(monkeypatch, no_shuffle) -> None:
    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: _deck_with_starter("wild"))
    state = initialize(NAMES, rng=no_shuffle)
    assert state.top_discard().value == "wild"
    assert state.current_color == Color.RED
    assert state.current_player_index == 0
    assert state.phase == GamePhase.PLAYING


def test_starter_skips_wild_draw_four(monkeypatch, no_shuffle) -> None:
    base = build_deck()
    yellow_five = next(c for c in base[28:] if c.color == Color.YELLOW and c.value == "5")
    deck = _deck_with_starter("wild-draw-four", extra=[yellow_five])
    wd4 = deck[28]
    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: deck)
    state = initialize(NAMES, rng=no_shuffle)
    assert state.top_discard() == yellow_five
    assert state.draw_pile[-1] == wd4
    assert state.total_cards() == 108


def test_no_valid_starter_is_fatal(monkeypatch, no_shuffle) -> None:
    deck = build_deck()
    only_wd4 = [c for c in deck if c.value == "wild-draw-four"]
    rest = [c for c in deck if c.value != "wild-draw-four"]
    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: rest[:28] + only_wd4)
    with pytest.raises(InitializationError):
        initialize(NAMES, rng=no_shuffle)

    monkeypatch.setattr("unoengine.engine.rules.build_deck", lambda: rest[:28])
    with pytest.raises(InitializationError):
        initialize(NAMES, rng=no_shuffle)


def test_value_match_rebinds_color(card) -> None:
    state = initialize(NAMES, rng=random.Random(3))
    red_five = card("test-red-5", "red", "5")
    blue_five = card("test-blue-5", "blue", "5")
    human = state.players[0]
    state = replace(
        state,
        players=(human.with_hand(human.hand + (blue_five,)),) + state.players[1:],
        discard_pile=state.discard_pile + (red_five,),
        current_color=Color.RED,
        current_player_index=0,
        direction=1,
        drawn_card_id=None,
    )
    assert is_playable(state, blue_five)
    new_state = play(state, "test-blue-5")
    assert new_state.current_color == Color.BLUE
    assert new_state.top_discard() == blue_five
    assert new_state.last_played_card == blue_five
    assert new_state.current_player_index == 1
    assert new_state.turn_count == state.turn_count + 1


def test_is_playable(card, make_state) -> None:
    top = card("t", "red", "5")
    state = make_state([[], []], [top])
    assert is_playable(state, card("a", "red", "9"))
    assert is_playable(state, card("b", "green", "5"))
    assert not is_playable(state, card("c", "green", "9"))
    assert is_playable(state, card("d", "wild", "wild"))
    assert is_playable(state, card("e", "wild", "wild-draw-four"))
    assert not is_playable(replace(state, phase=GamePhase.FINISHED), card("a", "red", "9"))


def test_is_playable_uses_active_color_after_wild(card, make_state) -> None:
    state = make_state([[], []], [card("t", "wild", "wild")], current_color=Color.GREEN)
    assert is_playable(state, card("a", "green", "1"))
    assert not is_playable(state, card("b", "red", "1"))


def test_is_playable_with_empty_discard(card, make_state) -> None:
    state = make_state([[], []], [], current_color=Color.RED)
    assert is_playable(state, card("a", "blue", "3"))


def test_play_card_not_in_hand_is_rejected(card, make_state) -> None:
    state = make_state([[card("a", "red", "1")], [card("b", "red", "2")]], [card("t", "red", "5")])
    result = apply_action(state, PlayCard("b"))
    assert not result.applied
    assert result.state is state
    assert "not in" in result.reason
    assert play(state, "missing") == state


def test_play_unplayable_card_is_rejected(card, make_state) -> None:
    state = make_state([[card("a", "blue", "1"), card("x", "blue", "2")], []], [card("t", "red", "5")])
    assert play(state, "a") == state
    assert not apply_action(state, PlayCard("a")).applied


def test_play_last_card_wins(card, make_state) -> None:
    state = make_state(
        [[card("a", "red", "1")], [card("b", "red", "2")], [card("c", "red", "3")]],
        [card("t", "red", "5")],
        turn_count=4,
    )
    new_state = play(state, "a")
    assert new_state.phase == GamePhase.FINISHED
    assert new_state.winner_id == "player-0"
    assert new_state.current_player_index == 0
    assert new_state.turn_count == 4
    assert new_state.log[0] == "P0 wins!"
    # nothing moves once the game is over
    assert play(new_state, "b") == new_state
    assert draw(new_state) == new_state
    assert pass_turn(new_state) == new_state
    assert select_color(new_state, Color.RED) == new_state


def test_winning_with_wild_binds_color(card, make_state) -> None:
    state = make_state([[card("w", "wild", "wild")], [card("b", "red", "2")]], [card("t", "red", "5")])
    new_state = play(state, "w", Color.BLUE)
    assert new_state.phase == GamePhase.FINISHED
    assert new_state.current_color == Color.BLUE
    assert new_state.pending_color is None


def test_skip(card, make_state) -> None:
    hands = [[card("s", "red", "skip"), card("k", "red", "1")], [], [], []]
    state = make_state(hands, [card("t", "red", "5")])
    assert play(state, "s").current_player_index == 2


def test_skip_reversed_direction(card, make_state) -> None:
    hands = [[], [card("s", "red", "skip"), card("k", "red", "1")], [], []]
    state = make_state(hands, [card("t", "red", "5")], current=1, direction=-1, human_seat=2)
    assert play(state, "s").current_player_index == 3


def test_reverse_four_players(card, make_state) -> None:
    hands = [[card("r", "red", "reverse"), card("k", "red", "1")], [], [], []]
    new_state = play(make_state(hands, [card("t", "red", "5")]), "r")
    assert new_state.direction == -1
    assert new_state.current_player_index == 3


def test_reverse_two_players_acts_as_skip(card, make_state) -> None:
    hands = [[card("r", "red", "reverse"), card("k", "red", "1")], [card("o", "blue", "1")]]
    new_state = play(make_state(hands, [card("t", "red", "5")]), "r")
    assert new_state.direction == -1
    assert new_state.current_player_index == 0


def test_draw_two(card, make_state) -> None:
    pile = [card(f"d{i}", "green", str(i)) for i in range(5)]
    hands = [[card("dt", "red", "draw-two"), card("k", "red", "1")], [card("o", "blue", "1")], [], []]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=pile)
    new_state = play(state, "dt")
    assert len(new_state.players[1].hand) == 3
    assert new_state.players[1].hand[1:] == tuple(pile[:2])
    assert new_state.current_player_index == 2
    assert new_state.draw_pile == tuple(pile[2:])


def test_wild_draw_four_with_color(card, make_state) -> None:
    pile = [card(f"d{i}", "green", str(i)) for i in range(5)]
    hands = [[card("w4", "wild", "wild-draw-four"), card("k", "red", "1")], [], [], []]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=pile)
    new_state = play(state, "w4", Color.YELLOW)
    assert len(new_state.players[1].hand) == 4
    assert new_state.current_player_index == 2
    assert new_state.current_color == Color.YELLOW
    assert new_state.phase == GamePhase.PLAYING


def test_wild_draw_four_then_choose_color(card, make_state) -> None:
    pile = [card(f"d{i}", "green", str(i)) for i in range(5)]
    hands = [[card("w4", "wild", "wild-draw-four"), card("k", "red", "1")], [], [], []]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=pile)
    pending = play(state, "w4")
    assert pending.phase == GamePhase.CHOOSE_COLOR
    assert pending.pending_color.next_player_index == 2
    assert pending.pending_color.value == "wild-draw-four"
    assert pending.current_player_index == 0
    assert pending.current_color == Color.RED
    assert len(pending.players[1].hand) == 4

    resumed = select_color(pending, Color.GREEN)
    assert resumed.phase == GamePhase.PLAYING
    assert resumed.current_color == Color.GREEN
    assert resumed.current_player_index == 2
    assert resumed.pending_color is None


def test_wild_then_choose_color(card, make_state) -> None:
    hands = [[card("w", "wild", "wild"), card("k", "red", "1")], [], [], []]
    state = make_state(hands, [card("t", "red", "5")])
    pending = play(state, "w")
    assert pending.phase == GamePhase.CHOOSE_COLOR
    assert pending.pending_color.player_id == "player-0"
    assert pending.pending_color.card_id == "w"
    assert pending.pending_color.next_player_index == 1
    # nothing else is legal until a color arrives
    assert play(pending, "k") == pending
    assert draw(pending) == pending
    assert not is_playable(pending, hands[0][1])
    assert get_legal_actions(pending) == [ChooseColor(c) for c in STANDARD_COLORS]

    resumed = select_color(pending, Color.BLUE)
    assert resumed.current_player_index == 1
    assert resumed.current_color == Color.BLUE


def test_select_color_rejections(card, make_state) -> None:
    state = make_state([[card("w", "wild", "wild"), card("k", "red", "1")], []], [card("t", "red", "5")])
    assert select_color(state, Color.RED) == state
    pending = play(state, "w")
    assert select_color(pending, Color.WILD) == pending
    assert select_color(pending, "purple") == pending
    assert select_color(pending, "red").current_color == Color.RED


def test_play_wild_with_wild_color_is_rejected(card, make_state) -> None:
    state = make_state([[card("w", "wild", "wild"), card("k", "red", "1")], []], [card("t", "red", "5")])
    assert play(state, "w", Color.WILD) == state


def test_draw_then_pass(card, make_state) -> None:
    hands = [[card("a", "blue", "1"), card("b", "green", "2")], [], [], []]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=[card("n", "yellow", "7")])
    assert pass_turn(state) == state  # no passing without drawing

    drawn = draw(state)
    assert len(drawn.players[0].hand) == 3
    assert drawn.drawn_card_id == "n"
    assert drawn.current_player_index == 0
    assert drawn.draw_pile == ()
    assert play(drawn, "a") == drawn
    assert play(drawn, "n") == drawn  # drawn card is itself unplayable

    passed = pass_turn(drawn)
    assert passed.current_player_index == 1
    assert passed.drawn_card_id is None


def test_drawn_card_may_be_played(card, make_state) -> None:
    hands = [[card("a", "blue", "1"), card("b", "red", "2")], [], [], []]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=[card("n", "red", "7")])
    drawn = draw(state)
    assert play(drawn, "b") == drawn  # other playable cards are locked out
    played = play(drawn, "n")
    assert played.top_discard().id == "n"
    assert played.drawn_card_id is None
    assert played.current_player_index == 1


def test_draw_recycles_discard_pile(card, make_state) -> None:
    discard = [card(f"x{i}", "blue", str(i)) for i in range(4)]
    state = make_state([[card("a", "green", "1")], []], discard, draw_pile=[])
    new_state = draw(state, random.Random(2))
    assert new_state.discard_pile == (discard[-1],)
    assert len(new_state.draw_pile) == 2
    assert len(new_state.players[0].hand) == 2
    assert new_state.total_cards() == state.total_cards()


def test_draw_with_nothing_to_recycle_is_rejected(card, make_state) -> None:
    state = make_state([[card("a", "green", "1")], []], [card("t", "red", "5")], draw_pile=[])
    result = apply_action(state, DrawCard())
    assert not result.applied
    assert result.state == state
    assert DrawCard() not in get_legal_actions(state)


def test_said_uno_tracks_single_card(card, make_state) -> None:
    hands = [[card("a", "red", "1"), card("b", "red", "2")], [card("c", "blue", "3")]]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=[card("n", "yellow", "7")])
    assert not state.players[0].said_uno
    assert state.players[1].said_uno
    after_play = play(state, "a")
    assert after_play.players[0].said_uno
    after_draw = draw(after_play)
    assert not after_draw.players[1].said_uno


def test_turn_count_only_counts_plays(card, make_state) -> None:
    hands = [[card("a", "blue", "1"), card("b", "blue", "2")], [card("c", "red", "3"), card("d", "red", "4")]]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=[card("n", "yellow", "7")])
    state = pass_turn(draw(state))
    assert state.turn_count == 0
    state = play(state, "c")
    assert state.turn_count == 1


def test_get_legal_actions(card, make_state) -> None:
    hands = [[card("a", "red", "1"), card("b", "blue", "2"), card("w", "wild", "wild")], []]
    state = make_state(hands, [card("t", "red", "5")], draw_pile=[card("n", "yellow", "7")])
    assert get_legal_actions(state) == [PlayCard("a"), PlayCard("w"), DrawCard()]
    drawn = draw(state)
    assert get_legal_actions(drawn) == [PassTurn()]
    assert get_legal_actions(replace(state, phase=GamePhase.FINISHED)) == []


def test_unknown_action_type(card, make_state) -> None:
    state = make_state([[card("a", "red", "1")], []], [card("t", "red", "5")])
    with pytest.raises(TypeError):
        apply_action(state, "draw")
