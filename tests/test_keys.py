import curses

from termtris.game_state import Command
from termtris.keys import KeyDecoder


def test_letter_keys_map_to_commands():
    decoder = KeyDecoder()
    assert decoder.feed(ord("a")) is Command.MOVE_LEFT
    assert decoder.feed(ord("D")) is Command.MOVE_RIGHT
    assert decoder.feed(ord("s")) is Command.SOFT_DROP
    assert decoder.feed(ord("w")) is Command.ROTATE
    assert decoder.feed(ord(" ")) is Command.HARD_DROP
    assert decoder.feed(ord("P")) is Command.TOGGLE_PAUSE
    assert decoder.feed(ord("q")) is Command.QUIT


def test_curses_arrow_codes():
    decoder = KeyDecoder()
    assert decoder.decode([curses.KEY_LEFT, curses.KEY_RIGHT, curses.KEY_DOWN, curses.KEY_UP]) == [
        Command.MOVE_LEFT,
        Command.MOVE_RIGHT,
        Command.SOFT_DROP,
        Command.ROTATE,
    ]


def test_escape_sequences_decoded_across_feeds():
    decoder = KeyDecoder()
    assert decoder.feed(27) is None
    assert decoder.pending
    assert decoder.feed(ord("[")) is None
    assert decoder.feed(ord("D")) is Command.MOVE_LEFT
    assert not decoder.pending


def test_batch_with_escape_sequences():
    decoder = KeyDecoder()
    codes = [27, ord("["), ord("A"), 27, ord("["), ord("B"), 27, ord("["), ord("C"), ord("q")]
    assert decoder.decode(codes) == [
        Command.ROTATE,
        Command.SOFT_DROP,
        Command.MOVE_RIGHT,
        Command.QUIT,
    ]


def test_unknown_keys_are_dropped():
    decoder = KeyDecoder()
    assert decoder.decode([ord("x"), ord("1"), 27, ord("["), ord("Z")]) == []
    assert not decoder.pending


def test_lone_escape_is_discarded():
    decoder = KeyDecoder()
    assert decoder.decode([27, ord("p")]) == [Command.TOGGLE_PAUSE]


def test_second_escape_restarts_sequence():
    decoder = KeyDecoder()
    assert decoder.feed(27) is None
    assert decoder.feed(27) is None
    assert decoder.pending
    assert decoder.decode([ord("["), ord("C")]) == [Command.MOVE_RIGHT]


def test_escape_inside_sequence_restarts_it():
    decoder = KeyDecoder()
    assert decoder.decode([27, ord("["), 27, ord("["), ord("D")]) == [Command.MOVE_LEFT]
