import logging

from termtris import __main__ as cli
from termtris.engine import Engine


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert args.frontend == "terminal"
    assert args.seed is None
    assert args.log_level == "WARNING"
    assert args.log_file is None


def test_main_runs_terminal_frontend(monkeypatch):
    calls = []

    def fake_play(engine, *, frame_delay):
        calls.append((engine, frame_delay))

    monkeypatch.setattr("termtris.run_terminal.play", fake_play)
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)

    cli.main(["--seed", "5", "--frame-delay", "0.05"])

    assert len(calls) == 1
    engine, frame_delay = calls[0]
    assert isinstance(engine, Engine)
    assert frame_delay == 0.05


def test_seeded_engines_share_piece_order(monkeypatch):
    engines = []
    monkeypatch.setattr("termtris.run_terminal.play", lambda engine, **_: engines.append(engine))
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)

    cli.main(["--seed", "9"])
    cli.main(["--seed", "9"])

    first, second = (e.snapshot() for e in engines)
    assert (first.active_kind, first.upcoming) == (second.active_kind, second.upcoming)
