"""Tests for GameSession phase handling, scoring, and level progression."""
from __future__ import annotations

import pytest

from tick_blocks import ConfigurationError, GameConfig, GameSession, Phase, SignalBus
from tick_blocks import topics

ALL_SESSION_SIGNALS = [
    topics.SESSION_STARTED,
    topics.SESSION_PAUSED,
    topics.SESSION_RESUMED,
    topics.SESSION_LEVEL_STARTED,
    topics.SESSION_LEVEL_STOPPED,
    topics.SESSION_NEXT_LEVEL,
    topics.SESSION_RESET,
    topics.SESSION_GAME_OVER,
    topics.SESSION_PHASE_CHANGED,
    topics.SESSION_SCORE_CHANGED,
    topics.SESSION_LEVEL_CHANGED,
    topics.SESSION_TIMER_PROGRESS,
    topics.SESSION_SCORES,
]


def _session(**config_kwargs):
    bus = SignalBus()
    config = GameConfig(**config_kwargs)
    session = GameSession(bus, config=config, surface=object())
    session.initialize()
    log: list = []
    for name in ALL_SESSION_SIGNALS:
        bus.subscribe(name, lambda s, d: log.append((s, d)))
    return session, bus, log


def _signals(log: list) -> list[str]:
    return [name for name, _ in log]


def _play(session: GameSession, bus: SignalBus) -> None:
    bus.publish(topics.MENU_PLAY)
    bus.publish(topics.INSTRUCTIONS_DONE)


def _finish_level(session: GameSession, start: float = 0.0) -> float:
    """Drive the level timer through a whole level; returns the last timestamp."""
    session.timer.sample(start)
    end = start + session.timer.duration
    session.timer.sample(end)
    return end


class TestInitialization:
    def test_missing_surface_is_configuration_error(self) -> None:
        session = GameSession(SignalBus())
        with pytest.raises(ConfigurationError):
            session.initialize()

    def test_initial_state(self) -> None:
        session, _, _ = _session()
        assert session.phase is Phase.MAIN_MENU
        assert session.score == 0
        assert session.level == 1
        assert session.progress == 0.0

    def test_initialize_twice_does_not_double_subscribe(self) -> None:
        session, bus, log = _session()
        session.initialize()
        bus.publish(topics.MENU_PLAY)
        assert _signals(log).count(topics.SESSION_STARTED) == 1


class TestStart:
    def test_play_moves_to_instructions(self) -> None:
        session, bus, log = _session()
        bus.publish(topics.MENU_PLAY)

        assert session.phase is Phase.INSTRUCTIONS
        assert _signals(log) == [
            topics.SESSION_TIMER_PROGRESS,
            topics.SESSION_SCORE_CHANGED,
            topics.SESSION_LEVEL_CHANGED,
            topics.SESSION_PHASE_CHANGED,
            topics.SESSION_STARTED,
        ]
        assert log[-2][1] == {"old": Phase.MAIN_MENU, "new": Phase.INSTRUCTIONS}

    def test_started_handlers_see_instructions_phase(self) -> None:
        session, bus, _ = _session()
        seen = []
        bus.subscribe(topics.SESSION_STARTED, lambda s, d: seen.append(session.phase))
        bus.publish(topics.MENU_PLAY)
        assert seen == [Phase.INSTRUCTIONS]

    def test_instructions_done_starts_level(self) -> None:
        session, bus, log = _session()
        bus.publish(topics.MENU_PLAY)
        log.clear()
        bus.publish(topics.INSTRUCTIONS_DONE)

        assert session.phase is Phase.PLAYING
        assert session.timer.running
        assert (topics.SESSION_LEVEL_STARTED, {"level": 1}) in log

    def test_instructions_done_outside_instructions_ignored(self) -> None:
        session, bus, log = _session()
        bus.publish(topics.INSTRUCTIONS_DONE)
        assert session.phase is Phase.MAIN_MENU
        assert log == []

    def test_play_ignored_while_animating(self) -> None:
        session, bus, log = _session()
        bus.publish(topics.MENU_ANIMATING, animating=True)
        bus.publish(topics.MENU_PLAY)
        assert session.phase is Phase.MAIN_MENU
        assert log == []

        bus.publish(topics.MENU_ANIMATING, animating=False)
        bus.publish(topics.MENU_PLAY)
        assert session.phase is Phase.INSTRUCTIONS

    def test_play_ignored_outside_main_menu(self) -> None:
        session, bus, log = _session()
        _play(session, bus)
        log.clear()
        bus.publish(topics.MENU_PLAY)
        assert session.phase is Phase.PLAYING
        assert log == []


class TestPause:
    def test_pause_in_main_menu_is_noop(self) -> None:
        session, _, log = _session()
        session.request_pause()
        assert session.phase is Phase.MAIN_MENU
        assert log == []

    def test_pause_and_resume(self) -> None:
        session, bus, log = _session()
        _play(session, bus)
        log.clear()

        session.request_pause()
        assert session.phase is Phase.PAUSED
        assert session.is_paused
        assert not session.timer.running
        assert topics.SESSION_PAUSED in _signals(log)

        bus.publish(topics.MENU_RESUME)
        assert session.phase is Phase.PLAYING
        assert session.timer.running
        assert topics.SESSION_RESUMED in _signals(log)

    def test_double_pause_ignored(self) -> None:
        session, bus, log = _session()
        _play(session, bus)
        session.request_pause()
        log.clear()
        session.request_pause()
        assert session.phase is Phase.PAUSED
        assert log == []

    def test_resume_while_playing_ignored(self) -> None:
        session, bus, log = _session()
        _play(session, bus)
        log.clear()
        session.request_resume()
        assert log == []

    def test_pause_key_toggles(self) -> None:
        session, bus, _ = _session()
        _play(session, bus)
        bus.publish(topics.INPUT_PAUSE_KEY)
        assert session.phase is Phase.PAUSED
        bus.publish(topics.INPUT_PAUSE_KEY)
        assert session.phase is Phase.PLAYING

    def test_pause_key_outside_play_ignored(self) -> None:
        session, bus, log = _session()
        bus.publish(topics.INPUT_PAUSE_KEY)
        assert session.phase is Phase.MAIN_MENU
        assert log == []

    def test_toggle_ignored_while_animating(self) -> None:
        session, bus, _ = _session()
        _play(session, bus)
        bus.publish(topics.MENU_ANIMATING, animating=True)
        bus.publish(topics.INPUT_PAUSE_KEY)
        assert session.phase is Phase.PLAYING

    def test_progress_preserved_across_pause(self) -> None:
        session, bus, _ = _session(level_duration=10.0)
        _play(session, bus)
        session.timer.sample(0.0)
        session.timer.sample(4.0)
        before = session.progress

        session.request_pause()
        session.timer.sample(9.0)  # ignored while paused
        session.request_resume()
        session.timer.sample(9.0)

        assert session.progress == pytest.approx(before)
        session.timer.sample(10.0)
        assert session.progress == pytest.approx(0.5)


class TestLevels:
    def test_timer_expiry_goes_to_level_transition(self) -> None:
        session, bus, log = _session(total_levels=3)
        _play(session, bus)
        log.clear()

        _finish_level(session)

        assert session.phase is Phase.LEVEL_TRANSITION
        assert (topics.SESSION_LEVEL_STOPPED, {"level": 1}) in log
        assert topics.SESSION_GAME_OVER not in _signals(log)

    def test_continue_advances_level(self) -> None:
        session, bus, log = _session(total_levels=3)
        _play(session, bus)
        _finish_level(session)
        log.clear()

        bus.publish(topics.MENU_CONTINUE)

        assert session.phase is Phase.PLAYING
        assert session.level == 2
        assert session.progress == 0.0
        assert session.timer.running
        names = _signals(log)
        assert names.index(topics.SESSION_NEXT_LEVEL) < names.index(topics.SESSION_LEVEL_STARTED)
        assert (topics.SESSION_LEVEL_STARTED, {"level": 2}) in log
        assert (topics.SESSION_LEVEL_CHANGED, {"level": 2}) in log

    def test_continue_outside_transition_ignored(self) -> None:
        session, bus, log = _session()
        _play(session, bus)
        log.clear()
        bus.publish(topics.MENU_CONTINUE)
        assert session.level == 1
        assert log == []

    def test_final_level_expiry_is_game_over(self) -> None:
        session, bus, log = _session(total_levels=2, level_duration=5.0)
        _play(session, bus)
        t = _finish_level(session)
        bus.publish(topics.MENU_CONTINUE)
        log.clear()

        _finish_level(session, start=t + 1.0)

        assert session.phase is Phase.GAME_OVER
        names = _signals(log)
        assert topics.SESSION_LEVEL_STOPPED in names
        assert topics.SESSION_GAME_OVER in names
        changes = [d for s, d in log if s == topics.SESSION_PHASE_CHANGED]
        assert changes == [{"old": Phase.PLAYING, "new": Phase.GAME_OVER}]

    def test_single_level_game(self) -> None:
        session, bus, _ = _session(total_levels=1)
        _play(session, bus)
        _finish_level(session)
        assert session.phase is Phase.GAME_OVER


class TestRestartAndReset:
    def test_restart_from_pause(self) -> None:
        session, bus, log = _session(total_levels=3)
        _play(session, bus)
        _finish_level(session)
        bus.publish(topics.MENU_CONTINUE)
        session.change_score(50)
        session.request_pause()
        log.clear()

        bus.publish(topics.MENU_RESTART)

        assert session.phase is Phase.PLAYING
        assert session.score == 0
        assert session.level == 1
        assert session.timer.running
        names = _signals(log)
        assert names[0] == topics.SESSION_RESET
        assert names[-1] == topics.SESSION_LEVEL_STARTED

    def test_restart_from_game_over(self) -> None:
        session, bus, _ = _session(total_levels=1)
        _play(session, bus)
        _finish_level(session)
        bus.publish(topics.MENU_RESTART)
        assert session.phase is Phase.PLAYING

    def test_restart_in_main_menu_ignored(self) -> None:
        session, bus, log = _session()
        bus.publish(topics.MENU_RESTART)
        assert session.phase is Phase.MAIN_MENU
        assert log == []

    def test_main_menu_resets(self) -> None:
        session, bus, log = _session()
        _play(session, bus)
        session.change_score(30)
        session.timer.sample(0.0)
        session.timer.sample(5.0)
        session.request_pause()
        log.clear()

        bus.publish(topics.MENU_MAIN_MENU)

        assert session.phase is Phase.MAIN_MENU
        assert session.score == 0
        assert session.level == 1
        assert session.progress == 0.0
        assert not session.timer.running
        assert topics.SESSION_RESET in _signals(log)

    def test_main_menu_while_playing_ignored(self) -> None:
        session, bus, _ = _session()
        _play(session, bus)
        bus.publish(topics.MENU_MAIN_MENU)
        assert session.phase is Phase.PLAYING


class TestScore:
    def test_increase_and_decrease(self) -> None:
        session, bus, log = _session()
        _play(session, bus)
        bus.publish(topics.SCORE_INCREASE, amount=40)
        bus.publish(topics.SCORE_DECREASE, amount=15)
        assert session.score == 25
        assert (topics.SESSION_SCORE_CHANGED, {"score": 25}) in log

    def test_score_never_negative(self) -> None:
        session, bus, _ = _session()
        _play(session, bus)
        for amount in (5, -20, 3, -1, -100, 7, -7):
            session.change_score(amount)
            assert session.score >= 0
        assert session.score == 0

    def test_block_hits_use_score_amounts(self) -> None:
        session, bus, _ = _session(score_amount=10, danger_amount=30)
        _play(session, bus)
        for _ in range(4):
            bus.publish(topics.ENTITY_SCORE_CLICKED, entity=None)
        bus.publish(topics.ENTITY_DANGER_CLICKED, entity=None)
        assert session.score == 10

    def test_set_scores_changes_deltas(self) -> None:
        session, bus, log = _session()
        session.set_scores(score_amount=3, danger_amount=1)
        assert (topics.SESSION_SCORES, {"score_amount": 3, "danger_amount": 1}) in log
        _play(session, bus)
        bus.publish(topics.ENTITY_SCORE_CLICKED, entity=None)
        bus.publish(topics.ENTITY_DANGER_CLICKED, entity=None)
        assert session.score == 2

    def test_set_scores_rejects_negative(self) -> None:
        session, _, _ = _session()
        with pytest.raises(ValueError):
            session.set_scores(-1, 0)

    def test_score_ignored_outside_play(self) -> None:
        session, bus, _ = _session()
        bus.publish(topics.SCORE_INCREASE, amount=10)
        assert session.score == 0
        _play(session, bus)
        session.request_pause()
        bus.publish(topics.SCORE_INCREASE, amount=10)
        assert session.score == 0
