from services.celebration import CelebrationThrottle


def test_cooldown_ignores_repeat_triggers(clock):
    throttle = CelebrationThrottle(cooldown=2.6, clock=clock)

    assert throttle.trigger("goal") is True
    clock.advance(1.0)
    assert throttle.trigger("goal") is False
    assert throttle.is_locked("goal")

    clock.advance(1.6)
    assert throttle.trigger("goal") is True


def test_reasons_are_independent(clock):
    throttle = CelebrationThrottle(cooldown=2.6, clock=clock)

    assert throttle.trigger("goal") is True
    assert throttle.trigger("streak") is True
    assert throttle.trigger("goal") is False


def test_reset(clock):
    throttle = CelebrationThrottle(cooldown=10, clock=clock)
    throttle.trigger()
    throttle.reset()
    assert throttle.trigger() is True


def test_default_cooldown_from_config():
    from config import config
    assert CelebrationThrottle().cooldown == config.tracker.celebration_cooldown
