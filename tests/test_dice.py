import pytest

from mcp_dice_notation.config import DEFAULT_OPTIONS, DiceOptions
from mcp_dice_notation.dice import DiceRoller, execute, roll_from_text
from mcp_dice_notation.errors import ThrottleExceeded
from mcp_dice_notation.models import ParsedCommand, ThrottleLimits


def test_execute_pipeline(fours):
    result = execute("2x(3d6+1)", rng=fours)

    assert result.command == "2x(3d6+1)"
    assert result.parsed == ParsedCommand(times=3, faces=6, modifier=1, repeat=2)
    assert [o.total for o in result.outcomes] == [13, 13]
    assert result.text == "The result of 2x(3d6+1) is ([ 4 + 4 + 4 ] + 1) + ([ 4 + 4 + 4 ] + 1) = 26"


@pytest.mark.parametrize("command", ["", "  ", None])
def test_blank_command_uses_configured_default(command, fours):
    result = execute(command, options=DiceOptions(command="2d10"), rng=fours)

    assert result.command == "2d10"
    assert result.parsed == ParsedCommand(times=2, faces=10)
    assert result.total == 8


def test_blank_command_without_options_rolls_d20(fours):
    result = execute("", rng=fours)
    assert result.command == "d20"
    assert result.text == "The result of d20 is [ 4 ] = 4"


def test_throttle_runs_before_rolling():
    class ExplodingRandom:
        def randint(self, a, b):
            raise AssertionError("rolled before throttling")

        def sample(self, population, k):
            raise AssertionError("rolled before throttling")

    with pytest.raises(ThrottleExceeded) as exc:
        execute("d150", rng=ExplodingRandom())
    assert exc.value.field == "faces"


def test_custom_options_do_not_leak_into_defaults(fours):
    before = DEFAULT_OPTIONS
    roller = DiceRoller(rng=fours).with_options(command="3d4", throttles={"faces": 6})

    assert roller.execute().command == "3d4"
    with pytest.raises(ThrottleExceeded):
        roller.execute("d8")

    assert DEFAULT_OPTIONS == before
    assert DEFAULT_OPTIONS.command == "d20"
    assert DEFAULT_OPTIONS.throttles.faces == 100
    assert DiceRoller(rng=fours).execute("d8").total == 4


def test_roller_parse_format_and_throttle():
    roller = DiceRoller(DiceOptions(command="4d6-L", throttles=ThrottleLimits(repeat=2)))

    assert roller.parse("") == ParsedCommand(times=4, faces=6, lowest=True)
    assert roller.format(None) == "4d6-L"
    assert roller.format(roller.parse("3x(d4)")) == "3x(1d4)"
    with pytest.raises(ThrottleExceeded):
        roller.throttle(roller.parse("3x(d4)"))
    roller.throttle(roller.parse("3x(d4)"), ThrottleLimits(repeat=3))


def test_roll_from_text_payload(fours):
    payload = roll_from_text("3d6", rng=fours)

    assert payload["command"] == "3d6"
    assert payload["total"] == 12
    assert payload["text"] == "The result of 3d6 is [ 4 + 4 + 4 ] = 12"
    assert len(payload["request_id"]) == 32
    assert payload["timestamp"].endswith("Z")
    assert "source" in payload["rng"]


def test_roll_from_text_with_system_random():
    payload = roll_from_text("4d6")
    assert all(1 <= r <= 6 for r in payload["outcomes"][0]["rolls"])
    assert payload["rng"]["source"] == "random.SystemRandom"
