import pytest

from mcp_dice_notation.server import parse_notation, roll_dice


def test_roll_dice_tool():
    out = roll_dice("3d6+2")

    assert out["command"] == "3d6+2"
    assert 5 <= out["total"] <= 20
    assert len(out["outcomes"][0]["rolls"]) == 3
    assert out["verbose"][-1] == f"The result of 3d6+2 is {out['total']}"


def test_roll_dice_blank_uses_default():
    out = roll_dice("")
    assert out["command"] == "d20"
    assert 1 <= out["total"] <= 20


def test_roll_dice_throttle_surfaces_as_value_error():
    with pytest.raises(ValueError) as exc:
        roll_dice("d500")
    assert str(exc.value).startswith("[THROTTLE_EXCEEDED]")


def test_parse_notation_tool():
    out = parse_notation("(2d6+1)x3")

    assert out["parsed"]["repeat"] == 3
    assert out["parsed"]["modifier"] == 1
    assert out["normalized_expression"] == "3x(2d6+1)"
