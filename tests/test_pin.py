import pytest

from airmirror.pin import render_pin


def rows(image):
    return image.split("\n")[1:9]


def test_frame_and_row_count():
    image = render_pin("1234", 10, 3)
    assert image.startswith("\n")
    assert image.endswith("\n\n")
    assert len(image.split("\n")) == 11


def test_row_width():
    for row in rows(render_pin("1234", 10, 3)):
        assert len(row) == 10 + 4 * (10 + 3)


def test_digit_one_top_row():
    assert rows(render_pin("1", 0, 0))[0] == "   d888   "


def test_digit_seven_top_row():
    assert rows(render_pin("7", 0, 0))[0] == "8888888888"


def test_margin_is_leading_spaces():
    plain = rows(render_pin("5", 0, 0))
    indented = rows(render_pin("5", 4, 0))
    assert indented == ["    " + row for row in plain]


def test_digits_concatenate():
    ones = rows(render_pin("1", 0, 2))
    twos = rows(render_pin("2", 0, 2))
    both = rows(render_pin("12", 0, 2))
    assert both == [a + b for a, b in zip(ones, twos)]


def test_leading_zero_kept():
    assert rows(render_pin("05", 0, 0)) == [
        a + b for a, b in zip(rows(render_pin("0", 0, 0)), rows(render_pin("5", 0, 0)))
    ]


@pytest.mark.parametrize("pin", ["12a4", "x", "1.5"])
def test_invalid_pin(pin):
    with pytest.raises(ValueError):
        render_pin(pin, 0, 0)