import pytest

from rads.ui2_options import (
    Ui2HorizontalScrollbarSide,
    Ui2HtmlCssDescription,
    Ui2ResizeMode,
    Ui2ScrollbarMode,
    Ui2Size,
    Ui2VerticalScrollbarSide,
    Ui2WindowOptions,
)


def _custom_options():
    return Ui2WindowOptions(
        min_size=Ui2Size(480, 320),
        max_size=Ui2Size(1280, 900),
        resize_mode=Ui2ResizeMode.WIDTH,
        scrollbars=Ui2ScrollbarMode.AUTO,
        vertical_scrollbar_side=Ui2VerticalScrollbarSide.RIGHT,
        horizontal_scrollbar_side=Ui2HorizontalScrollbarSide.TOP,
        hit_test_visible=False,
        preserve_scale=True,
    )


def test_legacy_missing_options_get_defaults():
    options = Ui2WindowOptions.from_dict({})
    assert options.min_size == Ui2Size(320, 240)
    assert options.max_size is None
    assert options.resize_mode is Ui2ResizeMode.BOTH
    assert options.scrollbars is Ui2ScrollbarMode.NONE
    assert options.vertical_scrollbar_side is Ui2VerticalScrollbarSide.LEFT
    assert options.horizontal_scrollbar_side is Ui2HorizontalScrollbarSide.BOTTOM
    assert options.hit_test_visible is True
    assert options.preserve_scale is False
    assert options == Ui2WindowOptions()


def test_legacy_missing_description_gets_defaults():
    description = Ui2HtmlCssDescription.from_dict({})
    assert "ui2-window" in description.html
    assert ".ui2-window" in description.css
    assert description == Ui2HtmlCssDescription()


def test_options_serialize_to_expected_values():
    value = _custom_options().to_dict()
    assert value["min_size"]["width"] == 480
    assert value["max_size"]["height"] == 900
    assert value["resize_mode"] == "width"
    assert value["scrollbars"] == "auto"
    assert value["vertical_scrollbar_side"] == "right"
    assert value["horizontal_scrollbar_side"] == "top"
    assert value["hit_test_visible"] is False
    assert value["preserve_scale"] is True


def test_options_round_trip():
    options = _custom_options()
    assert Ui2WindowOptions.from_dict(options.to_dict()) == options


def test_default_options_serialize_null_max_size():
    assert Ui2WindowOptions().to_dict()["max_size"] is None


def test_description_round_trip():
    description = Ui2HtmlCssDescription(
        html='<main class="custom-window"></main>',
        css=".custom-window { display: grid; }\n",
    )
    value = description.to_dict()
    assert value["html"] == '<main class="custom-window"></main>'
    assert Ui2HtmlCssDescription.from_dict(value) == description


def test_size_partial_dict_defaults_to_zero():
    assert Ui2Size.from_dict({"width": 10}) == Ui2Size(10, 0)
    assert Ui2Size(3, 4).to_dict() == {"width": 3, "height": 4}


def test_enum_option_lists():
    assert Ui2ResizeMode.options() == ["none", "width", "height", "both"]
    assert Ui2ScrollbarMode.options() == ["none", "horizontal", "vertical", "both", "auto"]
    assert Ui2VerticalScrollbarSide.options() == ["left", "right"]
    assert Ui2HorizontalScrollbarSide.options() == ["top", "bottom"]


@pytest.mark.parametrize(
    "mode, horizontal, vertical",
    [
        (Ui2ScrollbarMode.NONE, False, False),
        (Ui2ScrollbarMode.HORIZONTAL, True, False),
        (Ui2ScrollbarMode.VERTICAL, False, True),
        (Ui2ScrollbarMode.BOTH, True, True),
        (Ui2ScrollbarMode.AUTO, True, True),
    ],
)
def test_scrollbar_visibility(mode, horizontal, vertical):
    assert mode.horizontal_visible() is horizontal
    assert mode.vertical_visible() is vertical


def test_vui2_variants():
    assert Ui2VerticalScrollbarSide.LEFT.vui2_variant() == "Left"
    assert Ui2VerticalScrollbarSide.RIGHT.vui2_variant() == "Right"
    assert Ui2HorizontalScrollbarSide.TOP.vui2_variant() == "Top"
    assert Ui2HorizontalScrollbarSide.BOTTOM.vui2_variant() == "Bottom"


def test_invalid_enum_value_is_rejected():
    with pytest.raises(ValueError):
        Ui2WindowOptions.from_dict({"resize_mode": "diagonal"})