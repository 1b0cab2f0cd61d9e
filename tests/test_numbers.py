import pytest

from formkit.numbers import NumberWidget, parse_range


def test_age_in_range_is_returned():
    widget = NumberWidget(min=1, max=150, step=1, unit="岁")
    assert widget.validate(25) == 25


@pytest.mark.parametrize("value", [0, 151, -3])
def test_age_out_of_range(value):
    widget = NumberWidget(min=1, max=150, step=1)
    with pytest.raises(ValueError):
        widget.validate(value)


def test_bounds_inclusive():
    widget = NumberWidget(min=0, max=100, step=0.1, precision=1)
    assert widget.validate(0) == 0
    assert widget.validate(100) == 100


def test_step_enforced():
    widget = NumberWidget(min=1, max=150, step=1)
    with pytest.raises(ValueError):
        widget.validate(2.5)


def test_decimal_step_accepted():
    widget = NumberWidget(min=0, step=0.01, precision=2, unit="元")
    assert widget.validate(1299.99) == 1299.99


def test_precision_enforced():
    widget = NumberWidget(min=0, step=0.01, precision=2)
    with pytest.raises(ValueError):
        widget.validate(12.345)


def test_step_counted_from_min():
    widget = NumberWidget(min=1, max=10, step=2)
    assert widget.validate(7) == 7
    with pytest.raises(ValueError):
        widget.validate(6)


def test_unbounded_widget_accepts_anything_numeric():
    widget = NumberWidget()
    assert widget.validate(-1e9) == -1e9


@pytest.mark.parametrize("value", ["5", None, True])
def test_non_numbers_rejected(value):
    with pytest.raises(TypeError):
        NumberWidget().validate(value)


def test_invalid_configuration():
    with pytest.raises(ValueError):
        NumberWidget(min=10, max=1)
    with pytest.raises(ValueError):
        NumberWidget(step=0)
    with pytest.raises(ValueError):
        NumberWidget(precision=-1)


def test_format_with_precision_and_unit():
    widget = NumberWidget(min=0, step=0.01, precision=2, unit="元")
    assert widget.format(12.5) == "12.50元"


def test_format_without_precision_keeps_value():
    widget = NumberWidget(unit="kg")
    assert widget.format(8000) == "8000kg"
    assert float(widget.format(85.5)[:-2]) == 85.5


def test_parse_range_with_dash_separator():
    assert parse_range("1000-5000", "-") == (1000.0, 5000.0)


def test_parse_range_default_separator():
    low, high = parse_range("1000,5000")
    assert (low, high) == (1000.0, 5000.0)
    assert low <= high


@pytest.mark.parametrize("text", ["5000,1000", "1000", "1,2,3", ",5", "a,b"])
def test_parse_range_errors(text):
    with pytest.raises(ValueError):
        parse_range(text)


def test_parse_range_empty_separator():
    with pytest.raises(ValueError):
        parse_range("1,2", "")