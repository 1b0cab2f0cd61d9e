# formkit

Building blocks for describing form fields and the services that serve them:

- **Widget descriptions** for selects, checkboxes, radios, date/time pickers,
  text inputs, colour pickers, numbers, switches and file uploads. Most of
  them can work out their defaults and check a submitted value, raising
  `ValueError` when it does not fit.
- **Trace-aware logging** on top of the standard `logging` module, writing
  JSON lines to a size-rotated file, or readable coloured lines to the file
  and to standard output in development mode.
- **A WSGI middleware** that gives every request a trace id.

The package has no runtime dependencies.

## Installation

```
pip install formkit
```

## Options and selects (`formkit.options`)

Options are written as `value(label)` pairs separated by commas; an item
without parentheses is both value and label.

```python
from formkit.options import parse_options, format_options, SelectWidget

options = parse_options("low(低),medium(中),high(高)")
options[0].value, options[0].label      # ("low", "低")
format_options(options)                 # "low(低),medium(中),high(高)"

widget = SelectWidget(options="active(启用),inactive(禁用)", default_value="active(启用)")
widget.default()                        # "active(启用)"
widget.validate("inactive(禁用)")        # returned unchanged
```

An entry is accepted either in full `value(label)` form or by its bare
value. With `multiple=True`, `SelectWidget.validate` takes a comma-separated
list and checks every entry.

## Checkboxes and radios (`formkit.choices`)

```python
from formkit.choices import CheckboxWidget, RadioWidget, Direction

permissions = CheckboxWidget(
    options="read(读取),write(写入),delete(删除)",
    default_value="read,write",
    direction=Direction.VERTICAL,
    multiple_limit=2,
)
permissions.default_values()            # ["read", "write"]
permissions.validate(["read", "read"])  # ["read"]

gender = RadioWidget(options="male(男),female(女)", direction=Direction.HORIZONTAL)
gender.validate("male(男)")              # "male"
gender.validate("")                     # "" (no choice)
```

Both return option values, not labels. `CheckboxWidget.validate` drops
duplicates, keeps order and enforces `multiple_limit` (0 means no limit).

## Dates (`formkit.dates`)

```python
from formkit.dates import DateTimeWidget, DateTimeFormat, normalize_datetime

picker = DateTimeWidget(format=DateTimeFormat.DATERANGE)
picker.is_range()                       # True
picker.display_format()                 # "YYYY-MM-DD"
normalize_datetime("2025-06")           # "2025-06-01 00:00:00"
```

`normalize_datetime` accepts a year, year-month, date or full date-time.

## Text inputs (`formkit.inputs`)

```python
from formkit.inputs import InputWidget, InputMode, parse_mode

parse_mode("text_area")                 # InputMode.TEXT_AREA
parse_mode("")                          # InputMode.LINE_TEXT
InputWidget(mode="password", placeholder="请输入密码").mode   # InputMode.PASSWORD
```

## Colours (`formkit.colors`)

```python
from formkit.colors import ColorWidget, ColorFormat, is_valid_color

is_valid_color("#409EFF", ColorFormat.HEX)               # True
is_valid_color("rgba(64,158,255,0.8)", "rgba")           # True

widget = ColorWidget(format="hex", predefine="#000000,#333333")
widget.predefined()                     # ["#000000", "#333333"]
widget.validate("#FFF")
```

Supported notations are `hex`, `rgb`, `rgba`, `hsl` and `hsla`. An empty
value passes `ColorWidget.validate` only when `allow_empty=True`.

## Numbers (`formkit.numbers`)

```python
from formkit.numbers import NumberWidget, parse_range

price = NumberWidget(min=0, step=0.01, precision=2, unit="元")
price.validate(19.99)
price.format(5)                         # "5.00元"
parse_range("1000-5000", "-")           # (1000.0, 5000.0)
```

Bounds, step and precision left as `None` are not enforced; steps are
counted from `min`, or from zero when `min` is not set.

## Switches (`formkit.switches`)

```python
from formkit.switches import SwitchWidget

switch = SwitchWidget(true_label="公开", false_label="私有", default_value="false")
switch.label(True)                      # "公开"
switch.label("false")                   # "私有"
```

Labels default to `开启` and `关闭`.

## Uploads (`formkit.uploads`)

```python
from formkit.uploads import FileWidget, parse_size

parse_size("10MB")                      # 10485760
docs = FileWidget(accept=".pdf,.doc,image/*", max_size="10MB", max_count=5)
docs.accepts("report.pdf")              # True
docs.validate([("report.pdf", 2048), ("photo.png", 4096, "image/png")])
```

Sizes use binary units. `accept` lists extensions, MIME types and
`type/*` wildcards; an empty `accept` or `*` accepts everything.

## Logging (`formkit.logger`)

```python
from formkit import logger

logger.init(logger.LogConfig(filename="logs/app.log", level="info", is_dev=True))
ctx = logger.with_context({}, "20240115143025-abc")
logger.info(ctx, "order saved", order_id=42)
logger.infof(ctx, "processed %d rows", 150)
logger.error(ctx, "save failed", ValueError("bad input"), table="orders")
logger.with_fields(component="import").warning("slow batch")
logger.sync()
```

- Contexts are plain mappings; the trace id lives under `"trace_id"` and is
  added to every entry that has one. `extract_trace_id` returns `"unknown"`
  when it is missing.
- `LogConfig` sets the level (`debug`, `info`, `warn`, `error`; anything
  else means `info`), the file, its rotation size in megabytes (default
  100), how many backups and how many days of backups to keep, and whether
  backups are gzipped.
- The `*f` functions format with `%` and put the text in a `msg` field.
- `fatal` and `fatalf` log, flush and then raise `SystemExit(1)`.

## Trace ids for WSGI applications (`formkit.middleware`)

```python
from formkit.middleware import TraceIdMiddleware, new_trace_id

app = TraceIdMiddleware(app)            # header "X-Trace-Id", environ key "trace_id"
new_trace_id()                          # e.g. "20240115143025-<uuid4>"
```

A request that arrives without the header gets a new id, made of a
timestamp and a random UUID; it is written into the request header
(`HTTP_X_TRACE_ID` in the environ) and stored in the environ under the
context key. An id sent by the client is left as it is.

## What the package does not do

It describes widgets and checks values; it does not render forms, serve
HTTP, or store data. It does not parse callback tags such as
`OnInputFuzzy(delay:300,min:2)`. Widgets not listed above (sliders, rating,
counters, multi-selects with remote search) have no classes here.

## Running the tests

```
pip install -e ".[test]"
pytest
```