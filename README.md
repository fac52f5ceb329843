# sharedkit

Reusable pieces for Python applications: file-backed storage, a small
column-typed data frame, a file cache with expiry, and page fetching with
per-host rate limiting. The package has no dependencies outside the standard
library.

## Modules

### `sharedkit.storage`

- `Storage` – abstract base with `load()` and `save(obj)`.
- `JSONStorage(file_path)` – saves any JSON-serialisable value, indented by two
  spaces, and loads it back.
- `CSVStorage(file_path, row_type)` – saves a list of dataclass instances as CSV
  with a header line and loads them back. A field's column name comes from its
  `csv` metadata (`field(metadata={"csv": "name"})`), else the field name; a
  `csv` value of `"-"` leaves the field out. `int`, `float`, `bool` and `str`
  fields are converted when loading.
- `MockStorage(data=None, save_error=None, load_error=None)` – in-memory store
  that returns `data` or raises the given errors; useful in tests.
- `EventCallableStorageItem` – abstract item with `on_load()` and `on_save()`.
- `StorageEventCaller(sub_store)` – calls each item's `on_save()` before saving
  a list and `on_load()` after loading one.
- `CachedFileStorage(file_path, sub_store)` – returns the last loaded value
  until the file's modification time changes; saving clears the cache.
- Helpers: `check(path)`, `open_file_for_reading(path)`,
  `open_file_for_writing(path)`, `read_bytes_from_file(path)` and
  `write_bytes_to_file(path, data)`. Writing creates missing parent folders;
  reading a missing file raises `FileNotFoundError`.

### `sharedkit.textnum`

- `text_to_float(text)` – the first number in `text` (digits with an optional
  decimal part) at single precision, or `None`.
- `text_to_uint(text)` – the same number truncated to an integer, or `None`.
- `build_regex(*parts)` – joins pattern parts and compiles them.
- Pattern constants such as `NUMBER_REGEX`, `ZERO_OR_WHITE_SPACE`,
  `END_OR_WHITE_SPACE` and `START_WHITE_SPACE_OR_BRACKETS`.

### Data frame: `sharedkit.apptype`, `element`, `elements`, `series`, `dataframe`

- `apptype.Type` enumerates column types; `find_type(values)` picks the type
  that fits a list of strings, and `string_to_time`, `string_to_int`,
  `string_to_float`, `string_to_bool` parse single values strictly.
  `string_to_time` accepts RFC 3339, RFC 822/850/1123, ANSI C, Unix date,
  date-only, time-only and similar layouts.
- `element` holds `StringElement`, `FloatElement`, `BoolElement` and
  `DateTimeElement`, each with `val()`, `to_string()`, `to_float()` and
  comparisons (`eq`, `less`, `greater_eq`, …).
- `series.build_series(name, values)` builds a `Series` from strings, numbers
  (ints become floats), bools or datetimes. A series has `values()`, `sum()`,
  `mean()`, `std_dev()` (sample), `min()`, `max()`, `order(reverse)`,
  `subset(indexes)` and `apply_in_place(delegate)`.
- `dataframe.DataFrame(columns)` keeps equally long, uniquely named series.
  It supports `add_column`, `add_row`, `get`, `get_by_name`, `get_row`,
  `get_column_by_name`, `drop_column(*names)`, `describe()` (count, sum, mean,
  std, min and max per column; `None` for a frame without columns) and
  `render(show_headers, show_types, show_indexes, header_rows, tail_rows, class_name)`.
  `str(df)` shows the first 5 and last 3 rows with headers, types and indexes.

### `sharedkit.dataframe_storage`

`DataFrameStorage(file_path)` saves a data frame as CSV and loads it back,
detecting each column's type (datetime, int, float, bool or string) from its
cells.

### `sharedkit.chartjs`

`df_to_chartjs(df, x_axis_name, y_axes_names)` returns a `ChartJSData` with
one column as labels and others as `ChartJSDataset`s; `to_dict()` gives the
JSON-ready structure, with datetimes as ISO strings.

### `sharedkit.fileinfo` and `sharedkit.filecache`

`FileCache(manifest_path, item_folder_path)` stores bytes under string keys,
each in its own file with a generated name, tracked in a JSON manifest of
`FileInfo` records. It offers `save_file`, `save_file_with_ext`,
`try_load_file`, `try_load_file_with_expire` and `cleanup_expired_items`.
Expiry durations are `timedelta`s; `None` or a negative value never expires.

### `sharedkit.scrapper`

- `Scrapper` – abstract base with `scrap_url(url)` and `clean_up()`.
- `HTTPRequestScrapper` – plain HTTP GET; a status of 300 or above raises
  `RuntimeError`.
- `RateLimitedScrapper(min_time_between_requests, scrapper)` – sleeps so that
  requests to the same host are at least the given `timedelta` apart.
- `CachedScrapper(site_cache, file_ext)` – serves pages from a `FileCache`,
  fetching and storing missing or expired ones. Without `set_scrapper(...)`
  it uses an `HTTPRequestScrapper`.

## Examples

```python
from sharedkit.series import build_series
from sharedkit.dataframe import DataFrame
from sharedkit.dataframe_storage import DataFrameStorage

df = DataFrame([
    build_series("name", ["Alice", "Bob"]),
    build_series("age", [20, 22]),
])
print(df)
print(df.describe())

store = DataFrameStorage("data/people.csv")
store.save(df)
loaded = store.load()
```

```python
from dataclasses import dataclass, field
from sharedkit.storage import CSVStorage, JSONStorage

store = JSONStorage("data/settings.json")
store.save({"theme": "dark"})
assert store.load() == {"theme": "dark"}

@dataclass
class Student:
    name: str = field(metadata={"csv": "name"})
    age: int = field(metadata={"csv": "age"})

students = CSVStorage("data/students.csv", Student)
students.save([Student("Alice", 20)])
assert students.load() == [Student("Alice", 20)]
```

```python
from datetime import timedelta
from sharedkit.filecache import FileCache
from sharedkit.scrapper import CachedScrapper, HTTPRequestScrapper, RateLimitedScrapper

cache = FileCache("cache/manifest.json", "cache/items")
scrapper = CachedScrapper(cache, ".html")
scrapper.set_scrapper(RateLimitedScrapper(timedelta(seconds=1), HTTPRequestScrapper()))
page = scrapper.scrap_url_with_cache("http://localhost:8000/", timedelta(hours=1))
scrapper.clean_up()
```

## What it does not do

- Pages are fetched with plain HTTP requests only; there is no browser-driven
  fetching, so content that a page builds with JavaScript is not seen.
- There is no command-line tool; everything is used as a library.

## Running the tests

```
pip install -e ".[test]"
pytest
```