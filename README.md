# bootil

A collection of everyday building blocks for Python programs. It is a
library only: it installs no command.

## Modules

- `bootil.base` – `startup()`, `shutdown()` and `is_shutting_down()` for a
  process-wide shutdown flag; `clamp(value, minimum, maximum)`;
  `remove_all(items, value)`; and `Timer`, whose `seconds()` gives the time
  since it was created or last `reset(offset)`.
- `bootil.tree` – `Tree`, a node with a `name`, a text `value` and an ordered
  list of `children`. Leaves hold typed values (`VarKind.STRING`, `INT`,
  `FLOAT`, `DOUBLE`, `BOOL`) stored as text: `set_var`, `var(kind)`,
  `is_var(kind)`, `set_child`, `set_child_var`, `child_value`, `child_var`,
  `get_child` (creates the child if missing), `get_child_num` and more.
- `bootil.json_io` – `to_json(tree, pretty=False)` and
  `from_json(text, tree=None)`. A node whose children are all unnamed becomes
  a JSON array, otherwise an object (unnamed children get keys `_1_`, `_2_`,
  …). Pretty output is indented with tabs. On import numbers become double
  values, nulls are skipped, and invalid JSON or a scalar root raises
  `ValueError`.
- `bootil.console` – `ConsoleColor`, foreground/background colour stacks
  (`fg_color_push`, `fg_color_pop`, `bg_color_push`, `bg_color_pop`, and the
  `colors(fg, bg)` context manager), cursor position stacks (`pos_push`,
  `pos_push_relative`, `pos_pop`), `cls()`, `set_cursor_visible()`,
  `wait_for_key()` and `msg(fg, bg, text)`. Colour and cursor control
  sequences are written only when standard output is a terminal.
- `bootil.console_input` – `LineEditor`, a one-line editor fed with
  `feed_char`, `on_left`, `on_right`, `on_backspace` and `on_return`;
  finished lines are queued and returned by `get_line()`. Give it a
  `read_key` function returning one character (or `''` when none is waiting)
  and `get_line()` polls it. Module-level `get_line()`, `flush()` and
  friends use a default editor with no key reader.
- `bootil.debug` – `output_msg`, `output_warning` and `output_error` (which
  records `last_error()` and raises `SystemExit(0)`); `Listener` objects
  added with `add_listener` receive every message, warning and error;
  `do_assert`, `popup_message`, `suppress_popups`,
  `set_minidump_function`, `do_crash` (raises `SystemExit(-1)`), and
  `InstanceCounter` for reporting unreleased objects.
- `bootil.platform` – program name and folder, current user, working
  directory, temporary folder and file names, `wildcard_match(pattern, text)`
  with `*` and `?`, `find_files(pattern, up_folders)`, `start_process`,
  `open_webpage`, `sleep(ms)`, `get_milliseconds()`, `platform_name()`,
  `architecture()`, `is_key_pressed()` and more.
- `bootil.files` – `read_bytes`, `read_text`, `write_bytes`, `write_text`,
  `append`, `copy`, `exists`, `size`, `crc` (CRC-32), `is_folder`,
  `create_folder`, `remove_folder`, `remove_file`, `find`,
  `get_files_in_folder`, `get_temp_dir`, `get_temp_filename`, and
  `FileSystem`, a list of base folders each kept with one trailing slash.
- `bootil.changes` – `ChangeMonitor`: `watch_folder(folder, watch_subtree)`,
  then call `has_changes()` regularly and take paths relative to the folder
  from `get_change()`. It works by comparing folder listings between calls.
- `bootil.threads` – `Mutex` (also a context manager), `MutexVar`, and
  `Thread`, which runs `run()` (or a `target`) in the background with
  `start_in_thread()`, `join()`, `running()` and a `wants_to_close()` flag;
  `current_thread_id()`.
- `bootil.netsocket` – a non-blocking TCP `Socket` (`init_as_listener`,
  `accept`, `connect`, `wait_for_connection`, `write_data`, `cycle`,
  `buffer`, `close`) and the helpers `ip_to_string` and `string_to_ip`.
- `bootil.router` – `Router`, which frames messages as size, message id,
  reply id, type and data on a socket, calls handlers set with
  `set_handler(msg_type, handler)` and one-shot handlers set with
  `reply_handler(reply_to, handler)`; `write_message` returns the new
  message id. Handlers receive a `Message`.
- `bootil.http_query` – `Query`, a `Thread` that sends an HTTP request
  (`set_url`, `set_method`, multipart `set_post_var` and `set_post_file`)
  and collects the body in `response`; `errored` and `error_string` report
  failures.
- `bootil.image` – `jpeg_load`, `png_load` (both to 8-bit RGB
  `ImageFormat`) and `jpeg_save(image, quality=85)`, using Pillow.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from bootil.tree import Tree, VarKind
from bootil.json_io import to_json, from_json

tree = Tree()
tree.set_child("name", "example")
tree.set_child_var("count", 3)
settings = tree.add_child("settings")
settings.set_child_var("enabled", True)

text = to_json(tree)          # {"name":"example","count":3,"settings":{"enabled":true}}

copy = from_json(text)
print(copy.child_value("name"))               # example
print(copy.get_child("count").var(VarKind.INT))  # 3
```

## What it does not do

- There are no dialog boxes: popups from `bootil.debug` and
  `bootil.platform.popup` are written to the `bootil` logger.
- `desktop_width()` and `desktop_height()` always return 800 and 600, and
  `setup_association()` only logs; no file association is registered.
- `Query` speaks plain HTTP only, not HTTPS.
- `bootil.image` saves JPEG only; PNG images can be loaded but not saved.
- `ChangeMonitor` only sees subfolders that existed when watching began.