# brewdock

Building blocks for the front end of a Homebrew bottle installer. It uses
only the Python standard library and supports Python 3.10 and later.

- `brewdock.layout`: `Layout`, the Homebrew-compatible directory layout.
  The production prefix is `/opt/homebrew`. `Layout.with_root` puts it under
  any directory you choose.
- `brewdock.lock`: `FileLock`, an exclusive advisory file lock.
- `brewdock.errors`: `BrewdockError` and its platform, formula, bottle,
  cellar and source-build subclasses.
- `brewdock.hint`: `for_error`, which gives a short user-facing hint for an
  error.
- `brewdock.trace`: logging set-up. It can write JSON-lines benchmark output.
- `brewdock.models` and `brewdock.output`: records for plans, formula info,
  installed kegs, outdated entries, cleanup results and diagnostics, and the
  plain-text renderers for each of them.
- `brewdock.progress`: progress events, a renderer for them and a no-op sink.
- `brewdock.verbosity`: the `Verbosity` enum (`VERBOSE`, `NORMAL`, `QUIET`).
- `brewdock.cli`: the argument parser for the `bd` command line.

## What it does not do

The package does not install, upgrade, download, search or clean anything.
It has no formula index, no bottle downloader, no cellar or linking code and
no engine that carries out a plan. It also installs no `bd` executable.
`brewdock.cli` parses a command line into a `Cli` record. `brewdock.output`
renders results that some other code has to produce.

## Layout

```python
from brewdock.layout import Layout

layout = Layout.with_root("/tmp/sandbox")
layout.prefix        # /tmp/sandbox/opt/homebrew
layout.cellar()      # .../Cellar
layout.opt_dir()     # .../opt
layout.bin_dir()     # .../bin
layout.cache_dir()   # .../var/brewdock/cache
layout.blob_dir()    # .../var/brewdock/blobs
layout.store_dir()   # .../var/brewdock/store
layout.lock_dir()    # .../var/brewdock/locks

Layout.production().prefix  # /opt/homebrew
```

## Locking

`FileLock.acquire` creates the lock file and its parent directories. It then
blocks until no other holder has the lock. You release the lock with
`release()`, by leaving a `with` block, or when the object is garbage
collected. Calling `release()` a second time does nothing.

```python
from brewdock.lock import FileLock

with FileLock.acquire(layout.lock_dir() / "install.lock"):
    ...  # work on the prefix
```

## Errors and hints

`for_error` looks at the error and then along its `__cause__` and
`__context__` chain for a `BrewdockError`. It returns the hint for the first
one it finds, or `None`.

```python
from brewdock.errors import FormulaNotFoundError
from brewdock.hint import for_error

try:
    raise FormulaNotFoundError("missing")
except Exception as err:
    for_error(err)  # "run `bd update` to refresh the formula index"
```

| Error | Hint |
|---|---|
| `FormulaNotFoundError` | refresh the formula index |
| `ChecksumMismatchError` | refresh the formula index, then retry |
| `FormulaUnsupportedError` | the formula cannot be installed as a bottle |
| `FormulaNetworkError`, `BottleDownloadError` | check the internet connection |
| `BottleAuthError` | registry authentication failed; check the connection |
| any `PlatformError` | only macOS is supported |

Every other error gives `None`.

## Logging

`init_tracing(verbosity)` configures the `brewdock` logger once.

- The level is DEBUG, INFO or ERROR according to the verbosity.
- The `BREWDOCK_LOG` environment variable overrides the level. It takes
  `trace`, `debug`, `info`, `warn`, `warning` or `error`.
- When `BREWDOCK_BENCHMARK_FILE` is set and not empty, records are appended
  to that file as JSON lines. Otherwise they are discarded.

`benchmark_logger(stream)` returns a standalone JSON-lines logger.
`phase_span(logger, operation, phase, target)` is a context manager. When the
block ends it logs a `close` record carrying `time.busy` and `time.idle`.

## Output

```python
from brewdock.models import CleanupResult
from brewdock.output import format_bytes, render_cleanup, render_search_results

print(render_search_results("jq", ["jq", "jq-lsp"]), end="")
print(render_cleanup(CleanupResult(blobs_removed=3, stores_removed=1, bytes_freed=1536), dry_run=True), end="")
format_bytes(1536)  # "1.5 KiB"
```

The other renderers are:

- `render_install_plan`
- `render_install_summary`
- `render_update_dry_run`
- `render_update_summary`
- `render_upgrade_plan`
- `render_upgrade_summary`
- `render_info`
- `render_list`
- `render_outdated`
- `render_doctor`

In a plan, an install method shows as `bottle:<tag>` or `source`.

## Progress

`progress_sink(verbosity)` picks the sink:

- **Quiet**: a `NoopProgressSink`.
- **Otherwise**: a `ProgressRenderer` writing to standard error. It draws a
  live spinner status line on a terminal and prints plain lines everywhere
  else.

Feed events such as `OperationStarted`, `PhaseStarted`, `FormulaCompleted`
and `ProgressWarning` to the sink's `emit`.

## Parsing command lines

```python
from brewdock.cli import Command, parse_args

cli = parse_args(["--verbose", "install", "jq", "wget"])
cli.command      # Command.INSTALL
cli.formulae     # ("jq", "wget")
cli.verbosity()  # Verbosity.VERBOSE
```

The subcommands are:

- `install`: needs at least one formula.
- `update`
- `upgrade`
- `outdated`
- `search`: needs a pattern.
- `info`: needs a formula name.
- `list`
- `cleanup`
- `doctor`

The flags `--dry-run`, `--verbose` and `--quiet` may go before or after the
subcommand. `--verbose` and `--quiet` cannot be combined. Invalid usage
raises `SystemExit` with status 2.

## Tests

The tests use pytest and live in `tests/`. Install the `test` extra to get
what they need.