# cxxreduce

A command-line helper that shrinks a C++ bug case for the `autocxx` binding
generator down to a minimal header. `creduce` does the reduction itself.

Given one or more headers, a run:

1. writes `listing.h` into a fresh temporary directory; it holds one
   `#include "<header>"` line for each header;
2. preprocesses that listing into a single `concat.h`. The preprocessor is
   taken from the `CLANG_PATH` environment variable and falls back to
   `clang++`. It is run as `<compiler> -E -I<dir>... -D<def>... listing.h`;
3. writes `input.rs`. This holds an `include_cpp!` block made of
   `#include "concat.h"` followed by your directives, one per line;
4. runs the generator `autocxx-gen` once on that input. The generator is looked
   for in the same directory as the running script;
5. writes an executable `/bin/sh` interestingness test, `test.sh`. It succeeds
   when your problem string appears in the generator's output. The run calls it
   once and reports its exit code;
6. runs `creduce` with that script on `concat.h`. The pass `pass_line_markers`
   is always removed;
7. prints the minimized header, or copies it to the file you name with `-o`.

The temporary directory is deleted afterwards unless you pass `-k`. With `-k`
its path is printed.

The script is written with `/bin/sh` and Unix file permissions, so the tool is
meant for POSIX systems.

## Installation

```
pip install .
```

## Usage

```
cxxreduce -I my-inc-dir -h my-header.h -d 'generate!("MyClass")' -p 'some error text' -k -- --n 64
```

Options:

- `-I`, `--inc DIR`: include directory (repeatable)
- `-D`, `--define DEF`: macro definition (repeatable)
- `-h`, `--header HEADER`: header file name (repeatable, required)
- `-d`, `--directive DIRECTIVE`: directive placed within `include_cpp!` (repeatable)
- `-p`, `--problem TEXT`: the problem string to look for (required)
- `--creduce PATH`: creduce binary location (default `/usr/bin/creduce`)
- `-o`, `--output FILE`: where to write the minimized header; it is printed if this is omitted
- `-k`, `--keep-dir`: keep the temporary working directory for debugging
- `--help`: show help (`-h` is taken by `--header`)

Everything after `--` is passed straight to `creduce`, after `--remove-pass pass_line_markers`.

If the preprocessor fails, or a file or program cannot be opened or started,
the command prints the error to standard error and exits with status 1.

## Using it from Python

The entry point is `cxxreduce.cli.main(argv=None)`. `cxxreduce.cli.build_parser()`
returns the argument parser, and `cxxreduce.cli.run(args)` carries out a whole
reduction from parsed arguments.

Each step is also available on its own in `cxxreduce.steps`:

- `create_concatenated_header`
- `preprocess`
- `create_rs_file`
- `format_gen_cmd`
- `run_sample_gen_cmd`
- `create_interestingness_test`
- `run_interestingness_test`
- `run_creduce`
- `print_minimized_case`
- `announce_progress`

## Running the tests

```
pip install .[test]
pytest
```