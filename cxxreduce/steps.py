"""Individual steps of a C++ test-case reduction run."""

from __future__ import annotations

import os
import stat
import subprocess
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

# Always passed to creduce: this pass reliably crashes, so it is excluded.
CREDUCE_STANDARD_ARGS: tuple[str, ...] = ("--remove-pass", "pass_line_markers")

GEN_COMMAND_NAME = "autocxx-gen"
PREPROCESSOR_ENV = "CLANG_PATH"
DEFAULT_PREPROCESSOR = "clang++"


def announce_progress(msg: str) -> None:
    """Print a progress banner."""
    print(f"=== {msg} ===")


def create_concatenated_header(headers: Iterable[str], listing_path: Path) -> None:
    """Write a header that includes every given header in order."""
    announce_progress("Creating preprocessed header")
    Path(listing_path).write_text("".join(f'#include "{header}"\n' for header in headers))


def preprocess(
    listing_path: Path,
    concat_path: Path,
    incs: Iterable[Path],
    defs: Iterable[str],
) -> None:
    """Run the C++ preprocessor over ``listing_path`` into ``concat_path``.

    The preprocessor is taken from the ``CLANG_PATH`` environment variable,
    falling back to ``clang++``. Raises ``subprocess.CalledProcessError``
    if it fails and ``OSError`` if it cannot be started.
    """
    compiler = os.environ.get(PREPROCESSOR_ENV, DEFAULT_PREPROCESSOR)
    cmd = [
        compiler,
        "-E",
        *(f"-I{inc}" for inc in incs),
        *(f"-D{definition}" for definition in defs),
        str(listing_path),
    ]
    with open(concat_path, "w") as out:
        subprocess.run(cmd, stdout=out, check=True)


def create_rs_file(rs_path: Path, directives: Iterable[str]) -> None:
    """Write the Rust input file wrapping the directives in ``include_cpp!``."""
    announce_progress("Creating Rust input file")
    body = "".join(directives)
    Path(rs_path).write_text(f"use autocxx::include_cpp;\ninclude_cpp! (\n{body});\n")


def format_gen_cmd(rs_file: Path, directory: str) -> tuple[Path, list[str]]:
    """Return the code generator path and its arguments for ``rs_file``."""
    me = Path(sys.argv[0]).resolve()
    gen = me.parent / GEN_COMMAND_NAME
    args = ["-o", directory, "-I", directory, str(rs_file), "--gen-rs-complete"]
    return gen, args


def run_sample_gen_cmd(rs_file: Path, tmp_dir: Path) -> int:
    """Run the code generator once on the input and return its exit status."""
    gen_cmd, args = format_gen_cmd(rs_file, str(tmp_dir))
    announce_progress(f"Running sample gen cmd: {gen_cmd} {' '.join(args)}")
    return subprocess.run([str(gen_cmd), *args]).returncode


def create_interestingness_test(test_path: Path, problem: str, rs_file: Path) -> None:
    """Write an executable shell script that succeeds when ``problem`` appears."""
    announce_progress("Creating interestingness test")
    # creduce runs the script in another directory holding a copy of the
    # header, so the generator must look in the current directory.
    gen_cmd, args = format_gen_cmd(rs_file, "$(pwd)")
    content = (
        "#!/bin/sh\n"
        f'{gen_cmd} {" ".join(args)} 2>&1 | grep "{problem}"  >/dev/null 2>&1\n'
    )
    print(f"Interestingness test:\n{content}")
    path = Path(test_path)
    path.write_text(content)
    path.chmod(stat.S_IRWXU)


def run_interestingness_test(test_path: Path) -> int | None:
    """Run the interestingness test; return its exit code, or None if killed."""
    announce_progress("Running interestingness test")
    returncode = subprocess.run([str(test_path)]).returncode
    code = returncode if returncode >= 0 else None
    announce_progress(f"Have run interestingness test - result is {code}")
    return code


def run_creduce(
    creduce_cmd: str,
    interestingness_test: Path,
    concat_path: Path,
    creduce_args: Sequence[str],
) -> int:
    """Run creduce on ``concat_path`` and return its exit status."""
    announce_progress("creduce")
    cmd = [
        creduce_cmd,
        str(interestingness_test),
        str(concat_path),
        *CREDUCE_STANDARD_ARGS,
        *creduce_args,
    ]
    return subprocess.run(cmd).returncode


def print_minimized_case(concat_path: Path) -> None:
    """Print the reduced test case."""
    announce_progress("Completed. Minimized test case:")
    print(Path(concat_path).read_text())