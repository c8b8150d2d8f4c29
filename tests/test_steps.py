import stat
import subprocess
import sys
from pathlib import Path

import pytest

from cxxreduce import steps


def _script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(0o755)
    return path


@pytest.fixture
def fake_self(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "cxxreduce")])
    return tmp_path


def test_announce_progress(capsys):
    steps.announce_progress("creduce")
    assert capsys.readouterr().out == "=== creduce ===\n"


def test_create_concatenated_header(tmp_path):
    listing = tmp_path / "listing.h"
    steps.create_concatenated_header(["a.h", "dir/b.h"], listing)
    assert listing.read_text() == '#include "a.h"\n#include "dir/b.h"\n'


def test_create_concatenated_header_empty(tmp_path):
    listing = tmp_path / "listing.h"
    steps.create_concatenated_header([], listing)
    assert listing.read_text() == ""


def test_create_rs_file(tmp_path):
    rs = tmp_path / "input.rs"
    steps.create_rs_file(rs, ['#include "concat.h"\n', 'generate!("MyClass")\n'])
    assert rs.read_text() == (
        "use autocxx::include_cpp;\ninclude_cpp! (\n"
        '#include "concat.h"\ngenerate!("MyClass")\n);\n'
    )


def test_format_gen_cmd(fake_self):
    gen, args = steps.format_gen_cmd(Path("/x/input.rs"), "/work")
    assert gen == fake_self.resolve() / "autocxx-gen"
    assert args == ["-o", "/work", "-I", "/work", "/x/input.rs", "--gen-rs-complete"]


def test_preprocess_passes_flags(tmp_path, monkeypatch):
    fake = _script(tmp_path / "fakecpp", 'echo "$@"\n')
    monkeypatch.setenv("CLANG_PATH", str(fake))
    listing = tmp_path / "listing.h"
    concat = tmp_path / "concat.h"
    steps.preprocess(listing, concat, [Path("inc")], ["FOO=1"])
    assert concat.read_text().split() == ["-E", "-Iinc", "-DFOO=1", str(listing)]


def test_preprocess_failure_raises(tmp_path, monkeypatch):
    fake = _script(tmp_path / "fakecpp", "exit 2\n")
    monkeypatch.setenv("CLANG_PATH", str(fake))
    with pytest.raises(subprocess.CalledProcessError):
        steps.preprocess(tmp_path / "l.h", tmp_path / "c.h", [], [])


def test_run_sample_gen_cmd(fake_self):
    _script(fake_self / "autocxx-gen", 'echo "$@" > "$2/args.txt"\n')
    work = fake_self / "work"
    work.mkdir()
    status = steps.run_sample_gen_cmd(Path("input.rs"), work)
    assert status == 0
    assert (work / "args.txt").read_text().split() == [
        "-o", str(work), "-I", str(work), "input.rs", "--gen-rs-complete",
    ]


def test_run_sample_gen_cmd_missing_generator(fake_self):
    with pytest.raises(OSError):
        steps.run_sample_gen_cmd(Path("input.rs"), fake_self)


def test_interestingness_test_script(fake_self, capsys):
    test_path = fake_self / "test.sh"
    steps.create_interestingness_test(test_path, "boom", Path("input.rs"))
    content = test_path.read_text()
    assert content.startswith("#!/bin/sh\n")
    assert 'grep "boom"' in content
    assert "-o $(pwd) -I $(pwd) input.rs --gen-rs-complete" in content
    assert stat.S_IMODE(test_path.stat().st_mode) == 0o700
    assert content in capsys.readouterr().out


@pytest.mark.parametrize("problem, expected", [("boom", 0), ("absent", 1)])
def test_interestingness_test_detects_problem(fake_self, problem, expected):
    _script(fake_self / "autocxx-gen", "echo boom happened\n")
    test_path = fake_self / "test.sh"
    steps.create_interestingness_test(test_path, problem, Path("input.rs"))
    assert steps.run_interestingness_test(test_path) == expected


def test_run_interestingness_test_reports_code(tmp_path, capsys):
    script = _script(tmp_path / "t.sh", "exit 3\n")
    assert steps.run_interestingness_test(script) == 3
    assert "result is 3" in capsys.readouterr().out


def test_run_creduce_arguments(tmp_path):
    record = tmp_path / "record.txt"
    fake = _script(tmp_path / "creduce", f'echo "$@" > "{record}"\n')
    status = steps.run_creduce(
        str(fake), tmp_path / "test.sh", tmp_path / "concat.h", ["--n", "64"]
    )
    assert status == 0
    assert record.read_text().split() == [
        str(tmp_path / "test.sh"),
        str(tmp_path / "concat.h"),
        "--remove-pass",
        "pass_line_markers",
        "--n",
        "64",
    ]


def test_run_creduce_missing_binary(tmp_path):
    with pytest.raises(OSError):
        steps.run_creduce(str(tmp_path / "nope"), tmp_path / "t", tmp_path / "c", [])


def test_print_minimized_case(tmp_path, capsys):
    concat = tmp_path / "concat.h"
    concat.write_text("struct A {};")
    steps.print_minimized_case(concat)
    assert capsys.readouterr().out == (
        "=== Completed. Minimized test case: ===\nstruct A {};\n"
    )