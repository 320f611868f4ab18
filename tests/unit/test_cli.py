from __future__ import annotations

import io

import chi.cli as cli_mod
from chi import __version__

_COLORED = b"A\x1b[31mB\x1b[0m\n"


class _FakePolicy:
    created = []

    def __init__(self, enabled: bool):
        self.enabled = enabled
        self.installed = False
        _FakePolicy.created.append(self)

    def install(self) -> None:
        self.installed = True


def _run(argv, data: bytes = b""):
    stdin = io.BytesIO(data)
    stdout = io.BytesIO()
    rc = cli_mod.main(argv, stdin=stdin, stdout=stdout, policy_factory=_FakePolicy)
    return rc, stdin, stdout


# This test checks the main example: colored stdout, plain care file.
def test_cli__care_file_gets_plain_text(tmp_path):
    out = tmp_path / "plain.txt"
    rc, _, stdout = _run(["-c", str(out)], _COLORED)
    assert rc == 0
    assert stdout.getvalue() == _COLORED
    assert out.read_bytes() == b"AB\n"
    print("\n.✅test_cli__care_file_gets_plain_text passed")


# This test checks bare, care and append targets in one run.
def test_cli__mixed_targets(tmp_path):
    bare = tmp_path / "bare.txt"
    care = tmp_path / "care.txt"
    appended = tmp_path / "appended.txt"
    appended.write_bytes(b"before\n")
    bare.write_bytes(b"to be truncated\n")

    rc, _, stdout = _run([str(bare), "--care", str(care), "-ac", str(appended)], _COLORED)

    assert rc == 0
    assert stdout.getvalue() == _COLORED
    assert bare.read_bytes() == _COLORED
    assert care.read_bytes() == b"AB\n"
    assert appended.read_bytes() == b"before\nAB\n"
    print("✅test_cli__mixed_targets passed")


# This test checks that no FILE arguments copies to stdout only.
def test_cli__no_files_copies_to_stdout():
    rc, _, stdout = _run([], b"hello\n\x1b[1mworld")
    assert rc == 0
    assert stdout.getvalue() == b"hello\n\x1b[1mworld"
    print("✅test_cli__no_files_copies_to_stdout passed")


# This test checks --help output and exit code.
def test_cli__help(tmp_path):
    out = tmp_path / "never.txt"
    rc, stdin, stdout = _run([str(out), "--help"], b"data\n")
    assert rc == 0
    text = stdout.getvalue().decode()
    assert text.startswith("Usage: chi [OPTIONS] [[FILE_OPTS]... FILE]...")
    assert "--ignore-interrupts" in text and "--care" in text
    assert not out.exists()
    assert stdin.tell() == 0
    print("✅test_cli__help passed")


# This test checks --version output and exit code.
def test_cli__version():
    rc, _, stdout = _run(["--version"])
    assert rc == 0
    assert stdout.getvalue() == f"chi {__version__}\n".encode()
    print("✅test_cli__version passed")


# This test checks that an unknown long option exits 2 and touches no files.
def test_cli__unknown_option_exits_2_no_files(tmp_path):
    out = tmp_path / "out.txt"
    rc, stdin, stdout = _run([str(out), "--frobnicate"], b"data\n")
    assert rc == 2
    assert not out.exists()
    assert stdout.getvalue() == b""
    assert stdin.tell() == 0
    print("✅test_cli__unknown_option_exits_2_no_files passed")


# This test checks that an unknown short option exits 2.
def test_cli__unknown_short_option_exits_2():
    rc, _, _ = _run(["-aq", "x"])
    assert rc == 2
    print("✅test_cli__unknown_short_option_exits_2 passed")


# This test checks that a file in a missing directory exits 1 before reading input.
def test_cli__open_failure_exits_1_before_reading(tmp_path):
    first = tmp_path / "first.txt"
    missing = tmp_path / "no-such-dir" / "out.txt"
    rc, stdin, stdout = _run([str(first), str(missing)], b"data\n")
    assert rc == 1
    assert stdin.tell() == 0
    assert stdout.getvalue() == b""
    assert first.read_bytes() == b""
    print("✅test_cli__open_failure_exits_1_before_reading passed")


# This test checks that the interrupt policy is asked for with the parsed flag.
def test_cli__ignore_interrupts_installs_policy():
    _FakePolicy.created.clear()
    rc, _, _ = _run(["-i"], b"x\n")
    assert rc == 0
    assert [p.enabled for p in _FakePolicy.created] == [True]
    assert _FakePolicy.created[0].installed

    _FakePolicy.created.clear()
    _run([], b"x\n")
    assert [p.enabled for p in _FakePolicy.created] == [False]
    print("✅test_cli__ignore_interrupts_installs_policy passed")


class _BrokenStdout:
    def write(self, data):
        raise BrokenPipeError(32, "Broken pipe")

    def flush(self):
        pass


# This test checks that a stdout write failure exits 1 and the target files are still closed.
def test_cli__stdout_failure_exits_1_and_closes_files(tmp_path, monkeypatch):
    closed = []
    real_close = cli_mod.close_sinks

    def spy_close(sinks):
        closed.extend(sinks)
        return real_close(sinks)

    monkeypatch.setattr(cli_mod, "close_sinks", spy_close)
    out = tmp_path / "out.txt"
    rc = cli_mod.main(
        [str(out)],
        stdin=io.BytesIO(b"a\nb\n"),
        stdout=_BrokenStdout(),
        policy_factory=_FakePolicy,
    )
    assert rc == 1
    assert len(closed) == 1 and closed[0].stream.closed
    print("✅test_cli__stdout_failure_exits_1_and_closes_files passed")


class _BrokenStdin:
    def readline(self):
        raise OSError(5, "Input/output error")


# This test checks that a read failure exits 1.
def test_cli__read_failure_exits_1(tmp_path):
    out = tmp_path / "out.txt"
    rc = cli_mod.main(
        [str(out)], stdin=_BrokenStdin(), stdout=io.BytesIO(), policy_factory=_FakePolicy
    )
    assert rc == 1
    assert out.exists()
    print("✅test_cli__read_failure_exits_1 passed")


# This test checks that two targets with the same path are both opened and written.
def test_cli__duplicate_path_written(tmp_path):
    out = tmp_path / "dup.txt"
    rc, _, _ = _run([str(out), "-a", str(out)], b"x\n")
    assert rc == 0
    # truncating handle flushes first, then the appending one lands at the end
    assert out.read_bytes() == b"x\nx\n"
    print("✅test_cli__duplicate_path_written passed")


class _BrokenPipeStdout:
    def write(self, data):
        raise BrokenPipeError(32, "Broken pipe")

    def flush(self):
        raise BrokenPipeError(32, "Broken pipe")


# This test checks that --help/--version into a closed pipe still exit 0 without raising.
def test_cli__help_and_version_into_broken_pipe_exit_0():
    for flag in ("--help", "--version"):
        rc = cli_mod.main(
            [flag], stdin=io.BytesIO(), stdout=_BrokenPipeStdout(), policy_factory=_FakePolicy
        )
        assert rc == 0
    print("✅test_cli__help_and_version_into_broken_pipe_exit_0 passed")


# This test checks that an empty FILE name is an open failure (exit 1), not a usage error.
def test_cli__empty_file_name_exits_1(tmp_path):
    rc, stdin, stdout = _run([""], b"x\n")
    assert rc == 1
    assert stdin.tell() == 0
    assert stdout.getvalue() == b""
    print("✅test_cli__empty_file_name_exits_1 passed")
