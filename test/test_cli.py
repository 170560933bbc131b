"""End-to-end tests for the gemmkit command line."""

import logging

import pytest

from gemmkit.cli import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    """Run each test without GEMMKIT_* overrides and with the root logger restored."""
    for name in ("GEMMKIT_BACKEND", "GEMMKIT_LOG_LEVEL", "GEMMKIT_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    level = logging.root.level
    yield
    logging.root.setLevel(level)


@pytest.fixture
def operands(tmp_path):
    """Write the worked example operands to disk and return their paths."""
    lhs = tmp_path / "a.txt"
    rhs = tmp_path / "b.txt"
    lhs.write_text("1 2\n3 4\n")
    rhs.write_text("5 6\n\n7 8\n")
    return str(lhs), str(rhs)


class TestMain:
    """Tests for main()."""

    @pytest.mark.parametrize("backend", ["cpu-naive", "cpu", "cpu-simd"])
    def test_prints_product(self, operands, backend: str, capsys: pytest.CaptureFixture) -> None:
        """The formatted product goes to stdout and the exit status is 0."""
        assert main([*operands, "--backend", backend]) == 0
        captured = capsys.readouterr()
        assert captured.out == "19 22\n43 50\n"
        assert captured.err == ""

    def test_backend_from_environment(self, operands, monkeypatch, capsys) -> None:
        """GEMMKIT_BACKEND selects the backend when --backend is absent."""
        monkeypatch.setenv("GEMMKIT_BACKEND", "cpu-simd")
        assert main(list(operands)) == 0
        assert capsys.readouterr().out == "19 22\n43 50\n"

    def test_shape_mismatch(self, tmp_path, capsys) -> None:
        """Incompatible operands print one error line and exit 1."""
        lhs = tmp_path / "a.txt"
        lhs.write_text("1 2 3\n")
        assert main([str(lhs), str(lhs)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error: Cannot multiply 1x3 by 1x3")
        assert captured.err.count("\n") == 1

    def test_parse_error(self, tmp_path, capsys) -> None:
        """A malformed token reports its location and exits 1."""
        lhs = tmp_path / "a.txt"
        lhs.write_text("1 2\n3 x\n")
        assert main([str(lhs), str(lhs)]) == 1
        assert "row 1 col 1" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys) -> None:
        """An unreadable file exits 1."""
        assert main([str(tmp_path / "nope.txt"), str(tmp_path / "nope.txt")]) == 1
        assert capsys.readouterr().err.startswith("error: ")

    def test_gpu_backend_unsupported(self, operands, capsys) -> None:
        """The stub backend fails with a backend error and exit 1."""
        assert main([*operands, "--backend", "gpu"]) == 1
        assert "not supported" in capsys.readouterr().err

    def test_unknown_backend_in_environment(self, operands, monkeypatch, capsys) -> None:
        """An unknown GEMMKIT_BACKEND exits 2."""
        monkeypatch.setenv("GEMMKIT_BACKEND", "tpu")
        assert main(list(operands)) == 2
        assert "Unknown backend: tpu" in capsys.readouterr().err

    def test_missing_arguments(self) -> None:
        """argparse rejects a missing operand path."""
        with pytest.raises(SystemExit) as exc_info:
            main(["only_one.txt"])
        assert exc_info.value.code == 2

    def test_log_file(self, operands, tmp_path) -> None:
        """--log-file with DEBUG captures the tile plan of the product."""
        log_file = tmp_path / "run.log"
        assert main([*operands, "--backend", "cpu", "--log-level", "debug", "--log-file", str(log_file)]) == 0
        text = log_file.read_text()
        assert "cpu: gemm" in text
        assert "Tiles in K" in text
