import io
import json
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from incigraph import cli  # noqa: E402


def _run(argv, stdin_text=""):
    args = cli._build_parser().parse_args(argv)
    out = io.StringIO()
    code = cli.run(args, stdin=io.StringIO(stdin_text), stdout=out)
    return code, out.getvalue()


class TestCli:
    def test_simple_demo_with_length(self):
        code, out = _run(["--demo", "simple", "--length", "3"])
        assert code == cli.EXIT_OK
        assert "Simple graph:" in out
        assert "A --(1)--> B" in out
        assert "Cycles of length 3:" in out
        assert "A -> B -> C" in out
        assert "A -> D -> C" in out

    def test_prompted_length(self):
        code, out = _run(["--no-print"], stdin_text="4\n")
        assert code == cli.EXIT_OK
        assert "Enter the desired cycle length" in out
        assert "A -> E -> D -> C" in out
        assert "Simple graph:" not in out

    def test_non_integer_reply_skips_search(self):
        code, out = _run(["--no-print"], stdin_text="many\n")
        assert code == cli.EXIT_OK
        assert "Cycles of length" not in out
        assert "No cycles" not in out

    def test_no_cycles_message(self):
        code, out = _run(["--demo", "complex", "--no-print", "-l", "1"])
        assert code == cli.EXIT_OK
        assert "No cycles of length 1 found." in out

    def test_matrix_file(self, tmpdir_fixture):
        path = tmpdir_fixture / "g.json"
        path.write_text(json.dumps({"matrix": [[0, 5], [2, 0]], "marks": ["p", "q"]}))
        code, out = _run(["--matrix", str(path), "-l", "2"])
        assert code == cli.EXIT_OK
        assert "A --(5)--> B" in out
        assert "A -> B" in out

    def test_matrix_file_without_marks(self, tmpdir_fixture):
        path = tmpdir_fixture / "g.json"
        path.write_text(json.dumps({"matrix": [[0, 1], [1, 0]]}))
        code, out = _run(["--matrix", str(path), "-l", "2", "--no-print"])
        assert code == cli.EXIT_OK
        assert "A -> B" in out

    def test_main_reports_graph_errors(self, tmpdir_fixture, capsys):
        path = tmpdir_fixture / "bad.json"
        path.write_text(json.dumps({"matrix": [[0, 1, 0], [1, 0, 0]]}))
        code = cli.main(["--matrix", str(path), "-l", "2"])
        assert code == cli.EXIT_ERROR
        assert "error" in capsys.readouterr().err

    def test_main_rejects_bad_length(self, capsys):
        code = cli.main(["--no-print", "-l", "0"])
        assert code == cli.EXIT_ERROR
        assert "length must be >= 1" in capsys.readouterr().err

    def test_main_reports_missing_file(self, tmpdir_fixture, capsys):
        code = cli.main(["--matrix", str(tmpdir_fixture / "absent.json"), "-l", "2"])
        assert code == cli.EXIT_ERROR
        assert "incigraph: error:" in capsys.readouterr().err

    def test_main_reports_malformed_json(self, tmpdir_fixture, capsys):
        path = tmpdir_fixture / "broken.json"
        path.write_text("{not json")
        assert cli.main(["--matrix", str(path), "-l", "2"]) == cli.EXIT_ERROR
        path.write_text(json.dumps({"marks": ["1"]}))
        assert cli.main(["--matrix", str(path), "-l", "2"]) == cli.EXIT_ERROR
        assert "'matrix' key" in capsys.readouterr().err
