import io

import main


def _run(monkeypatch, capsys, script, argv=("main.py",)):
    monkeypatch.setattr("sys.stdin", io.StringIO(script))
    code = main.main(list(argv))
    return code, capsys.readouterr().out


def test_set_get_del_scan(monkeypatch, capsys):
    code, out = _run(monkeypatch, capsys, "SET b 2\nset a hello world\nGET a\nGET zz\nDEL a\nDEL a\nSCAN\nEXIT\n")
    assert code == 0
    assert out == "OK\nOK\nhello world\n\n1\n0\nb 2\n"


def test_eof_exits_cleanly(monkeypatch, capsys):
    code, out = _run(monkeypatch, capsys, "SET k v\n")
    assert code == 0
    assert out == "OK\n"


def test_errors_are_reported_on_stdout(monkeypatch, capsys):
    code, out = _run(monkeypatch, capsys, "FOO\nSET onlykey\nGET\nDEL a b\nSCAN x\nSET 'unbalanced\n\nEXIT\n")
    assert code == 0
    assert out.splitlines() == [
        main.ERR_UNKNOWN_CMD,
        main.ERR_USAGE_SET,
        main.ERR_USAGE_GET,
        main.ERR_USAGE_DEL,
        main.ERR_USAGE_NOARGS,
        main.ERR_SYNTAX,
    ]


def test_int_keys_mode(monkeypatch, capsys):
    monkeypatch.setenv("BTREE_INT_KEYS", "1")
    code, out = _run(monkeypatch, capsys, "SET 10 a\nSET 9 b\nSCAN\nGET x\n")
    assert out.splitlines() == ["OK", "OK", "9 b", "10 a", "ERR key must be an integer, got 'x'"]


def test_degree_argument(monkeypatch, capsys):
    code, out = _run(monkeypatch, capsys, "SET a 1\nSET b 2\nSET c 3\nSTATS\nDUMP\n", argv=("main.py", "3"))
    lines = out.splitlines()
    assert lines[3].startswith("degree=3 height=2 ")
    assert lines[4:] == ["BTree(degree=3)", "Level 0: [b]", "Level 1: [a]   [c]"]


def test_invalid_degree_argument(monkeypatch, capsys):
    code, out = _run(monkeypatch, capsys, "", argv=("main.py", "2"))
    assert code == 2
    assert out == "ERR max branching degree must be >= 3, got 2\n"
