import json

import pytest

from whilelang.__main__ import main


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return path


def test_run_prints_state(tmp_path, capsys):
    program = write(tmp_path, 'count.while', "x := 5; while x <= 100 x := x + 1\n")
    main([str(program)])
    assert capsys.readouterr().out.strip() == '[x -> 101]'


def test_run_with_grammar_parser(tmp_path, capsys):
    program = write(tmp_path, 'sum.while', "a := 2\nb := a * 3\n")
    main(['--parser', 'grammar', str(program)])
    assert capsys.readouterr().out.strip() == '[a -> 2, b -> 6]'


def test_syntax_error_is_annotated(tmp_path, capsys):
    program = write(tmp_path, 'bad.while', "x : 1\n")
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert 'Error: Lexing error: Unknown token (At 2-3)' in err
    assert '1 | x : 1\n      ^' in err


def test_runtime_error(tmp_path, capsys):
    program = write(tmp_path, 'bad.while', "if 1 then skip else skip\n")
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    assert 'Runtime error: Arithmetic conditional not allowed' in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit):
        main([str(tmp_path / 'nope.while')])
    assert 'not found' in capsys.readouterr().err


def test_emit_then_run_ast(tmp_path, capsys):
    program = write(tmp_path, 'defs.while', "step := [[x := x + 2]]\nstep\nstep\n")
    main(['--emit-ast', str(program)])
    out_path = tmp_path / 'defs.while.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    assert json.loads(out_path.read_text(encoding='utf-8'))['type'] == 'Comp'

    main(['--ast', str(out_path)])
    assert capsys.readouterr().out.strip() == '[x -> 4]'


def test_invalid_ast_file(tmp_path, capsys):
    ast_file = write(tmp_path, 'bad.ast.json', json.dumps({"type": "Print"}))
    with pytest.raises(SystemExit):
        main(['--ast', str(ast_file)])
    assert 'invalid AST file' in capsys.readouterr().err


def test_debug_file_written(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    program = write(tmp_path, 'one.while', "x := 1\n")
    main(['-vv', str(program)])
    assert capsys.readouterr().out.strip() == '[x -> 1]'
    assert 'assign x = 1' in (tmp_path / 'debug.txt').read_text(encoding='utf-8')
