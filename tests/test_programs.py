from pathlib import Path

import pytest

from whilelang.context import State
from whilelang.interpreter import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'

EXPECTED = {
    'gcd': State({'a': 6, 'b': 6, 'gcd': 6}),
    'factorial': State({'acc': 120, 'n': 0}),
    'definitions': State({'x': 6, 'count': 3}),
    'count': State({'x': 101}),
}


@pytest.mark.parametrize('parser', ['descent', 'grammar'])
@pytest.mark.parametrize('name', sorted(EXPECTED))
def test_example_program(name, parser):
    state = run_file(str(EXAMPLES / f'{name}.while'), parser=parser)
    assert state == EXPECTED[name]
