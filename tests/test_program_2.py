from pathlib import Path

from froggle.parser import parse_program
from froggle.session import Session

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_if_else(capsys):
    with open(EXAMPLES / 'program_2.frog', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    session = Session()
    session.execute(ast)
    out = capsys.readouterr().out.strip()
    assert out == '1'
