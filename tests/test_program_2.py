from pathlib import Path

from monkey.interpreter import run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_map_reduce(capsys):
    source = (EXAMPLES / 'program_2.monkey').read_text(encoding='utf-8')
    run_program(source)
    out_lines = capsys.readouterr().out.strip().split('\n')
    # push returns a new array; `numbers` itself is unchanged
    assert out_lines == [
        '[2, 4, 6, 8, 10]',
        '30',
        '15',
        '[1, 2, 3, 4, 5, 6]',
        '[1, 2, 3, 4, 5]',
    ]
