import pytest

from absurdle.cli import (EXIT_INVALID, EXIT_NO_SOLUTION, EXIT_SOLVED, format_solution, main,
                          pattern_to_emoji)


def test_pattern_to_emoji():
    assert pattern_to_emoji('012') == '⬜🟨🟩'


def test_format_solution():
    text = format_solution([('abce', '2220'), ('abcd', '2222')], 'abcd', 0.0123)
    assert text.splitlines()[0] == 'A B C E   🟩🟩🟩⬜'
    assert 'Target word: ABCD' in text
    assert 'Solved in 2 steps!' in text
    assert '(12ms)' in text


def _dictionary(tmp_path, words):
    path = tmp_path / 'dictionary.txt'
    path.write_text('\n'.join(words) + '\n')
    return str(path)


def test_main_solved(tmp_path, capsys):
    path = _dictionary(tmp_path, ['ABCD', 'abce', 'wxyz', 'abcf'])
    assert main(['abcd', '--dictionary', path]) == EXIT_SOLVED
    assert 'Solved in 3 steps!' in capsys.readouterr().out


def test_main_no_solution(tmp_path, capsys):
    path = _dictionary(tmp_path, ['abcd', 'abce', 'wxyz', 'abcf'])
    argv = ['abcd', '--dictionary', path, '--threshold', '1', '--shortlist-size', '1']
    assert main(argv) == EXIT_NO_SOLUTION
    assert 'No valid solution found.' in capsys.readouterr().out


def test_main_invalid_target(tmp_path, capsys):
    path = _dictionary(tmp_path, ['ab', 'ba'])
    assert main(['abc', '--dictionary', path]) == EXIT_INVALID
    assert 'Invalid target word' in capsys.readouterr().err


def test_main_missing_dictionary(tmp_path):
    assert main(['abcd', '--dictionary', str(tmp_path / 'missing.txt')]) == EXIT_INVALID


def test_main_benchmark(tmp_path, capsys):
    path = _dictionary(tmp_path, ['abcd', 'abce', 'wxyz', 'abcf'])
    assert main(['abcd', '--dictionary', path, '--benchmark']) == EXIT_SOLVED
    assert 'BENCHMARK RESULTS' in capsys.readouterr().out


def test_main_benchmark_invalid_target(tmp_path):
    path = _dictionary(tmp_path, ['abcd', 'abce', 'wxyz', 'abcf'])
    assert main(['zzzz', '--dictionary', path, '--benchmark']) == EXIT_INVALID


@pytest.mark.parametrize('option', [
    ['--shortlist-size', '0'],
    ['--threshold', '-1'],
    ['--max-steps', '-5'],
    ['--timeout', '-1'],
])
def test_main_rejects_bad_options(tmp_path, option):
    path = _dictionary(tmp_path, ['abcd', 'abce', 'wxyz', 'abcf'])
    with pytest.raises(SystemExit) as info:
        main(['abcd', '--dictionary', path] + option)
    assert info.value.code == 2
