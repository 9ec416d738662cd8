from outmatch.tokens import describe_tokens, escape, marker, translate


def consumes(template, output):
    """True if the template line matches all of ``output``"""
    return translate(template).consume(output) == ''


def test_escape():
    assert escape('a.b') == r'a\.b'
    assert escape('$(N)') == r'\$\(N\)'
    assert escape('x]') == 'x]'
    assert marker('*') == r'\$\(\*\)'


def test_literal_line():
    line = 'a.b*c (x) [y] {z} ^$ | \\ ?+\n'
    assert consumes(line, line)
    assert not consumes(line, 'aXb*c (x) [y] {z} ^$ | \\ ?+\n')
    assert not consumes('abc\n', 'abc')


def test_integer():
    assert consumes('hello $(N) world\n', 'hello 42 world\n')
    assert consumes('$(N)\n', '0123456789\n')
    assert not consumes('$(N)\n', '12a\n')
    assert not consumes('$(N)\n', '\n')
    # only ASCII digits
    assert not consumes('$(N)\n', '٣\n')


def test_float():
    for value in ('3.14', '-0.5', '1e10', '+2.5E-3', '7', '.5'):
        assert consumes('$(FP)\n', value + '\n'), value
    assert not consumes('$(FP)\n', 'abc\n')
    assert not consumes('$(FP)\n', '1.\n')


def test_any_stays_on_its_line():
    pattern = translate('a$(*)\n')
    assert pattern.consume('abc\nd\n') == 'd\n'
    assert pattern.consume('a\n') == ''
    assert consumes('[$(*)] done\n', '[1] [2] done\n')


def test_string():
    assert consumes('$(S)\n', 'any text, with punctuation!\n')
    assert not consumes('$(S)\n', '\x01\n')
    assert not consumes('$(S)\n', '\n')


def test_hex():
    assert consumes('$(X)\n', 'deadBEEF01\n')
    assert not consumes('$(X)\n', 'xyz\n')
    assert consumes('$(XX)\n', '0x1f\n')
    assert not consumes('$(XX)\n', '1f\n')
    assert consumes('ptr=$(XX) len=$(X)\n', 'ptr=0x7ffd10 len=ff\n')


def test_whitespace():
    # a whitespace run, then exactly one non-newline character
    assert consumes('a$(W)b\n', 'a b\n')
    assert consumes('a$(W)b\n', 'a \t xb\n')
    assert not consumes('a$(W)b\n', 'ab\n')
    assert not consumes('a$(W)\n', 'a\n')


def test_non_whitespace():
    assert consumes('[$(nW)]\n', '[]\n')
    assert consumes('[$(nW)]\n', '[abc]\n')
    assert not consumes('[$(nW)]\n', '[a b]\n')


def test_dd():
    output = ('512+0 records in\n'
              '512+0 records out\n'
              '524288 bytes (524 kB) copied, 0.00179 s, 293 MB/s\n')
    assert consumes('$(DD)\n', output)
    assert not consumes('$(DD)\n', '512+0 records in\n')


def test_optional():
    pattern = translate('$(OPT)y\n')
    assert pattern.optional
    assert pattern.consume('y\n') == ''
    assert pattern.consume('z\n') is None
    assert not translate('y\n').optional


def test_optional_marker_applies_once():
    pattern = translate('$(OPT)$(OPT)\n')
    assert pattern.optional
    assert pattern.consume('$(OPT)\n') == ''


def test_unknown_token_is_literal():
    assert consumes('$(FOO)\n', '$(FOO)\n')
    assert not consumes('$(FOO)\n', 'x\n')
    assert consumes('$(n)\n', '$(n)\n')


def test_pattern_fields():
    pattern = translate('v$(N)\n')
    assert pattern.raw == 'v$(N)\n'
    assert pattern.source == 'v\\d+\n'
    assert pattern.regex.pattern == pattern.source


def test_describe_tokens():
    text = describe_tokens()
    for tok in ('$(N)', '$(FP)', '$(*)', '$(DD)', '$(OPT)'):
        assert tok in text
