import doctest

import pytest

from csvdetect import dialect, encoding, fields, parse, rows


@pytest.mark.parametrize("module", [dialect, encoding, fields, parse, rows])
def test_docstring_examples(module):
    result = doctest.testmod(module)
    assert result.failed == 0
