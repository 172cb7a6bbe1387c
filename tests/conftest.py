import re

import matplotlib

matplotlib.use("Agg")

import pytest


def parse_c_array(text):
    """Return the integer elements between the braces of a C initializer."""
    body = text[text.index("{") + 1:text.rindex("}")]
    return [int(tok, 0) for tok in re.split(r"\s*,\s*", body.strip())]


@pytest.fixture
def parse():
    return parse_c_array
