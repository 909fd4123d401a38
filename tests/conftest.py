import pytest

from services import RecordBuilder
from helpers import YEAR, tsv


@pytest.fixture
def builder():
    return RecordBuilder(YEAR)


@pytest.fixture
def build(builder):
    def _build(*rows):
        return builder.build(tsv(*rows))
    return _build
