import pytest

from asciimorph.config import EngineSettings
from asciimorph.core.options import GeneratorOptions


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def options():
    return GeneratorOptions(width=24, height=10, character_set="blocks", density=0.3, seed="fixture")


@pytest.fixture
def three_frames():
    return ["a a\n a ", "b b\n b ", "c c\n c "]


@pytest.fixture
def assert_shape():
    def check(frame, width, height):
        rows = frame.split("\n")
        assert len(rows) == height
        assert all(len(r) == width for r in rows), [len(r) for r in rows]
    return check
