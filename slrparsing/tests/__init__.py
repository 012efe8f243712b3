import os.path
import unittest

_TESTS = os.path.dirname(os.path.abspath(__file__))
_ROOT = os.path.dirname(os.path.dirname(_TESTS))


def suite() -> unittest.TestSuite:
    return unittest.defaultTestLoader.discover(
        _TESTS, pattern="test_*.py", top_level_dir=_ROOT
    )
