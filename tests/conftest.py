"""Root-level pytest fixtures for all tests.

wxPython is replaced by a mock when it is not importable so the service and
controller tests run headless. Saved cards, decks and settings go to a
temporary data directory.
"""

import os
import sys
import tempfile
from unittest import mock

os.environ.setdefault("SVE_TRACKER_HOME", tempfile.mkdtemp(prefix="sve_tracker_tests_"))

# Mock wx before any imports that might need it (for Linux/headless environments)
if "wx" not in sys.modules:
    try:
        import wx  # noqa: F401
    except ImportError:
        wx_mock = mock.MagicMock()
        wx_mock.Colour = mock.Mock(return_value=mock.MagicMock())
        # Results would otherwise be swallowed by a mocked CallAfter
        wx_mock.CallAfter = lambda callback, *args, **kwargs: callback(*args, **kwargs)
        sys.modules["wx"] = wx_mock
        sys.modules["wx.dataview"] = wx_mock.dataview
        sys.modules["wx.lib"] = wx_mock.lib
        sys.modules["wx.lib.agw"] = wx_mock.lib.agw
        sys.modules["wx.lib.agw.flatnotebook"] = wx_mock.lib.agw.flatnotebook

import pytest
from test_helpers import reset_all_globals


@pytest.fixture(autouse=True)
def reset_global_state():
    """Automatically reset all global service and repository instances after each test.

    This fixture ensures test isolation by resetting all singleton instances
    to None after each test completes, preventing state leakage between tests.
    """
    yield
    reset_all_globals()
