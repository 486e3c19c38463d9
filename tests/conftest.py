import io

import pytest

from shortcoder import messages as m


@pytest.fixture
def console():
    """Captures shortcoder messages as plain text."""
    fh = io.StringIO()
    with m.withMessageState(fh=fh, printMode="plain", dieOn="nothing"):
        yield fh
